"""Tests for derived-value resolution."""
import pytest

from chatdeploy.bicep.resolver import (
    DEFAULT_CHAT_GPT_VERSION,
    DEFAULT_EMBEDDING_VERSION,
    resolve_deployment_version,
    resolve_semantic_ranker_level,
    resolve_values,
)
from chatdeploy.manifest.schema import Manifest, SearchServiceSku, SemanticRankerLevel

@pytest.mark.parametrize("requested", list(SemanticRankerLevel))
def test_free_tier_disables_semantic_ranker(requested):
    assert resolve_semantic_ranker_level(SearchServiceSku.FREE, requested) == SemanticRankerLevel.DISABLED

@pytest.mark.parametrize("sku", [s for s in SearchServiceSku if s != SearchServiceSku.FREE])
@pytest.mark.parametrize("requested", list(SemanticRankerLevel))
def test_paid_tier_passes_requested_level(sku, requested):
    assert resolve_semantic_ranker_level(sku, requested) == requested

def test_deployment_version_override():
    assert resolve_deployment_version("2024-08-06", DEFAULT_CHAT_GPT_VERSION) == "2024-08-06"
    assert resolve_deployment_version("", DEFAULT_CHAT_GPT_VERSION) == "2024-05-13"
    assert resolve_deployment_version("", DEFAULT_EMBEDDING_VERSION) == "1"

def test_resolve_values_defaults(manifest_data):
    resolved = resolve_values(Manifest.model_validate(manifest_data()))
    
    assert resolved.semantic_ranker_level == SemanticRankerLevel.DISABLED
    assert resolved.chat_gpt.deployment_version == "2024-05-13"
    assert resolved.embedding.deployment_version == "1"
    assert resolved.embedding.dimensions == 1536
    assert resolved.chat_gpt.dimensions is None

def test_resolve_values_overrides(manifest_data):
    manifest = Manifest.model_validate(manifest_data(
        searchServiceSkuName="standard",
        searchServiceSemanticRankerLevel="standard",
        chatGptDeploymentVersion="2024-08-06",
        embeddingDeploymentVersion="2",
        chatGptDeploymentCapacity=40,
    ))
    resolved = resolve_values(manifest)
    
    assert resolved.semantic_ranker_level == SemanticRankerLevel.STANDARD
    assert resolved.chat_gpt.deployment_version == "2024-08-06"
    assert resolved.embedding.deployment_version == "2"
    assert resolved.chat_gpt.capacity == 40

def test_openai_deployments(manifest_data):
    resolved = resolve_values(Manifest.model_validate(manifest_data()))
    chat, embedding = resolved.openai_deployments
    
    assert chat.to_bicep() == {
        "name": "chat",
        "model": {"format": "OpenAI", "name": "gpt-4o", "version": "2024-05-13"},
        "sku": {"name": "Standard", "capacity": 10},
    }
    assert embedding.name == "embedding"
    assert embedding.model_name == "text-embedding-ada-002"
    assert embedding.model_version == "1"
