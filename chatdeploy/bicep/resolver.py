"""Derived values resolved once from the manifest parameters."""
from dataclasses import dataclass
from typing import List, Tuple

from .models import ModelSpec, OpenAiDeployment
from ..manifest.schema import Manifest, SearchServiceSku, SemanticRankerLevel

DEFAULT_CHAT_GPT_VERSION = "2024-05-13"
DEFAULT_EMBEDDING_VERSION = "1"

@dataclass(frozen=True)
class ResolvedValues:
    """Values computed from parameters before any module is built."""
    semantic_ranker_level: SemanticRankerLevel
    chat_gpt: ModelSpec
    embedding: ModelSpec
    openai_deployments: List[OpenAiDeployment]

def resolve_semantic_ranker_level(
    sku: SearchServiceSku, requested: SemanticRankerLevel
) -> SemanticRankerLevel:
    """The free search tier has no semantic ranker."""
    if sku == SearchServiceSku.FREE:
        return SemanticRankerLevel.DISABLED
    return requested

def resolve_deployment_version(override: str, fallback: str) -> str:
    return override if override else fallback

def build_model_specs(manifest: Manifest) -> Tuple[ModelSpec, ModelSpec]:
    """Build the chat and embedding model specs.
    
    Returns:
        Tuple[ModelSpec, ModelSpec]: (chat, embedding).
    """
    chat_gpt = ModelSpec(
        model_name=manifest.chat_gpt_model_name,
        deployment_name=manifest.chat_gpt_deployment_name,
        deployment_version=resolve_deployment_version(
            manifest.chat_gpt_deployment_version, DEFAULT_CHAT_GPT_VERSION
        ),
        capacity=manifest.chat_gpt_deployment_capacity
    )
    embedding = ModelSpec(
        model_name=manifest.embedding_model_name,
        deployment_name=manifest.embedding_deployment_name,
        deployment_version=resolve_deployment_version(
            manifest.embedding_deployment_version, DEFAULT_EMBEDDING_VERSION
        ),
        capacity=manifest.embedding_deployment_capacity,
        dimensions=manifest.embedding_dimensions
    )
    return chat_gpt, embedding

def build_openai_deployments(chat_gpt: ModelSpec, embedding: ModelSpec) -> List[OpenAiDeployment]:
    """Deployment descriptors in the order the cognitive services module creates them."""
    return [
        OpenAiDeployment(
            name=spec.deployment_name,
            model_name=spec.model_name,
            model_version=spec.deployment_version,
            sku_capacity=spec.capacity
        )
        for spec in (chat_gpt, embedding)
    ]

def resolve_values(manifest: Manifest) -> ResolvedValues:
    chat_gpt, embedding = build_model_specs(manifest)
    return ResolvedValues(
        semantic_ranker_level=resolve_semantic_ranker_level(
            manifest.search_service_sku_name,
            manifest.search_service_semantic_ranker_level
        ),
        chat_gpt=chat_gpt,
        embedding=embedding,
        openai_deployments=build_openai_deployments(chat_gpt, embedding)
    )
