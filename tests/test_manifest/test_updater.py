"""Tests for manifest updater."""
from unittest.mock import patch

import pytest
import yaml
from pydantic import ValidationError

from chatdeploy.manifest.parser import ManifestParser
from chatdeploy.manifest.schema import Manifest
from chatdeploy.manifest.updater import ManifestUpdater

def test_update_field(manifest_file):
    path = manifest_file()
    ManifestUpdater.update_field(str(path), "deploymentSettings.isProduction", True)
    
    data = yaml.safe_load(path.read_text())
    assert data["deploymentSettings"]["isProduction"] is True
    # Key order is preserved
    assert list(data)[0] == "metadata"

def test_update_field_invalid_path(manifest_file):
    path = manifest_file()
    with pytest.raises(KeyError):
        ManifestUpdater.update_field(str(path), "deploymentSettings.nope", True)
    with pytest.raises(KeyError):
        ManifestUpdater.update_field(str(path), "missing.isProduction", True)

def test_version_string_stays_a_string(manifest_file):
    path = manifest_file(chatGptDeploymentVersion="")
    written = ManifestUpdater.update_field_from_string(str(path), "chatGptDeploymentVersion", "2024-08-06")
    
    assert written == "2024-08-06"
    manifest = ManifestParser.load(str(path))
    assert manifest.chat_gpt_deployment_version == "2024-08-06"

def test_boolean_and_integer_fields(manifest_file):
    path = manifest_file(chatGptDeploymentCapacity=10)
    ManifestUpdater.update_field_from_string(str(path), "deploymentSettings.isNetworkIsolated", "yes")
    ManifestUpdater.update_field_from_string(str(path), "chatGptDeploymentCapacity", "30")
    
    data = yaml.safe_load(path.read_text())
    assert data["deploymentSettings"]["isNetworkIsolated"] is True
    assert data["chatGptDeploymentCapacity"] == 30

def test_invalid_boolean(manifest_file):
    path = manifest_file()
    with pytest.raises(ValueError):
        ManifestUpdater.update_field_from_string(str(path), "deploymentSettings.isProduction", "maybe")

def test_failed_validation_keeps_file(manifest_file):
    path = manifest_file()
    before = path.read_text()
    
    def reject(data):
        raise ValueError("rejected")
    
    with pytest.raises(ValueError):
        ManifestUpdater.update_field(str(path), "searchIndexName", "other", validate=reject)
    assert path.read_text() == before

def test_from_string_validates_before_writing(manifest_file):
    path = manifest_file()
    before = path.read_text()
    
    with pytest.raises(ValidationError):
        ManifestUpdater.update_field_from_string(
            str(path), "searchServiceSkuName", "bogus", validate=Manifest.model_validate
        )
    assert path.read_text() == before

def test_from_string_writes_through_update_field(manifest_file):
    path = manifest_file()
    with patch.object(ManifestUpdater, "update_field") as mock_update:
        ManifestUpdater.update_field_from_string(str(path), "deploymentSettings.isProduction", "true")
    
    mock_update.assert_called_once_with(
        str(path), "deploymentSettings.isProduction", True, validate=None
    )
