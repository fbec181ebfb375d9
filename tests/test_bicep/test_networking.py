"""Tests for private networking settings."""
import pytest

from chatdeploy.bicep.models import PrivateEndpointSettings
from chatdeploy.bicep.networking import (
    SPOKE_WEB_INBOUND_SUBNET,
    outbound_subnet_id,
    private_endpoint_settings,
    public_network_access,
)
from chatdeploy.errors import MissingKeyError
from chatdeploy.manifest.schema import Manifest
from conftest import ISOLATION

def _isolated(manifest_data, **overrides):
    return Manifest.model_validate(manifest_data(**{
        "deploymentSettings": {"isNetworkIsolated": True}, **ISOLATION, **overrides
    }))

def test_not_isolated(manifest_data):
    manifest = Manifest.model_validate(manifest_data())
    
    assert private_endpoint_settings(manifest, "searchServicePrivateEndpoint") is None
    assert public_network_access(manifest) == "Enabled"
    assert outbound_subnet_id(manifest) == ""

def test_isolated(manifest_data):
    manifest = _isolated(manifest_data)
    
    settings = private_endpoint_settings(manifest, "searchServicePrivateEndpoint")
    assert settings == PrivateEndpointSettings(
        dns_resource_group_name="rg-dns",
        name="pep-srch-abc123",
        resource_group_name="rg-spoke",
        subnet_id="/subnets/primary"
    )
    assert public_network_access(manifest) == "Disabled"
    assert outbound_subnet_id(manifest) == "/subnets/web-out"

def test_isolated_inbound_subnet(manifest_data):
    manifest = _isolated(manifest_data)
    settings = private_endpoint_settings(manifest, "appServicePrivateEndpoint", SPOKE_WEB_INBOUND_SUBNET)
    assert settings.subnet_id == "/subnets/web-in"

def test_isolated_missing_subnet_fails(manifest_data):
    manifest = _isolated(manifest_data, subnets={"snet-web-in": "/subnets/web-in"})
    
    with pytest.raises(MissingKeyError) as excinfo:
        private_endpoint_settings(manifest, "searchServicePrivateEndpoint")
    assert excinfo.value.mapping == "subnets"
    assert excinfo.value.key == "snet-primary"

def test_isolated_missing_endpoint_name_fails(manifest_data):
    manifest = _isolated(manifest_data)
    with pytest.raises(MissingKeyError):
        private_endpoint_settings(manifest, "keyVaultPrivateEndpoint")

def test_missing_subnet_ignored_when_not_isolated(manifest_data):
    manifest = Manifest.model_validate(manifest_data(resourceNames={"spokePrimarySubnet": "absent"}))
    assert private_endpoint_settings(manifest, "searchServicePrivateEndpoint") is None
