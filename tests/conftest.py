"""Shared manifest fixtures."""
import copy
import pytest
import yaml

SUBSCRIPTION_ID = "00000000-0000-0000-0000-000000000001"
PRINCIPAL_ID = "11111111-2222-3333-4444-555555555555"

BASE_MANIFEST = {
    "metadata": {"name": "chat", "version": "1.0"},
    "subscription": SUBSCRIPTION_ID,
    "resourceGroup": {"name": "rg-chat-dev"},
    "location": "eastus2",
    "deploymentSettings": {
        "resourceToken": "abc123",
        "tags": {"azd-env-name": "dev"},
        "workloadTags": {"workload": "chat"},
        "isProduction": False,
        "isNetworkIsolated": False,
        "principalId": PRINCIPAL_ID,
        "principalType": "User",
    },
    "resourceNames": {
        "openAiService": "oai-abc123",
        "openAiServicePrivateEndpoint": "pep-oai-abc123",
        "searchService": "srch-abc123",
        "searchServicePrivateEndpoint": "pep-srch-abc123",
        "appServicePlan": "asp-abc123",
        "appService": "app-abc123",
        "appServicePrivateEndpoint": "pep-app-abc123",
        "commonAppServicePlan": "asp-common",
        "spokeResourceGroup": "rg-spoke",
        "spokePrimarySubnet": "snet-primary",
        "spokeWebInboundSubnet": "snet-web-in",
        "spokeWebOutboundSubnet": "snet-web-out",
    },
    "managedIdentityName": "id-abc123",
    "logAnalyticsWorkspaceId": "/subscriptions/x/resourceGroups/rg/providers/Microsoft.OperationalInsights/workspaces/log",
    "applicationInsightsId": "/subscriptions/x/resourceGroups/rg/providers/Microsoft.Insights/components/appi",
    "searchIndexName": "docs",
    "storageAccountName": "stabc123",
    "searchServiceSkuName": "free",
    "searchServiceSemanticRankerLevel": "free",
}

ISOLATION = {
    "subnets": {
        "snet-primary": "/subnets/primary",
        "snet-web-in": "/subnets/web-in",
        "snet-web-out": "/subnets/web-out",
    },
    "dnsResourceGroupName": "rg-dns",
}

def _merge(base, overrides):
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base

@pytest.fixture
def manifest_data():
    """Build manifest data, deep-merging any overrides into the base."""
    def build(**overrides):
        return _merge(copy.deepcopy(BASE_MANIFEST), copy.deepcopy(overrides))
    return build

@pytest.fixture
def manifest_file(tmp_path, manifest_data):
    """Write a manifest to tmp_path and return its path."""
    def write(**overrides):
        path = tmp_path / "infra.yaml"
        path.write_text(yaml.safe_dump(manifest_data(**overrides), sort_keys=False))
        return path
    return write
