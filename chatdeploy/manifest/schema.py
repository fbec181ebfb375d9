"""Pydantic models for manifest validation."""
from datetime import date
from enum import Enum
from typing import Annotated, Any, Dict, Optional
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..errors import MissingKeyError

class ManifestModel(BaseModel):
    """Base model accepting camelCase manifest keys or snake_case names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

def version_as_string(value: Any) -> Any:
    """YAML reads unquoted 2 or 2024-08-06 as int or date; versions are strings."""
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value

Version = Annotated[str, BeforeValidator(version_as_string)]

class SearchServiceSku(str, Enum):
    """Search service pricing tiers."""
    FREE = "free"
    BASIC = "basic"
    STANDARD = "standard"
    STANDARD2 = "standard2"
    STANDARD3 = "standard3"
    STORAGE_OPTIMIZED_L1 = "storage_optimized_l1"
    STORAGE_OPTIMIZED_L2 = "storage_optimized_l2"

class SemanticRankerLevel(str, Enum):
    """Semantic ranker availability on the search service."""
    DISABLED = "disabled"
    FREE = "free"
    STANDARD = "standard"

class NetworkAclsBypass(str, Enum):
    """Traffic allowed through the cognitive services firewall."""
    NONE = "None"
    AZURE_SERVICES = "AzureServices"

class PrincipalType(str, Enum):
    """Security principal kinds accepted by role assignments."""
    USER = "User"
    SERVICE_PRINCIPAL = "ServicePrincipal"
    GROUP = "Group"

class DeploymentSettings(ManifestModel):
    """Environment identity shared by every resource in the deployment."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    resource_token: str
    tags: Dict[str, str] = Field(default_factory=dict)
    workload_tags: Dict[str, str] = Field(default_factory=dict)
    is_production: bool = False
    is_network_isolated: bool = False
    principal_id: str
    principal_type: PrincipalType = PrincipalType.USER

class DiagnosticSettings(ManifestModel):
    """Diagnostic log and metric retention for the app service."""
    log_retention_in_days: int = 3
    metric_retention_in_days: int = 3
    enable_logs: bool = True
    enable_metrics: bool = True

class ResourceGroup(ManifestModel):
    """Resource group configuration."""
    name: str

class Metadata(ManifestModel):
    """Manifest metadata."""
    name: str
    description: Optional[str] = None
    version: Version

class Manifest(ManifestModel):
    """Root manifest schema."""
    metadata: Metadata
    subscription: Optional[str] = None
    resource_group: ResourceGroup
    location: str
    modules_path: str = "core"

    deployment_settings: DeploymentSettings
    resource_names: Dict[str, str]
    diagnostic_settings: DiagnosticSettings = Field(default_factory=DiagnosticSettings)
    subnets: Dict[str, str] = Field(default_factory=dict)
    dns_resource_group_name: str = ""

    managed_identity_name: str
    log_analytics_workspace_id: str
    application_insights_id: str
    search_index_name: str = "index"
    storage_account_name: str = ""
    storage_container_name: str = "content"
    use_common_app_service_plan: bool = False

    search_service_sku_name: SearchServiceSku = SearchServiceSku.STANDARD
    search_service_semantic_ranker_level: SemanticRankerLevel = SemanticRankerLevel.FREE
    open_ai_sku_name: str = "S0"
    network_acls_bypass: NetworkAclsBypass = NetworkAclsBypass.AZURE_SERVICES

    chat_gpt_model_name: str = "gpt-4o"
    chat_gpt_deployment_name: str = "chat"
    chat_gpt_deployment_version: Version = ""
    chat_gpt_deployment_capacity: int = 10
    embedding_model_name: str = "text-embedding-ada-002"
    embedding_deployment_name: str = "embedding"
    embedding_deployment_version: Version = ""
    embedding_deployment_capacity: int = 10
    embedding_dimensions: int = 1536

    app_service_python_version: str = "3.11"
    app_service_command_line: str = "python3 -m gunicorn app:app"

    def lookup_name(self, key: str) -> str:
        """Return the concrete name for a logical resource role.

        Raises:
            MissingKeyError: If the role has no entry in resourceNames.
        """
        if key not in self.resource_names:
            raise MissingKeyError("resourceNames", key)
        return self.resource_names[key]

    def lookup_subnet(self, name_key: str) -> str:
        """Return the subnet id for the subnet named by resourceNames[name_key].

        Raises:
            MissingKeyError: If either the name or the subnet is absent.
        """
        subnet_name = self.lookup_name(name_key)
        if subnet_name not in self.subnets:
            raise MissingKeyError("subnets", subnet_name)
        return self.subnets[subnet_name]

