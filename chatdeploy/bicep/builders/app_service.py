"""App Service module builder and its application settings."""
from typing import Any, Dict, Optional

from ..models import BicepExpression, BicepModule, ModuleOutput
from ..networking import (
    SPOKE_WEB_INBOUND_SUBNET,
    outbound_subnet_id,
    private_endpoint_settings,
    public_network_access,
)
from ..resolver import ResolvedValues
from .app_service_plan import AppServicePlanBuilder
from .cognitive_services import CognitiveServicesBuilder
from .common import LOCATION, module_source, workload_tags
from .search_service import SearchServiceBuilder
from ...manifest.schema import Manifest, SemanticRankerLevel

SERVICE_NAME = "backend"

# Integrations the app supports but this deployment leaves switched off.
DISABLED_FEATURE_SETTINGS: Dict[str, str] = {
    "AZURE_SPEECH_INPUT_ENABLED": "false",
    "AZURE_SPEECH_OUTPUT_ENABLED": "false",
    "AZURE_SPEECH_SERVICE_NAME": "",
    "AZURE_SPEECH_SERVICE_REGION": "",
    "AZURE_COMPUTER_VISION_ENDPOINT": "",
    "AZURE_OPENAI_GPT4V_DEPLOYMENT": "",
    "AZURE_OPENAI_CUSTOM_ENDPOINT": "",
    "AZURE_OPENAI_CUSTOM_KEY": "",
}

def app_settings(manifest: Manifest, resolved: ResolvedValues) -> Dict[str, Any]:
    """Environment variables for the chat backend."""
    settings: Dict[str, Any] = {
        "AZURE_SEARCH_SERVICE": ModuleOutput(SearchServiceBuilder.symbol, "name"),
        "AZURE_SEARCH_INDEX": manifest.search_index_name,
        "AZURE_SEARCH_USE_SEMANTIC_SEARCH": str(
            resolved.semantic_ranker_level != SemanticRankerLevel.DISABLED
        ).lower(),
        "AZURE_OPENAI_RESOURCE": ModuleOutput(CognitiveServicesBuilder.symbol, "name"),
        "AZURE_OPENAI_MODEL": resolved.chat_gpt.deployment_name,
        "AZURE_OPENAI_MODEL_NAME": resolved.chat_gpt.model_name,
        "AZURE_OPENAI_EMBEDDING_NAME": resolved.embedding.deployment_name,
        "AZURE_OPENAI_EMBEDDING_MODEL": resolved.embedding.model_name,
        "AZURE_OPENAI_EMBEDDING_DIMENSIONS": str(resolved.embedding.dimensions),
        "AZURE_CLIENT_ID": BicepExpression("managedIdentity.properties.clientId"),
        "AZURE_STORAGE_ACCOUNT": manifest.storage_account_name,
        "AZURE_STORAGE_CONTAINER": manifest.storage_container_name,
        "APPLICATIONINSIGHTS_CONNECTION_STRING": BicepExpression(
            f"reference('{manifest.application_insights_id}', '2020-02-02').ConnectionString"
        ),
    }
    for key, value in DISABLED_FEATURE_SETTINGS.items():
        if key in settings:
            raise ValueError(f"Duplicate app setting: {key}")
        settings[key] = value
    return settings

class AppServiceBuilder:
    """Builds the module call for the chat web app."""
    
    symbol = "appService"
    
    def build(
        self, manifest: Manifest, resolved: ResolvedValues, plan_created: Optional[bool] = None
    ) -> BicepModule:
        """Build the module parameters.
        
        Args:
            manifest: Deployment manifest.
            resolved: Derived values used by the app settings.
            plan_created: Whether this template creates the plan. Defaults to
                the inverse of useCommonAppServicePlan.
                
        Returns:
            BicepModule: Module call producing the service name and endpoint.
        """
        if plan_created is None:
            plan_created = not manifest.use_common_app_service_plan
        if plan_created:
            plan_name = ModuleOutput(AppServicePlanBuilder.symbol, "name")
        else:
            plan_name = manifest.lookup_name("commonAppServicePlan")
        
        return BicepModule(
            symbol=self.symbol,
            source=module_source(manifest, "host/appservice.bicep"),
            parameters={
                "name": manifest.lookup_name("appService"),
                "location": LOCATION,
                "tags": {**workload_tags(manifest), "azd-service-name": SERVICE_NAME},
                "siteConfig": {
                    "linuxFxVersion": f"PYTHON|{manifest.app_service_python_version}",
                    "appCommandLine": manifest.app_service_command_line
                },
                "appServicePlanName": plan_name,
                "managedIdentityId": BicepExpression("managedIdentity.id"),
                "outboundSubnetId": outbound_subnet_id(manifest),
                "appSettings": app_settings(manifest, resolved),
                "diagnosticSettings": manifest.diagnostic_settings.model_dump(by_alias=True),
                "publicNetworkAccess": public_network_access(manifest),
                "privateEndpointSettings": private_endpoint_settings(
                    manifest, "appServicePrivateEndpoint", SPOKE_WEB_INBOUND_SUBNET
                )
            }
        )
