"""Azure OpenAI (cognitive services) module builder."""
from ..models import BicepModule
from ..networking import private_endpoint_settings, public_network_access
from ..resolver import ResolvedValues
from .common import LOCATION, module_source, workload_tags
from ...manifest.schema import Manifest

class CognitiveServicesBuilder:
    """Builds the module call for the OpenAI account and its model deployments."""
    
    symbol = "openAi"
    
    def build(self, manifest: Manifest, resolved: ResolvedValues) -> BicepModule:
        """Build the module parameters.
        
        Args:
            manifest: Deployment manifest.
            resolved: Derived values, supplying the model deployments.
            
        Returns:
            BicepModule: Module call producing the account name output.
        """
        isolated = manifest.deployment_settings.is_network_isolated
        
        return BicepModule(
            symbol=self.symbol,
            source=module_source(manifest, "ai/cognitiveservices.bicep"),
            parameters={
                "name": manifest.lookup_name("openAiService"),
                "location": LOCATION,
                "tags": workload_tags(manifest),
                "publicNetworkAccess": public_network_access(manifest),
                "networkAcls": {
                    "defaultAction": "Deny" if isolated else "Allow",
                    "bypass": manifest.network_acls_bypass
                },
                "sku": {
                    "name": manifest.open_ai_sku_name
                },
                "deployments": list(resolved.openai_deployments),
                "privateEndpointSettings": private_endpoint_settings(
                    manifest, "openAiServicePrivateEndpoint"
                )
            }
        )
