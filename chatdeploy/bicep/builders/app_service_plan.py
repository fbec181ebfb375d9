"""App Service plan module builder."""
from ..models import BicepModule
from .common import LOCATION, module_source, workload_tags
from ...manifest.schema import Manifest

class AppServicePlanBuilder:
    """Builds the module call for the Linux App Service plan."""
    
    symbol = "appServicePlan"
    
    def build(self, manifest: Manifest) -> BicepModule:
        is_production = manifest.deployment_settings.is_production
        return BicepModule(
            symbol=self.symbol,
            source=module_source(manifest, "host/appserviceplan.bicep"),
            parameters={
                "name": manifest.lookup_name("appServicePlan"),
                "location": LOCATION,
                "tags": workload_tags(manifest),
                "kind": "linux",
                "sku": {
                    "name": "P1v3" if is_production else "B1"
                },
                "zoneRedundant": is_production,
                "logAnalyticsWorkspaceId": manifest.log_analytics_workspace_id
            }
        )
