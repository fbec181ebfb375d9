"""Azure AI Search service module builder."""
from ..models import BicepModule
from ..networking import private_endpoint_settings, public_network_access
from ..resolver import ResolvedValues
from .common import LOCATION, module_source, workload_tags
from ...manifest.schema import Manifest

class SearchServiceBuilder:
    """Builds the module call for the search service."""
    
    symbol = "searchService"
    
    def build(self, manifest: Manifest, resolved: ResolvedValues) -> BicepModule:
        return BicepModule(
            symbol=self.symbol,
            source=module_source(manifest, "search/search-services.bicep"),
            parameters={
                "name": manifest.lookup_name("searchService"),
                "location": LOCATION,
                "tags": workload_tags(manifest),
                "authOptions": {
                    "aadOrApiKey": {
                        "aadAuthFailureMode": "http401WithBearerChallenge"
                    }
                },
                "sku": {
                    "name": manifest.search_service_sku_name
                },
                "semanticSearch": resolved.semantic_ranker_level,
                "publicNetworkAccess": public_network_access(manifest),
                "privateEndpointSettings": private_endpoint_settings(
                    manifest, "searchServicePrivateEndpoint"
                )
            }
        )
