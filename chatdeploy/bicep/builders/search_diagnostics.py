"""Search diagnostic settings module builder."""
from ..models import BicepModule, ModuleOutput
from .common import module_source
from .search_service import SearchServiceBuilder
from ...manifest.schema import Manifest

class SearchDiagnosticsBuilder:
    """Sends search service logs to the Log Analytics workspace."""
    
    symbol = "searchDiagnostics"
    
    def build(self, manifest: Manifest) -> BicepModule:
        return BicepModule(
            symbol=self.symbol,
            source=module_source(manifest, "search/search-diagnostics.bicep"),
            parameters={
                "searchServiceName": ModuleOutput(SearchServiceBuilder.symbol, "name"),
                "workspaceId": manifest.log_analytics_workspace_id
            }
        )
