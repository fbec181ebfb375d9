"""Bicep template generator."""
import json
import subprocess
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
from jinja2 import BaseLoader, Environment

from .composition import Composition, compose
from .serializer import to_bicep
from ..manifest.parser import ManifestParser

MANAGED_IDENTITY_API_VERSION = "2023-01-31"
ROLE_ASSIGNMENT_API_VERSION = "2022-04-01"

TEMPLATES = {
    "main": """// {{ name }} {{ version }}, generated by chatdeploy
targetScope = 'resourceGroup'

param location string = resourceGroup().location

resource managedIdentity 'Microsoft.ManagedIdentity/userAssignedIdentities@{{ identity_api_version }}' existing = {
  name: {{ managed_identity_name | bicep }}
}

{% for module in modules %}
module {{ module.symbol }} {{ module.source | bicep }} = {
  name: {{ module.deployment_name | bicep }}
  params: {{ params[module.symbol] | bicep(1) }}
}

{% endfor %}
{% for assignment in role_assignments %}
resource {{ assignment.symbol }} 'Microsoft.Authorization/roleAssignments@{{ role_api_version }}' = {
  name: {{ assignment.name | bicep }}
  properties: {
    principalId: {{ assignment.principal_id | bicep(2) }}
    principalType: {{ assignment.principal_type | bicep }}
    roleDefinitionId: {{ assignment.role_definition_id | bicep }}
  }
}

{% endfor %}
""",
}

class BicepGenerator:
    """Generates the chat deployment Bicep template from a YAML manifest."""
    
    def __init__(self, manifest_path: str, output_dir: Optional[str] = None, debug: bool = False):
        """Initialize the generator.
        
        Args:
            manifest_path: Path to the YAML manifest file.
            output_dir: Directory for generated Bicep files.
            debug: If True, print verbose debug information.
        """
        self.manifest_path = manifest_path
        self.manifest = ManifestParser.load(manifest_path)
        self.output_dir = output_dir or Path(manifest_path).parent
        self.debug = debug
        self.subscription_id = self.manifest.subscription or self._get_default_subscription()
        
        self.jinja_env = Environment(
            loader=BaseLoader(),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True
        )
        self.jinja_env.filters["bicep"] = to_bicep
    
    def _get_default_subscription(self) -> str:
        """Get the default subscription ID from Azure CLI.
        
        Returns:
            str: Azure subscription ID.
            
        Raises:
            subprocess.CalledProcessError: If Azure CLI command fails.
        """
        cmd = ["az", "account", "show", "--query", "id", "-o", "tsv"]
        
        if self.debug:
            print(f"Debug: Running command: {' '.join(cmd)}")
            
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=True
        )
        
        subscription_id = result.stdout.strip()
        
        if self.debug:
            print(f"Debug: Using subscription ID: {subscription_id}")
            
        return subscription_id
    
    def compose(self) -> Composition:
        """Resolve derived values and build the ordered module graph."""
        return compose(self.manifest, self.subscription_id, debug=self.debug)
    
    def generate(self) -> Tuple[str, str]:
        """Generate Bicep template and parameters file.
        
        Returns:
            Tuple[str, str]: Paths to the generated Bicep and parameters files.
        """
        if self.debug:
            print(f"Debug: Generating Bicep files from {self.manifest_path}")
            print(f"Debug: Output directory: {self.output_dir}")
        
        composition = self.compose()
        
        Path(self.output_dir).mkdir(parents=True, exist_ok=True)
        main_bicep_path = Path(self.output_dir) / "main.bicep"
        params_path = Path(self.output_dir) / "main.parameters.json"
        
        main_bicep_path.write_text(self.render_template(composition))
        params_path.write_text(self.render_parameters())
        
        if self.debug:
            print(f"Debug: Main Bicep file written to {main_bicep_path}")
            print(f"Debug: Parameters file written to {params_path}")
            
        return str(main_bicep_path), str(params_path)
    
    def render_template(self, composition: Composition) -> str:
        """Render main.bicep for a composition.
        
        Module parameters that are None (such as private endpoint settings on
        a deployment without network isolation) are left out so the module's
        own default applies.
        """
        params: Dict[str, Dict[str, Any]] = {
            module.symbol: {k: v for k, v in module.parameters.items() if v is not None}
            for module in composition.modules
        }
        template = self.jinja_env.from_string(TEMPLATES["main"])
        return template.render(
            name=self.manifest.metadata.name,
            version=self.manifest.metadata.version,
            identity_api_version=MANAGED_IDENTITY_API_VERSION,
            role_api_version=ROLE_ASSIGNMENT_API_VERSION,
            managed_identity_name=self.manifest.managed_identity_name,
            modules=composition.modules,
            params=params,
            role_assignments=composition.role_assignments
        )
    
    def render_parameters(self) -> str:
        """Render the deployment parameters file."""
        parameters = {
            "$schema": "https://schema.management.azure.com/schemas/2019-04-01/deploymentParameters.json#",
            "contentVersion": "1.0.0.0",
            "parameters": {
                "location": {
                    "value": self.manifest.location
                }
            }
        }
        return json.dumps(parameters, indent=2) + "\n"
