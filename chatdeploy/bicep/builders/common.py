"""Helpers shared by the module builders."""
from typing import Dict

from ..models import BicepExpression
from ...manifest.schema import Manifest

def workload_tags(manifest: Manifest) -> Dict[str, str]:
    """Environment tags merged with workload tags; workload tags win."""
    settings = manifest.deployment_settings
    return {**settings.tags, **settings.workload_tags}

def module_source(manifest: Manifest, relative_path: str) -> str:
    root = manifest.modules_path.rstrip("/")
    return f"./{root}/{relative_path}"

# Resolved by the engine from the template's location parameter.
LOCATION = BicepExpression("location")
