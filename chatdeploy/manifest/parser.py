"""YAML manifest parser."""
import yaml

from .schema import Manifest
from ..errors import ManifestError

class ManifestParser:
    """Parser for YAML deployment manifests."""
    
    @staticmethod
    def load(file_path: str) -> Manifest:
        """Load and validate a YAML manifest file.
        
        Args:
            file_path: Path to the YAML manifest file.
            
        Returns:
            Manifest: Validated manifest object.
            
        Raises:
            FileNotFoundError: If the manifest file doesn't exist.
            ManifestError: If the document is not a mapping.
            ValidationError: If the manifest is invalid.
            yaml.YAMLError: If the YAML is malformed.
        """
        with open(file_path, 'r') as f:
            data = yaml.safe_load(f)
        if not isinstance(data, dict):
            raise ManifestError(f"Manifest {file_path} must be a mapping")
        return Manifest.model_validate(data)
