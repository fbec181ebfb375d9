"""YAML manifest updater."""
import yaml
from typing import Any, Callable, Dict, Optional, Tuple

class ManifestUpdater:
    """Updates YAML manifest files in-place."""

    @staticmethod
    def _load(file_path: str) -> Dict:
        with open(file_path, 'r') as f:
            return yaml.safe_load(f)

    @staticmethod
    def _navigate(data: Dict, field_path: str) -> Tuple[Dict, str]:
        """Return the mapping holding the field and the field's own key."""
        parts = field_path.split('.')
        current = data
        for part in parts[:-1]:
            if not isinstance(current, dict) or part not in current:
                raise KeyError(f"Field path '{field_path}' is invalid at '{part}'")
            current = current[part]

        if not isinstance(current, dict) or parts[-1] not in current:
            raise KeyError(f"Field path '{field_path}' is invalid at '{parts[-1]}'")
        return current, parts[-1]

    @staticmethod
    def update_field(
        file_path: str,
        field_path: str,
        value: Any,
        validate: Optional[Callable[[Dict], Any]] = None
    ) -> None:
        """Update an existing field in the YAML manifest using dot notation.

        Args:
            file_path: Path to the YAML manifest file.
            field_path: Dot-separated path to the field (e.g., "deploymentSettings.isProduction").
            value: New value to set.
            validate: Called with the edited document before it is written;
                if it raises, the file is left untouched.

        Raises:
            FileNotFoundError: If the manifest file doesn't exist.
            KeyError: If the field path is invalid.
            yaml.YAMLError: If the YAML is malformed.
        """
        data = ManifestUpdater._load(file_path)

        parent, key = ManifestUpdater._navigate(data, field_path)
        parent[key] = value

        if validate is not None:
            validate(data)

        # Write back to file, preserving key order
        with open(file_path, 'w') as f:
            yaml.dump(data, f, sort_keys=False)

    @staticmethod
    def parse_like(current: Any, raw: str, field_path: str) -> Any:
        """Convert command-line text to the type of the field's current value.

        Booleans accept true/false/yes/no/1/0 and integers are parsed; every
        other field is kept as a string so values such as "2024-05-13"
        are not reinterpreted as dates.
        """
        if isinstance(current, bool):
            lowered = raw.strip().lower()
            if lowered not in ("true", "false", "yes", "no", "1", "0"):
                raise ValueError(f"Field '{field_path}' expects a boolean, got '{raw}'")
            return lowered in ("true", "yes", "1")
        if isinstance(current, int):
            return int(raw)
        return raw

    @staticmethod
    def update_field_from_string(
        file_path: str,
        field_path: str,
        raw: str,
        validate: Optional[Callable[[Dict], Any]] = None
    ) -> Any:
        """Update a field from command-line text, keeping the field's current type.

        Returns:
            The value that was written.
        """
        parent, key = ManifestUpdater._navigate(ManifestUpdater._load(file_path), field_path)
        value = ManifestUpdater.parse_like(parent[key], raw, field_path)
        ManifestUpdater.update_field(file_path, field_path, value, validate=validate)
        return value
