"""Exceptions raised while composing the chat deployment."""


class ChatDeployError(Exception):
    """Base class for chatdeploy errors."""
    pass


class ManifestError(ChatDeployError):
    """Raised when the deployment manifest cannot be used."""
    pass


class MissingKeyError(ChatDeployError, KeyError):
    """Raised when a resource-name or subnet lookup has no entry."""

    def __init__(self, mapping: str, key: str):
        self.mapping = mapping
        self.key = key
        super().__init__(f"Missing key '{key}' in {mapping}")

    def __str__(self) -> str:
        return f"Missing key '{self.key}' in {self.mapping}"


class CompositionError(ChatDeployError):
    """Raised when the module graph cannot be ordered."""
    pass
