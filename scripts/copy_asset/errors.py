"""
Fatal pipeline errors.

These abort a run before any entry is processed. Per-entry failures live
with the code that raises them (entries.ConfigError, transformers.TransformError).
"""

from typing import Optional


class PipelineError(Exception):
    """Base exception for errors that stop the whole run."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ManifestNotFoundError(PipelineError):
    """Raised when the project manifest does not exist."""
    pass


class ManifestFormatError(PipelineError):
    """Raised when the manifest cannot be parsed or has the wrong shape."""
    pass


class ConfigDirNotFoundError(PipelineError):
    """Raised when the config directory holding the source assets is missing."""
    pass


class UnknownAssetSourceError(PipelineError, ValueError):
    """Raised when the requested asset list is neither 'bundle' nor 'build'."""

    def __init__(self, source: str):
        super().__init__(f"Unknown asset source '{source}'. Available: bundle, build")
        self.source = source
