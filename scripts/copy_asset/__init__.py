"""
Copy Asset - build-time asset materialization

Reads the asset list declared in a project manifest and produces files at
their destinations by copying, mirroring directories or generating variants
from a single config directory that acts as the source of truth.
"""

__version__ = "0.2.0"
__author__ = "Copy Asset Development Team"

from .config import PipelineConfig
from .entries import AssetEntry, TransformDescriptor, VariantSpec, ConfigError
from .dispatcher import TransformDispatcher
from .manifest import ManifestLoader, AssetSource
from .errors import (
    PipelineError, ManifestNotFoundError, ManifestFormatError, ConfigDirNotFoundError,
    UnknownAssetSourceError,
)
from .pipeline import AssetPipeline, PipelineResult, PipelineEvent, copy_assets, copy_assets_from_config
from .transformers import TransformHandler, TransformerRegistry, transformer_registry

__all__ = [
    "PipelineConfig",
    "AssetEntry",
    "TransformDescriptor",
    "VariantSpec",
    "ConfigError",
    "TransformDispatcher",
    "ManifestLoader",
    "AssetSource",
    "PipelineError",
    "ManifestNotFoundError",
    "ManifestFormatError",
    "ConfigDirNotFoundError",
    "UnknownAssetSourceError",
    "AssetPipeline",
    "PipelineResult",
    "PipelineEvent",
    "copy_assets",
    "copy_assets_from_config",
    "TransformHandler",
    "TransformerRegistry",
    "transformer_registry",
]
