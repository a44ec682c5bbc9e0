"""
Transform handlers for the pipeline.
One handler per transformer kind, routed through the registry.
"""

from .base import (
    TransformHandler, TransformOutput, TransformerRegistry,
    TransformError, SourceNotFoundError, UnknownTransformerError,
    InvalidSourceError, IOWriteError, VariantError,
)
from .copy import CopyTransformer, CopyDirectoryTransformer
from .image import ImageResizeTransformer, Resampler, CopyResampler, PillowResampler
from .optimize import OptimizeTransformer


def create_default_registry(resample_method: str = 'lanczos') -> TransformerRegistry:
    """Registry with every built-in transformer kind."""
    registry = TransformerRegistry()
    registry.register(CopyTransformer.kind, CopyTransformer())
    registry.register(CopyDirectoryTransformer.kind, CopyDirectoryTransformer())
    registry.register(ImageResizeTransformer.kind, ImageResizeTransformer(default_method=resample_method))
    registry.register(OptimizeTransformer.kind, OptimizeTransformer())
    return registry


# Global registry instance
transformer_registry = create_default_registry()

__all__ = [
    # Base classes and registry
    "TransformHandler",
    "TransformOutput",
    "TransformerRegistry",
    "transformer_registry",
    "create_default_registry",

    # Exceptions
    "TransformError",
    "SourceNotFoundError",
    "UnknownTransformerError",
    "InvalidSourceError",
    "IOWriteError",
    "VariantError",

    # Concrete handlers
    "CopyTransformer",
    "CopyDirectoryTransformer",
    "ImageResizeTransformer",
    "OptimizeTransformer",

    # Resamplers
    "Resampler",
    "CopyResampler",
    "PillowResampler",
]
