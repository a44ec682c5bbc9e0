"""
Utility modules for filesystem primitives and image processing.
"""

from .fs import ensure_directory, copy_file, copy_tree, variant_path
from .image import ImageUtils, RESAMPLE_METHODS

__all__ = [
    "ensure_directory",
    "copy_file",
    "copy_tree",
    "variant_path",
    "ImageUtils",
    "RESAMPLE_METHODS",
]
