"""
Image processing utilities for the pixel-level transformers.
"""

from pathlib import Path
from typing import Tuple, Union
from PIL import Image


RESAMPLE_METHODS = ('lanczos', 'bicubic', 'bilinear', 'nearest')

# Formats Pillow should write, keyed by lower-case file extension
FORMATS_BY_EXTENSION = {
    '.png': 'PNG',
    '.jpg': 'JPEG',
    '.jpeg': 'JPEG',
    '.webp': 'WEBP',
    '.gif': 'GIF',
    '.bmp': 'BMP',
}


class ImageUtils:
    """Utility class for common image processing operations."""

    @staticmethod
    def load_image(path: Union[str, Path]) -> Image.Image:
        """
        Load an image from disk.

        Raises:
            ValueError: If the file cannot be decoded as an image
        """
        try:
            with Image.open(path) as image:
                image.load()
                return image.copy()
        except (OSError, SyntaxError) as e:
            raise ValueError(f"Cannot load image from path '{path}': {e}")

    @staticmethod
    def format_for(path: Union[str, Path]) -> str:
        """Pillow format name for a destination file, PNG when unknown."""
        return FORMATS_BY_EXTENSION.get(Path(path).suffix.lower(), 'PNG')

    @staticmethod
    def save_image(image: Image.Image, path: Union[str, Path], format: str = 'PNG', **kwargs) -> None:
        """
        Save image to file with quality preservation.

        Args:
            image: Image to save
            path: Output file path
            format: Image format (PNG, JPEG, etc.)
            **kwargs: Additional save parameters
        """
        save_kwargs = {}

        if format.upper() == 'PNG':
            save_kwargs['compress_level'] = kwargs.pop('compress_level', 6)
        elif format.upper() == 'JPEG':
            save_kwargs['quality'] = kwargs.pop('quality', 95)
            if image.mode in ('RGBA', 'LA', 'P'):
                image = image.convert('RGB')

        save_kwargs.update(kwargs)
        image.save(path, format=format, **save_kwargs)

    @staticmethod
    def resize_with_quality(image: Image.Image, target_size: Tuple[int, int],
                            method: str = 'lanczos') -> Image.Image:
        """
        Resize image with quality preservation.

        Args:
            image: Source image
            target_size: Target (width, height)
            method: Resampling method ('lanczos', 'bicubic', 'bilinear', 'nearest')

        Returns:
            Resized image
        """
        if target_size[0] <= 0 or target_size[1] <= 0:
            raise ValueError(f"Target size must be positive, got {target_size}")

        resample = {
            'lanczos': Image.Resampling.LANCZOS,
            'bicubic': Image.Resampling.BICUBIC,
            'bilinear': Image.Resampling.BILINEAR,
            'nearest': Image.Resampling.NEAREST,
        }.get(method, Image.Resampling.LANCZOS)

        return image.resize(target_size, resample)
