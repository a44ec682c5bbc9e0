"""
Image variant generation.

The resize transformer owns variant naming; the pixel work is delegated to a
Resampler. The default resampler is an identity copy, Pillow resampling is
opted into per asset with the ``resample`` transformer parameter.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .base import TransformHandler, TransformOutput, IOWriteError, VariantError
from ..entries import AssetEntry, TransformDescriptor, VariantSpec
from ..utils.fs import copy_file, variant_path
from ..utils.image import ImageUtils, RESAMPLE_METHODS

logger = logging.getLogger(__name__)


class Resampler(ABC):
    """Produces one variant file from a source image."""

    @abstractmethod
    def resample(self, source: Path, target: Path, variant: VariantSpec) -> None:
        """
        Write the variant to target.

        Raises:
            OSError: If the target cannot be written
            ValueError: If the source cannot be processed
        """
        pass


class CopyResampler(Resampler):
    """Identity resampler: the variant is a verbatim copy of the source."""

    def resample(self, source: Path, target: Path, variant: VariantSpec) -> None:
        copy_file(source, target)


class PillowResampler(Resampler):
    """Resizes variants that declare both width and height; copies the rest."""

    def __init__(self, method: str = 'lanczos'):
        if method not in RESAMPLE_METHODS:
            raise ValueError(f"Unknown resample method '{method}'. Available: {list(RESAMPLE_METHODS)}")
        self.method = method

    def resample(self, source: Path, target: Path, variant: VariantSpec) -> None:
        if variant.size is None:
            copy_file(source, target)
            return

        image = ImageUtils.load_image(source)
        resized = ImageUtils.resize_with_quality(image, variant.size, self.method)
        ImageUtils.save_image(resized, target, ImageUtils.format_for(target))


class ImageResizeTransformer(TransformHandler):
    """Generates one output per declared variant, named <stem><suffix><ext>."""

    kind = "image_resize"

    def __init__(self, resampler: Optional[Resampler] = None, default_method: str = 'lanczos'):
        self.resampler = resampler or CopyResampler()
        self.default_method = default_method

    def select_resampler(self, parameters: Dict[str, Any]) -> Resampler:
        """
        Pick the resampler for one asset.

        ``resample: true`` uses Pillow with the default method,
        ``resample: "<method>"`` uses Pillow with that method; anything else
        keeps the configured resampler.
        """
        option = parameters.get('resample')
        if option is True:
            return PillowResampler(self.default_method)
        if isinstance(option, str) and option:
            return PillowResampler(option.lower())
        return self.resampler

    def apply(self, source: Path, entry: AssetEntry, descriptor: TransformDescriptor,
              destination: Path) -> TransformOutput:
        try:
            resampler = self.select_resampler(descriptor.parameters)
        except ValueError as e:
            raise IOWriteError(str(e), entry.source_path, destination)

        if not descriptor.variants:
            try:
                copy_file(source, destination)
            except OSError as e:
                raise IOWriteError(f"Error resizing image: {e}", entry.source_path, destination)

            logger.info(f"Image copied (no resize): {source} -> {destination}")
            return TransformOutput(kind=self.kind, files=[destination])

        written: List[Path] = []
        failures: List[Tuple[Path, str]] = []

        for variant in descriptor.variants:
            # Reported path when the suffix itself cannot form a file name
            target = destination.parent / f"{destination.stem}{variant.suffix}{destination.suffix}"
            try:
                target = variant_path(destination, variant.suffix)
                resampler.resample(source, target, variant)
            except (OSError, ValueError) as e:
                logger.warning(f"Image variant failed: {target} ({variant.describe_size()}): {e}")
                failures.append((target, str(e)))
                continue

            written.append(target)
            logger.info(f"Image variant created: {source} -> {target} ({variant.describe_size()})")

        if failures:
            raise VariantError(failures, written, entry.source_path)

        return TransformOutput(kind=self.kind, files=written)
