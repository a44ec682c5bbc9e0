"""
File optimization transformer.
"""

import logging
from pathlib import Path

from .base import TransformHandler, TransformOutput, IOWriteError
from ..entries import AssetEntry, TransformDescriptor
from ..utils.fs import copy_file

logger = logging.getLogger(__name__)


class OptimizeTransformer(TransformHandler):
    """Copies the source verbatim; no content-aware optimization is applied yet."""

    kind = "optimize"

    def apply(self, source: Path, entry: AssetEntry, descriptor: TransformDescriptor,
              destination: Path) -> TransformOutput:
        try:
            copy_file(source, destination)
        except OSError as e:
            raise IOWriteError(f"Error optimizing file: {e}", entry.source_path, destination)

        logger.info(f"Optimized: {source} -> {destination}")
        return TransformOutput(kind=self.kind, files=[destination])
