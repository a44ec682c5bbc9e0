"""
Plain copy transformers: single files and whole directory trees.
"""

import logging
from pathlib import Path

from .base import TransformHandler, TransformOutput, InvalidSourceError, IOWriteError
from ..entries import AssetEntry, TransformDescriptor
from ..utils.fs import copy_file, copy_tree

logger = logging.getLogger(__name__)


class CopyTransformer(TransformHandler):
    """Byte-identical copy of the source to the destination."""

    kind = "copy"

    def apply(self, source: Path, entry: AssetEntry, descriptor: TransformDescriptor,
              destination: Path) -> TransformOutput:
        if source.is_dir():
            raise InvalidSourceError(
                f"Source is a directory, use 'copy_directory': {source}", entry.source_path
            )

        try:
            copy_file(source, destination)
        except OSError as e:
            raise IOWriteError(f"Error copying file: {e}", entry.source_path, destination)

        logger.info(f"Copied: {source} -> {destination}")
        return TransformOutput(kind=self.kind, files=[destination])


class CopyDirectoryTransformer(TransformHandler):
    """Recursive copy of a source directory, preserving its layout."""

    kind = "copy_directory"

    def apply(self, source: Path, entry: AssetEntry, descriptor: TransformDescriptor,
              destination: Path) -> TransformOutput:
        if not source.is_dir():
            raise InvalidSourceError(f"Source is not a directory: {source}", entry.source_path)

        if not any(p.is_file() for p in source.rglob('*')):
            raise InvalidSourceError(f"Source directory is empty: {source}", entry.source_path)

        try:
            written = copy_tree(source, destination)
        except OSError as e:
            raise IOWriteError(f"Error copying directory: {e}", entry.source_path, destination)

        logger.info(f"Copied directory: {source} -> {destination} ({len(written)} files)")
        return TransformOutput(kind=self.kind, files=written)
