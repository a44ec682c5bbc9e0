"""
Routes one asset entry to the handler for its transformer kind.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .entries import AssetEntry
from .transformers import (
    TransformerRegistry, TransformOutput, transformer_registry,
    SourceNotFoundError, UnknownTransformerError, IOWriteError,
)
from .utils.fs import ensure_directory

logger = logging.getLogger(__name__)


class TransformDispatcher:
    """
    Resolves an entry's source and destination and invokes its handler.

    Sources are always looked up flat inside the config directory by base
    name; any directories in the entry's path are ignored for the lookup.
    Relative destinations resolve against ``project_dir`` (the working
    directory when not given).
    """

    def __init__(self, config_dir: Union[str, Path],
                 registry: Optional[TransformerRegistry] = None,
                 project_dir: Optional[Union[str, Path]] = None):
        self.config_dir = Path(config_dir)
        self.registry = registry if registry is not None else transformer_registry
        self.project_dir = Path(project_dir) if project_dir is not None else None

    def resolve_source(self, entry: AssetEntry) -> Path:
        return self.config_dir / entry.source_name

    def resolve_destination(self, entry: AssetEntry) -> Path:
        destination = Path(entry.destination_path)
        if self.project_dir is None or destination.is_absolute():
            return destination
        return self.project_dir / destination

    def dispatch(self, entry: AssetEntry) -> TransformOutput:
        """
        Process one entry that declares a transformer.

        Args:
            entry: Asset entry whose transformer is present

        Returns:
            TransformOutput from the handler

        Raises:
            SourceNotFoundError: If the source is missing from the config directory
            UnknownTransformerError: If the transformer kind has no handler
            IOWriteError: If the destination directory cannot be created
            TransformError: Any other handler failure
        """
        if entry.transformer is None:
            raise ValueError(f"Entry '{entry.source_path}' has no transformer to dispatch")

        descriptor = entry.transformer

        source = self.resolve_source(entry)
        if not source.exists():
            logger.warning(f"Source file not found: {source}")
            raise SourceNotFoundError(source, entry.source_path)

        try:
            handler = self.registry.get(descriptor.kind)
        except UnknownTransformerError as e:
            logger.warning(f"Unknown transformer type: {descriptor.kind}")
            e.entry = entry.source_path
            raise

        destination = self.resolve_destination(entry)
        try:
            ensure_directory(destination.parent)
        except OSError as e:
            raise IOWriteError(
                f"Cannot create destination directory {destination.parent}: {e}",
                entry.source_path, destination.parent,
            )

        logger.debug(f"Dispatching {entry.source_path} to '{descriptor.kind}' handler")
        return handler.apply(source, entry, descriptor, destination)
