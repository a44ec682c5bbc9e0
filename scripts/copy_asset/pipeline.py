"""
Asset pipeline runner.
Walks the manifest asset list in order, dispatches every entry that declares a
transformer and aggregates per-entry outcomes into a run summary.
"""

import time
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Union
from dataclasses import dataclass, field

from .config import PipelineConfig
from .dispatcher import TransformDispatcher
from .entries import AssetEntry, ConfigError, describe_node
from .errors import PipelineError, ConfigDirNotFoundError
from .manifest import ManifestLoader, AssetSource
from .transformers import (
    TransformerRegistry, TransformError, VariantError, create_default_registry,
)


class EntryStatus(Enum):
    """Outcome of one manifest entry."""
    PROCESSED = "processed"
    SKIPPED = "skipped"
    ERROR = "error"


class EventKind(Enum):
    """Kinds of events emitted while a run progresses."""
    STARTED = "started"
    PROCESSED = "processed"
    SKIPPED = "skipped"
    ERROR = "error"
    COMPLETED = "completed"


@dataclass
class PipelineEvent:
    """Structured record of something that happened during a run."""
    kind: EventKind
    entry: Optional[str]
    message: str
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class EntryError:
    """A failed entry: identifier plus description of what went wrong."""
    entry: str
    message: str
    error_type: str
    details: List[str] = field(default_factory=list)


@dataclass
class EntryResult:
    """Outcome of one manifest entry."""
    index: int
    entry: str
    status: EntryStatus
    kind: Optional[str] = None
    destination: Optional[str] = None
    outputs: List[Path] = field(default_factory=list)
    error: Optional[EntryError] = None


@dataclass
class PipelineResult:
    """Summary of one pipeline run."""
    processed_count: int = 0
    skipped_count: int = 0
    errors: List[EntryError] = field(default_factory=list)
    entries: List[EntryResult] = field(default_factory=list)
    start_time: Optional[float] = None
    duration: float = 0.0

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def success(self) -> bool:
        """True when no entry failed."""
        return not self.errors

    @property
    def outputs(self) -> List[Path]:
        """Every file written during the run, in manifest order."""
        return [path for result in self.entries for path in result.outputs]

    def record_processed(self, result: EntryResult) -> None:
        self.processed_count += 1
        self.entries.append(result)

    def record_skipped(self, result: EntryResult) -> None:
        self.skipped_count += 1
        self.entries.append(result)

    def record_error(self, result: EntryResult) -> None:
        self.errors.append(result.error)
        self.entries.append(result)


EventSink = Callable[[PipelineEvent], None]


class AssetPipeline:
    """
    Runs the asset list of a manifest through the transform dispatcher.

    Entries are processed one at a time in manifest order. A failing entry is
    recorded and the run moves on; only a missing manifest or config
    directory stops the run.
    """

    def __init__(self, config: Optional[PipelineConfig] = None,
                 registry: Optional[TransformerRegistry] = None,
                 event_sink: Optional[EventSink] = None):
        """
        Initialize the asset pipeline.

        Args:
            config: Pipeline configuration (defaults with env overrides when omitted)
            registry: Transformer registry (built-in kinds when omitted)
            event_sink: Optional callable receiving every PipelineEvent
        """
        self.config = config or PipelineConfig.default()
        self.registry = registry if registry is not None else create_default_registry(
            self.config.resample_method
        )
        self.event_sink = event_sink
        self.logger = self._setup_logging()

    def _setup_logging(self) -> logging.Logger:
        """Set up logging for the pipeline."""
        logger = logging.getLogger("copy_asset")
        logger.setLevel(getattr(logging, self.config.log_level.upper(), logging.INFO))

        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return logger

    def _emit(self, event_kind: EventKind, entry: Optional[str], message: str, **data: Any) -> None:
        if self.event_sink is not None:
            self.event_sink(PipelineEvent(kind=event_kind, entry=entry, message=message, data=data))

    def run(self, assets: Optional[Sequence[Any]],
            config_dir: Optional[Union[str, Path]] = None) -> PipelineResult:
        """
        Process a resolved asset list.

        Args:
            assets: Raw manifest list items (strings or mappings); None or empty is a no-op
            config_dir: Directory holding the source assets (config value when omitted)

        Returns:
            PipelineResult aggregating every entry's outcome

        Raises:
            ConfigDirNotFoundError: If the config directory does not exist
        """
        result = PipelineResult(start_time=time.time())

        if not assets:
            self.logger.info("No assets found in manifest")
            self._emit(EventKind.COMPLETED, None, "No assets found in manifest", processed=0)
            return result

        config_dir = Path(config_dir if config_dir is not None else self.config.config_dir)
        if not config_dir.is_dir():
            self.logger.error(f"Config directory not found at {config_dir}")
            raise ConfigDirNotFoundError(f"Config directory not found at {config_dir}", str(config_dir))

        dispatcher = TransformDispatcher(
            config_dir, registry=self.registry, project_dir=self.config.project_dir
        )

        self.logger.info(f"Processing {len(assets)} asset entries from {config_dir}")
        self._emit(EventKind.STARTED, None, "Asset transformation started",
                   entries=len(assets), config_dir=str(config_dir))

        for index, node in enumerate(assets):
            self._process_node(index, node, dispatcher, result)

        result.duration = time.time() - result.start_time
        self._generate_summary(result)
        return result

    def run_manifest(self, manifest_path: Optional[Union[str, Path]] = None,
                     source: Optional[Union[AssetSource, str]] = None,
                     config_dir: Optional[Union[str, Path]] = None) -> PipelineResult:
        """
        Load a manifest and process its asset list.

        Raises:
            ManifestNotFoundError: If the manifest does not exist
            ManifestFormatError: If the manifest cannot be read
            ConfigDirNotFoundError: If the config directory does not exist
        """
        loader = ManifestLoader(manifest_path or self.config.manifest_path)
        loader.load()
        assets = loader.asset_list(source or self.config.asset_source)
        return self.run(assets, config_dir)

    def _process_node(self, index: int, node: Any, dispatcher: TransformDispatcher,
                      result: PipelineResult) -> None:
        """Parse and process one raw entry, recording its outcome in result."""
        identifier = describe_node(node)

        try:
            entry = AssetEntry.from_config(node)
        except ConfigError as e:
            self._record_error(result, index, identifier, e)
            return

        if entry.is_static:
            self.logger.info(f"Skipping static asset: {entry.destination_path}")
            result.record_skipped(EntryResult(
                index=index, entry=identifier, status=EntryStatus.SKIPPED,
                destination=entry.destination_path,
            ))
            self._emit(EventKind.SKIPPED, identifier, "Skipping static asset",
                       destination=entry.destination_path)
            return

        kind = entry.transformer.kind
        try:
            output = dispatcher.dispatch(entry)
        except TransformError as e:
            self._record_error(result, index, identifier, e, kind, entry.destination_path)
            return
        except Exception as e:
            # Keep forward progress even for handler bugs
            self.logger.exception(f"Unexpected error processing asset {identifier}")
            self._record_error(result, index, identifier, e, kind, entry.destination_path)
            return

        result.record_processed(EntryResult(
            index=index, entry=identifier, status=EntryStatus.PROCESSED, kind=kind,
            destination=entry.destination_path, outputs=list(output.files),
        ))
        self.logger.info(f"Processed: {identifier} [{kind}] -> {output.file_count} file(s)")
        self._emit(EventKind.PROCESSED, identifier, f"Processed with '{kind}'",
                   kind=kind, outputs=[str(p) for p in output.files])

    def _record_error(self, result: PipelineResult, index: int, identifier: str,
                      error: Exception, kind: Optional[str] = None,
                      destination: Optional[str] = None) -> None:
        details = []
        outputs: List[Path] = []
        if isinstance(error, VariantError):
            details = [f"{path}: {reason}" for path, reason in error.failures]
            outputs = list(error.written)

        entry_error = EntryError(
            entry=identifier,
            message=str(error),
            error_type=type(error).__name__,
            details=details,
        )
        result.record_error(EntryResult(
            index=index, entry=identifier, status=EntryStatus.ERROR, kind=kind,
            destination=destination, outputs=outputs, error=entry_error,
        ))

        self.logger.error(f"Error processing asset {identifier}: {error}")
        self._emit(EventKind.ERROR, identifier, str(error),
                   error_type=entry_error.error_type, details=details)

    def _generate_summary(self, result: PipelineResult) -> None:
        """Log the final tally."""
        self.logger.info(
            f"Asset transformation completed. {result.processed_count} assets processed."
        )
        if result.skipped_count:
            self.logger.info(f"Static assets skipped: {result.skipped_count}")
        if result.errors:
            self.logger.warning(f"Entries with errors: {result.error_count}")
            for error in result.errors:
                self.logger.warning(f"  - {error.entry}: {error.message}")

        self._emit(EventKind.COMPLETED, None, "Asset transformation completed",
                   processed=result.processed_count, skipped=result.skipped_count,
                   errors=result.error_count, duration=result.duration)


def copy_assets(config_dir: Union[str, Path], manifest_path: Union[str, Path] = "pubspec.yaml",
                source: Union[AssetSource, str] = AssetSource.BUNDLE,
                event_sink: Optional[EventSink] = None) -> PipelineResult:
    """
    Transform and copy assets declared in a manifest from a config directory.

    Example:
        copy_assets(config_dir="assets/config", manifest_path="pubspec.yaml")
    """
    config = PipelineConfig.default()
    config.config_dir = str(config_dir)
    config.manifest_path = str(manifest_path)
    return AssetPipeline(config, event_sink=event_sink).run_manifest(source=source)


def copy_assets_from_config(config_dir: Union[str, Path] = "config") -> PipelineResult:
    """Copy assets from the default 'config' directory using ./pubspec.yaml."""
    return copy_assets(config_dir=config_dir)


__all__ = [
    "AssetPipeline",
    "PipelineResult",
    "EntryResult",
    "EntryError",
    "EntryStatus",
    "PipelineEvent",
    "EventKind",
    "PipelineError",
    "copy_assets",
    "copy_assets_from_config",
]
