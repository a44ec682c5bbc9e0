"""
Abstract base classes for transform handlers.
Defines the interface every transformation kind implements, the errors
handlers raise and the registry the dispatcher routes through.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..entries import AssetEntry, TransformDescriptor


@dataclass
class TransformOutput:
    """Files written by a handler for one entry."""
    kind: str
    files: List[Path] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.files)


class TransformError(Exception):
    """Base exception for per-entry transformation failures."""

    def __init__(self, message: str, entry: Optional[str] = None, recoverable: bool = True):
        super().__init__(message)
        self.entry = entry
        self.recoverable = recoverable


class SourceNotFoundError(TransformError):
    """Raised when the source cannot be found inside the config directory."""

    def __init__(self, source: Path, entry: Optional[str] = None):
        super().__init__(f"Source file not found: {source}", entry)
        self.source = source


class UnknownTransformerError(TransformError):
    """Raised when no handler is registered for a transformer kind."""

    def __init__(self, kind: str, entry: Optional[str] = None):
        super().__init__(f"Unknown transformer type: {kind}", entry)
        self.kind = kind


class InvalidSourceError(TransformError):
    """Raised when the source exists but has the wrong shape for the handler."""
    pass


class IOWriteError(TransformError):
    """Raised when a directory or file cannot be written."""

    def __init__(self, message: str, entry: Optional[str] = None, path: Optional[Path] = None):
        super().__init__(message, entry)
        self.path = path


class VariantError(IOWriteError):
    """
    Raised when one or more variants of an entry could not be written.

    Variants written before or after a failing one are left in place and
    listed in ``written``; each failure is reported on its own in ``failures``.
    """

    def __init__(self, failures: List[Tuple[Path, str]], written: List[Path],
                 entry: Optional[str] = None):
        details = "; ".join(f"{path}: {reason}" for path, reason in failures)
        super().__init__(
            f"{len(failures)} of {len(failures) + len(written)} variants failed: {details}",
            entry,
        )
        self.failures = failures
        self.written = written


class TransformHandler(ABC):
    """Abstract base class for transformation strategies."""

    #: Transformer kind this handler is registered under
    kind: str = ""

    @abstractmethod
    def apply(self, source: Path, entry: AssetEntry, descriptor: TransformDescriptor,
              destination: Path) -> TransformOutput:
        """
        Produce the destination file(s) for one entry.

        Args:
            source: Resolved source inside the config directory (exists)
            entry: Asset entry being processed
            descriptor: The entry's transformer declaration
            destination: Resolved destination path; its parent directory exists

        Returns:
            TransformOutput listing every file written

        Raises:
            TransformError: If no output could be produced
        """
        pass

    def describe(self) -> str:
        """Short human-readable description used by the CLI."""
        doc = (self.__class__.__doc__ or "").strip()
        return doc.splitlines()[0] if doc else self.__class__.__name__


class TransformerRegistry:
    """Registry mapping transformer kinds to handler instances."""

    def __init__(self):
        """Initialize empty registry."""
        self._handlers: Dict[str, TransformHandler] = {}

    def register(self, kind: str, handler: TransformHandler) -> None:
        """
        Register a handler under a transformer kind, replacing any previous one.

        Raises:
            ValueError: If handler is not a TransformHandler
        """
        if not isinstance(handler, TransformHandler):
            raise ValueError(f"Handler {handler!r} must inherit from TransformHandler")

        self._handlers[kind] = handler

    def unregister(self, kind: str) -> None:
        self._handlers.pop(kind, None)

    def get(self, kind: str) -> TransformHandler:
        """
        Get the handler for a kind.

        Raises:
            UnknownTransformerError: If nothing is registered under kind
        """
        if kind not in self._handlers:
            raise UnknownTransformerError(kind)

        return self._handlers[kind]

    def __contains__(self, kind: str) -> bool:
        return kind in self._handlers

    def kinds(self) -> List[str]:
        """List registered transformer kinds in registration order."""
        return list(self._handlers.keys())

    def copy(self) -> "TransformerRegistry":
        """Independent registry with the same handlers."""
        registry = TransformerRegistry()
        registry._handlers = dict(self._handlers)
        return registry
