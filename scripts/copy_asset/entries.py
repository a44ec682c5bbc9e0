"""
Asset entry and transformer declarations parsed from the manifest asset list.

Parsing is pure: nothing here touches the filesystem.
"""

from dataclasses import dataclass, field
from collections.abc import Mapping
from typing import Dict, List, Optional, Tuple, Any


DEFAULT_TRANSFORMER = "copy"


class ConfigError(ValueError):
    """Raised when an asset declaration cannot be turned into an AssetEntry."""

    def __init__(self, message: str, node: Any = None):
        super().__init__(message)
        self.node = node


def _coerce_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class VariantSpec:
    """One output of an image_resize transformation."""
    suffix: str = ""
    width: Optional[int] = None
    height: Optional[int] = None

    @classmethod
    def from_dict(cls, node: Any) -> "VariantSpec":
        """Build a variant, falling back to defaults for anything malformed."""
        if not isinstance(node, Mapping):
            return cls()

        suffix = node.get('suffix')
        return cls(
            suffix="" if suffix is None else str(suffix),
            width=_coerce_int(node.get('width')),
            height=_coerce_int(node.get('height')),
        )

    @property
    def size(self) -> Optional[Tuple[int, int]]:
        """Target size, only when both dimensions were declared."""
        if self.width is None or self.height is None:
            return None
        return (self.width, self.height)

    def describe_size(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class TransformDescriptor:
    """Declared transformation for an asset: kind, free-form parameters and variants."""
    kind: str = DEFAULT_TRANSFORMER
    parameters: Dict[str, Any] = field(default_factory=dict)
    variants: List[VariantSpec] = field(default_factory=list)

    @classmethod
    def from_dict(cls, node: Any) -> "TransformDescriptor":
        """
        Parse a transformer declaration.

        Never fails: absent or malformed fields take their defaults so that a
        degraded descriptor is preferred over aborting the run.

        Args:
            node: Mapping with optional 'type', 'parameters' and 'variants' keys

        Returns:
            TransformDescriptor
        """
        if not isinstance(node, Mapping):
            return cls()

        kind = node.get('type')
        parameters = node.get('parameters')
        variants = node.get('variants')

        return cls(
            kind=DEFAULT_TRANSFORMER if kind is None else str(kind),
            parameters=dict(parameters) if isinstance(parameters, Mapping) else {},
            variants=[VariantSpec.from_dict(v) for v in variants] if isinstance(variants, list) else [],
        )


@dataclass(frozen=True)
class AssetEntry:
    """A source/destination pair from the manifest with an optional transformer."""
    source_path: str
    destination_path: str = ""
    transformer: Optional[TransformDescriptor] = None

    def __post_init__(self):
        # Destination falls back to the source path verbatim
        if not self.destination_path:
            object.__setattr__(self, 'destination_path', self.source_path)

    @property
    def is_static(self) -> bool:
        """Static assets carry no transformer and are left alone by the pipeline."""
        return self.transformer is None

    @property
    def source_name(self) -> str:
        """Base name used to look the source up inside the config directory."""
        return source_basename(self.source_path)

    @classmethod
    def from_config(cls, node: Any) -> "AssetEntry":
        """
        Create an entry from one manifest list item.

        Handles both bare path strings and mappings with 'path',
        'destination' and 'transformer' keys.

        Examples:
            "assets/images/logo.png"
            {"path": "assets/icons/app_icon.png", "transformer": {...}}
            {"path": "assets/data/config.json", "destination": "android/AndroidManifest.xml",
             "transformer": {"type": "copy"}}

        Raises:
            ConfigError: If the item is neither a string nor a valid mapping
        """
        if isinstance(node, str):
            if not node:
                raise ConfigError("Invalid asset configuration: empty path", node)
            return cls(source_path=node)

        if not isinstance(node, Mapping):
            raise ConfigError(f"Invalid asset configuration: {node!r}", node)

        path = node.get('path')
        if path is None:
            raise ConfigError(f"Asset configuration is missing 'path': {dict(node)!r}", node)
        if not isinstance(path, str) or not path:
            raise ConfigError(f"Asset 'path' must be a non-empty string, got {path!r}", node)

        destination = node.get('destination')
        if destination is not None and not isinstance(destination, str):
            raise ConfigError(f"Asset 'destination' must be a string, got {destination!r}", node)

        transformer_node = node.get('transformer')
        transformer = None
        if transformer_node is not None:
            if not isinstance(transformer_node, Mapping):
                raise ConfigError(
                    f"Asset 'transformer' must be a mapping, got {transformer_node!r}", node
                )
            transformer = TransformDescriptor.from_dict(transformer_node)

        return cls(
            source_path=path,
            destination_path=destination or path,
            transformer=transformer,
        )


def source_basename(path: str) -> str:
    """Last component of a manifest path, ignoring trailing separators."""
    return path.replace('\\', '/').rstrip('/').rsplit('/', 1)[-1]


def describe_node(node: Any) -> str:
    """Identifier for an entry in reports, usable even when parsing failed."""
    if isinstance(node, str):
        return node
    if isinstance(node, Mapping) and isinstance(node.get('path'), str):
        return node['path']
    return repr(node)
