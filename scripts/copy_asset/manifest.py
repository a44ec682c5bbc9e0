"""
Project manifest loading.
Reads the manifest document and resolves the declared asset list.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml

# Handle tomllib import for different Python versions
try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Python < 3.11 with tomli package

from .errors import ManifestNotFoundError, ManifestFormatError, UnknownAssetSourceError


class AssetSource(Enum):
    """Where in the manifest the asset list lives."""
    BUNDLE = "bundle"
    BUILD = "build"

    @property
    def key_path(self) -> Tuple[str, ...]:
        return ASSET_KEY_PATHS[self]


ASSET_KEY_PATHS = {
    AssetSource.BUNDLE: ("flutter", "assets"),
    AssetSource.BUILD: ("copy_asset", "assets"),
}


class ManifestLoader:
    """Loads a YAML, JSON or TOML manifest into a plain mapping."""

    def __init__(self, path: Union[str, Path] = "pubspec.yaml"):
        self.path = Path(path)
        self._data: Union[Dict[str, Any], None] = None

    def load(self) -> Dict[str, Any]:
        """
        Read and parse the manifest.

        Raises:
            ManifestNotFoundError: If the file does not exist
            ManifestFormatError: If it cannot be parsed or is not a mapping
        """
        if not self.path.is_file():
            raise ManifestNotFoundError(f"Manifest not found at {self.path}")

        suffix = self.path.suffix.lower()
        try:
            if suffix == '.json':
                with open(self.path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            elif suffix == '.toml':
                with open(self.path, 'rb') as f:
                    data = tomllib.load(f)
            else:
                with open(self.path, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f)
        except (yaml.YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            raise ManifestFormatError(f"Cannot parse manifest {self.path}: {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ManifestFormatError(
                f"Manifest {self.path} must contain a mapping, got {type(data).__name__}"
            )

        self._data = data
        return data

    @property
    def data(self) -> Dict[str, Any]:
        if self._data is None:
            return self.load()
        return self._data

    def asset_list(self, source: Union[AssetSource, str] = AssetSource.BUNDLE) -> List[Any]:
        """
        Resolve the raw asset list under the key path for source.

        Missing keys yield an empty list.

        Raises:
            UnknownAssetSourceError: If source names no known asset list
            ManifestFormatError: If the value found is not a list
        """
        try:
            source = AssetSource(source)
        except ValueError:
            raise UnknownAssetSourceError(str(source))
        node: Any = self.data

        for key in source.key_path:
            if not isinstance(node, dict):
                return []
            node = node.get(key)
            if node is None:
                return []

        if not isinstance(node, list):
            raise ManifestFormatError(
                f"'{'.'.join(source.key_path)}' in {self.path} must be a list, got {type(node).__name__}"
            )

        return node
