"""
Configuration management for the asset copy pipeline.
Supports TOML and JSON configuration files with environment variable overrides.
"""

import os
import json
from dataclasses import dataclass, asdict

# Handle tomllib import for different Python versions
try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Python < 3.11 with tomli package
from typing import Dict, List, Any, Optional, Union
from pathlib import Path

from .utils.image import RESAMPLE_METHODS


ASSET_SOURCES = ('bundle', 'build')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

# Looked up in order in the working directory
DEFAULT_CONFIG_FILES = ('copy_asset.toml', 'copy_asset.json')

# Environment variable -> (attribute, description, example)
ENV_VARS = {
    'COPY_ASSET_CONFIG_DIR': ('config_dir', "Directory holding the source assets", "config"),
    'COPY_ASSET_MANIFEST': ('manifest_path', "Path to the project manifest", "pubspec.yaml"),
    'COPY_ASSET_SOURCE': ('asset_source', "Asset list to read (bundle/build)", "bundle"),
    'COPY_ASSET_PROJECT_DIR': ('project_dir', "Base directory for relative destinations", "."),
    'COPY_ASSET_LOG_LEVEL': ('log_level', "Logging level", "INFO"),
    'COPY_ASSET_RESAMPLE_METHOD': ('resample_method', "Default Pillow resample method", "lanczos"),
}


@dataclass
class PipelineConfig:
    """Main configuration class for the asset copy pipeline."""

    # Paths
    config_dir: str = "config"
    manifest_path: str = "pubspec.yaml"
    project_dir: str = "."

    # Manifest settings
    asset_source: str = "bundle"

    # Logging
    log_level: str = "INFO"

    # Image settings
    resample_method: str = "lanczos"

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "PipelineConfig":
        """Load configuration from TOML or JSON file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        if config_path.suffix.lower() == '.toml':
            return cls._from_toml(config_path)
        elif config_path.suffix.lower() == '.json':
            return cls._from_json(config_path)
        else:
            raise ValueError(f"Unsupported configuration format: {config_path.suffix}")

    @classmethod
    def _from_toml(cls, config_path: Path) -> "PipelineConfig":
        """Load configuration from TOML file."""
        with open(config_path, 'rb') as f:
            data = tomllib.load(f)
        return cls._from_dict(data)

    @classmethod
    def _from_json(cls, config_path: Path) -> "PipelineConfig":
        """Load configuration from JSON file."""
        with open(config_path, 'r') as f:
            data = json.load(f)
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "PipelineConfig":
        """Create configuration from dictionary."""
        config_data = {}

        if 'paths' in data:
            paths = data['paths']
            config_data['config_dir'] = paths.get('config_dir', 'config')
            config_data['manifest_path'] = paths.get('manifest', 'pubspec.yaml')
            config_data['project_dir'] = paths.get('project_dir', '.')

        if 'manifest' in data:
            manifest = data['manifest']
            config_data['asset_source'] = manifest.get('asset_source', 'bundle')

        if 'logging' in data:
            config_data['log_level'] = data['logging'].get('level', 'INFO')

        if 'images' in data:
            config_data['resample_method'] = data['images'].get('resample_method', 'lanczos')

        return cls(**config_data)

    @classmethod
    def default(cls) -> "PipelineConfig":
        """
        Create the configuration a plain run uses.

        Starts from the first default configuration file found in the working
        directory, if any, then applies environment variable overrides.
        """
        config_path = find_config_file()
        config = cls.from_file(config_path) if config_path else cls()
        return cls._apply_env_overrides(config)

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        """Create configuration from environment variables only."""
        return cls._apply_env_overrides(cls())

    @classmethod
    def _apply_env_overrides(cls, config: "PipelineConfig") -> "PipelineConfig":
        """Apply environment variable overrides to configuration."""
        for var_name, (attribute, _, _) in ENV_VARS.items():
            value = os.getenv(var_name)
            if value:
                setattr(config, attribute, value)

        return config

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.config_dir:
            errors.append("config_dir must not be empty")

        if not self.manifest_path:
            errors.append("manifest_path must not be empty")

        if self.asset_source not in ASSET_SOURCES:
            errors.append(f"asset_source must be one of {', '.join(ASSET_SOURCES)}")

        if self.log_level.upper() not in LOG_LEVELS:
            errors.append(f"log_level must be one of {', '.join(LOG_LEVELS)}")

        if self.resample_method not in RESAMPLE_METHODS:
            errors.append(f"resample_method must be one of {', '.join(RESAMPLE_METHODS)}")

        return errors

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def find_config_file(directory: Union[str, Path] = ".") -> Optional[Path]:
    """Return the first default configuration file present in directory."""
    for name in DEFAULT_CONFIG_FILES:
        config_path = Path(directory) / name
        if config_path.exists():
            return config_path
    return None
