"""
Tests for pipeline configuration loading, overrides and validation.
"""

import os
import json
import shutil
import tempfile
from pathlib import Path
from unittest.mock import patch
import pytest

from ..config import PipelineConfig, ENV_VARS, find_config_file


class TestPipelineConfig:
    """Tests for PipelineConfig."""

    def setup_method(self):
        self.temp_dir = Path(tempfile.mkdtemp())

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_defaults(self):
        config = PipelineConfig()

        assert config.config_dir == "config"
        assert config.manifest_path == "pubspec.yaml"
        assert config.asset_source == "bundle"
        assert config.project_dir == "."
        assert config.validate() == []

    def test_from_toml(self):
        path = self.temp_dir / "copy_asset.toml"
        path.write_text("""
[paths]
config_dir = "assets/config"
manifest = "app/pubspec.yaml"
project_dir = "app"

[manifest]
asset_source = "build"

[logging]
level = "DEBUG"

[images]
resample_method = "bicubic"
""")

        config = PipelineConfig.from_file(path)

        assert config.config_dir == "assets/config"
        assert config.manifest_path == "app/pubspec.yaml"
        assert config.project_dir == "app"
        assert config.asset_source == "build"
        assert config.log_level == "DEBUG"
        assert config.resample_method == "bicubic"

    def test_from_json_partial(self):
        path = self.temp_dir / "copy_asset.json"
        path.write_text(json.dumps({"paths": {"config_dir": "src_assets"}}))

        config = PipelineConfig.from_file(path)

        assert config.config_dir == "src_assets"
        assert config.manifest_path == "pubspec.yaml"

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            PipelineConfig.from_file(self.temp_dir / "missing.toml")

    def test_unsupported_format(self):
        path = self.temp_dir / "copy_asset.ini"
        path.write_text("[paths]\n")

        with pytest.raises(ValueError):
            PipelineConfig.from_file(path)

    def test_env_overrides(self):
        env = {
            "COPY_ASSET_CONFIG_DIR": "env_config",
            "COPY_ASSET_SOURCE": "build",
            "COPY_ASSET_LOG_LEVEL": "WARNING",
        }

        with patch.dict(os.environ, env):
            config = PipelineConfig.default()

        assert config.config_dir == "env_config"
        assert config.asset_source == "build"
        assert config.log_level == "WARNING"
        assert config.manifest_path == "pubspec.yaml"

    def test_env_vars_map_to_fields(self):
        fields = set(PipelineConfig().to_dict())
        for attribute, _, _ in ENV_VARS.values():
            assert attribute in fields

    def test_validate_errors(self):
        config = PipelineConfig(
            config_dir="", asset_source="release", log_level="LOUD", resample_method="sharpest"
        )

        errors = config.validate()

        assert len(errors) == 4
        assert any("config_dir" in e for e in errors)
        assert any("asset_source" in e for e in errors)
        assert any("log_level" in e for e in errors)
        assert any("resample_method" in e for e in errors)

    def test_find_config_file_prefers_toml(self):
        assert find_config_file(self.temp_dir) is None

        (self.temp_dir / "copy_asset.json").write_text("{}")
        assert find_config_file(self.temp_dir).name == "copy_asset.json"

        (self.temp_dir / "copy_asset.toml").write_text("")
        assert find_config_file(self.temp_dir).name == "copy_asset.toml"

    def test_default_reads_config_file_then_env(self):
        (self.temp_dir / "copy_asset.json").write_text(json.dumps({
            "paths": {"config_dir": "file_config", "manifest": "app/pubspec.yaml"}
        }))
        clean_env = {k: v for k, v in os.environ.items() if not k.startswith("COPY_ASSET_")}
        clean_env["COPY_ASSET_CONFIG_DIR"] = "env_config"
        original_cwd = os.getcwd()
        os.chdir(self.temp_dir)
        try:
            with patch.dict(os.environ, clean_env, clear=True):
                config = PipelineConfig.default()
                env_only = PipelineConfig.from_env()
        finally:
            os.chdir(original_cwd)

        assert config.config_dir == "env_config"
        assert config.manifest_path == "app/pubspec.yaml"
        # from_env ignores configuration files
        assert env_only.config_dir == "env_config"
        assert env_only.manifest_path == "pubspec.yaml"
