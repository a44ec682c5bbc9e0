"""
Integration tests for the asset copy CLI.
Tests command-line interface functionality and argument parsing.
"""

import os
import json
import shutil
import tempfile
from pathlib import Path
from unittest.mock import patch
from typer.testing import CliRunner

from ..cli import app
from .. import __version__


MANIFEST = """
flutter:
  assets:
    - assets/images/logo.png
    - path: assets/icons/app_icon.png
      transformer:
        type: image_resize
        variants:
          - suffix: ""
          - suffix: "@2x"
    - path: assets/data/config.json
      destination: android/AndroidManifest.xml
      transformer:
        type: copy
copy_asset:
  assets:
    - path: broken.json
      transformer:
        type: minify
"""


class TestCLIIntegration:
    """Test CLI integration and command functionality."""

    def setup_method(self):
        """Set up test environment before each test."""
        self.runner = CliRunner()
        self.temp_dir = tempfile.mkdtemp()
        self.original_cwd = os.getcwd()
        os.chdir(self.temp_dir)

        os.makedirs("config", exist_ok=True)
        Path("config/app_icon.png").write_bytes(b"icon")
        Path("config/config.json").write_text("{}")
        Path("config/broken.json").write_text("{}")
        Path("pubspec.yaml").write_text(MANIFEST)

        self.env = {k: v for k, v in os.environ.items() if not k.startswith("COPY_ASSET_")}
        # Wide console so rich tables are not truncated
        self.env["COLUMNS"] = "200"

    def teardown_method(self):
        """Clean up test environment after each test."""
        os.chdir(self.original_cwd)
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def invoke(self, args):
        with patch.dict(os.environ, self.env, clear=True):
            return self.runner.invoke(app, args)

    def create_test_config(self, config_data: dict) -> Path:
        config_path = Path("test_config.json")
        config_path.write_text(json.dumps(config_data, indent=2))
        return config_path

    def test_cli_help(self):
        result = self.invoke(["--help"])
        assert result.exit_code == 0
        assert "Usage" in result.output
        assert "run" in result.output

    def test_run_command(self):
        result = self.invoke(["run"])

        assert result.exit_code == 0
        assert "2 assets processed" in result.output
        assert Path("assets/icons/app_icon.png").exists()
        assert Path("assets/icons/app_icon@2x.png").exists()
        assert Path("android/AndroidManifest.xml").read_text() == "{}"
        assert not Path("assets/images/logo.png").exists()

    def test_run_build_source_reports_errors(self):
        result = self.invoke(["run", "--source", "build"])

        assert result.exit_code == 0
        assert "Completed with 1 failed entries" in result.output

    def test_run_strict_fails_on_errors(self):
        result = self.invoke(["run", "--source", "build", "--strict"])
        assert result.exit_code == 1

    def test_run_unknown_source(self):
        result = self.invoke(["run", "--source", "release"])
        assert result.exit_code == 2
        assert "Unknown asset source" in result.output

    def test_run_missing_config_dir(self):
        result = self.invoke(["run", "--config-dir", "nowhere"])

        assert result.exit_code == 1
        assert "Pipeline error:" in result.output

    def test_run_missing_manifest(self):
        result = self.invoke(["run", "--manifest", "missing.yaml"])

        assert result.exit_code == 1
        assert "Manifest not found" in result.output

    def test_run_with_project_dir(self):
        os.makedirs("app", exist_ok=True)

        result = self.invoke(["run", "--project-dir", "app", "--no-summary"])

        assert result.exit_code == 0
        assert Path("app/android/AndroidManifest.xml").exists()

    def test_list_command(self):
        result = self.invoke(["list"])

        assert result.exit_code == 0
        assert "image_resize" in result.output
        assert "static" in result.output

    def test_list_missing_manifest(self):
        result = self.invoke(["list", "--manifest", "missing.yaml"])
        assert result.exit_code == 1

    def test_config_command_show(self):
        config_path = self.create_test_config({"paths": {"config_dir": "assets/config"}})

        result = self.invoke(["config", "--show", "--config", str(config_path)])

        assert result.exit_code == 0
        assert "assets/config" in result.output

    def test_config_command_validate_valid(self):
        config_path = self.create_test_config({"manifest": {"asset_source": "build"}})

        result = self.invoke(["config", "--validate", "--config", str(config_path)])

        assert result.exit_code == 0
        assert "Configuration is valid" in result.output

    def test_config_command_validate_invalid(self):
        config_path = self.create_test_config({"manifest": {"asset_source": "release"}})

        result = self.invoke(["config", "--validate", "--config", str(config_path)])

        assert result.exit_code == 1
        assert "Configuration validation errors:" in result.output

    def test_config_file_not_found(self):
        result = self.invoke(["config", "--show", "--config", "nonexistent.json"])

        assert result.exit_code == 1
        assert "Configuration file not found" in result.output

    def test_config_env_vars(self):
        result = self.invoke(["config", "--env-vars"])

        assert result.exit_code == 0
        assert "COPY_ASSET_CONFIG_DIR" in result.output

    def test_default_config_file_discovery(self):
        Path("copy_asset.json").write_text(json.dumps({"paths": {"config_dir": "nowhere"}}))

        result = self.invoke(["run"])

        assert result.exit_code == 1
        assert "Using configuration: copy_asset.json" in result.output

    def test_environment_variable_override(self):
        self.env["COPY_ASSET_CONFIG_DIR"] = "nowhere"

        result = self.invoke(["run"])

        assert result.exit_code == 1
        assert "Environment overrides applied" in result.output

    def test_unknown_source_from_environment(self):
        self.env["COPY_ASSET_SOURCE"] = "bogus"

        result = self.invoke(["run"])

        assert result.exit_code == 1
        assert "Pipeline error:" in result.output
        assert "Unknown asset source 'bogus'" in result.output

    def test_list_unknown_source_from_environment(self):
        self.env["COPY_ASSET_SOURCE"] = "bogus"

        result = self.invoke(["list"])

        assert result.exit_code == 1
        assert "Manifest error:" in result.output

    def test_version(self):
        result = self.invoke(["version"])

        assert result.exit_code == 0
        assert __version__ in result.output
