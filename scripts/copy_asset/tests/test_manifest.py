"""
Tests for manifest loading and asset list resolution.
"""

import json
import shutil
import tempfile
import unittest
from pathlib import Path

from ..manifest import ManifestLoader, AssetSource
from ..errors import ManifestNotFoundError, ManifestFormatError, PipelineError, UnknownAssetSourceError


class TestManifestLoader(unittest.TestCase):
    """Test cases for ManifestLoader."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def write(self, name: str, content: str) -> Path:
        path = self.temp_dir / name
        path.write_text(content)
        return path

    def test_yaml_bundle_assets(self):
        """Test reading flutter.assets from a pubspec."""
        path = self.write("pubspec.yaml", """
flutter:
  assets:
    - assets/images/logo.png
    - path: assets/icons/app_icon.png
      transformer:
        type: image_resize
""")

        assets = ManifestLoader(path).asset_list()

        self.assertEqual(len(assets), 2)
        self.assertEqual(assets[0], "assets/images/logo.png")
        self.assertEqual(assets[1]["transformer"]["type"], "image_resize")

    def test_build_assets(self):
        """Test the alternative build asset key path."""
        path = self.write("pubspec.yaml", """
flutter:
  assets:
    - a.png
copy_asset:
  assets:
    - b.png
    - c.png
""")

        loader = ManifestLoader(path)

        self.assertEqual(loader.asset_list(AssetSource.BUILD), ["b.png", "c.png"])
        self.assertEqual(loader.asset_list("bundle"), ["a.png"])

    def test_key_paths(self):
        self.assertEqual(AssetSource.BUNDLE.key_path, ("flutter", "assets"))
        self.assertEqual(AssetSource.BUILD.key_path, ("copy_asset", "assets"))

    def test_json_manifest(self):
        path = self.write("manifest.json", json.dumps({"flutter": {"assets": ["x.png"]}}))
        self.assertEqual(ManifestLoader(path).asset_list(), ["x.png"])

    def test_toml_manifest(self):
        path = self.write("manifest.toml", """
[[copy_asset.assets]]
path = "data/config.json"
destination = "android/AndroidManifest.xml"

[copy_asset.assets.transformer]
type = "copy"
""")

        assets = ManifestLoader(path).asset_list(AssetSource.BUILD)

        self.assertEqual(assets[0]["destination"], "android/AndroidManifest.xml")
        self.assertEqual(assets[0]["transformer"], {"type": "copy"})

    def test_missing_keys_yield_empty_list(self):
        for content in ("name: app\n", "flutter:\n  uses-material-design: true\n", "flutter:\n", ""):
            with self.subTest(content=content):
                path = self.write("pubspec.yaml", content)
                self.assertEqual(ManifestLoader(path).asset_list(), [])

    def test_non_mapping_section(self):
        path = self.write("pubspec.yaml", "flutter: just a string\n")
        self.assertEqual(ManifestLoader(path).asset_list(), [])

    def test_non_list_assets(self):
        path = self.write("pubspec.yaml", "flutter:\n  assets: logo.png\n")

        with self.assertRaises(ManifestFormatError):
            ManifestLoader(path).asset_list()

    def test_missing_manifest(self):
        with self.assertRaises(ManifestNotFoundError):
            ManifestLoader(self.temp_dir / "pubspec.yaml").load()

    def test_invalid_yaml(self):
        path = self.write("pubspec.yaml", "flutter:\n  assets: [unclosed\n")

        with self.assertRaises(ManifestFormatError):
            ManifestLoader(path).load()

    def test_root_must_be_mapping(self):
        path = self.write("pubspec.yaml", "- just\n- a list\n")

        with self.assertRaises(ManifestFormatError):
            ManifestLoader(path).load()

    def test_errors_are_fatal_pipeline_errors(self):
        self.assertTrue(issubclass(ManifestNotFoundError, PipelineError))
        self.assertTrue(issubclass(ManifestFormatError, PipelineError))

    def test_unknown_source(self):
        path = self.write("pubspec.yaml", "flutter:\n  assets: []\n")

        with self.assertRaises(UnknownAssetSourceError) as ctx:
            ManifestLoader(path).asset_list("release")

        self.assertIsInstance(ctx.exception, PipelineError)
        self.assertEqual(ctx.exception.source, "release")


if __name__ == '__main__':
    unittest.main()
