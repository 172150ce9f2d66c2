import os
import pathlib
import tempfile
import unittest
from unittest import mock

from asset_image_generator.core.models import ROOT_GROUP
from asset_image_generator.core.pubspec import NAME_STYLE_FILE_NAME
from asset_image_generator.core.scan import (
    SUPPORTED_EXTENSIONS,
    AssetScanner,
    is_supported_image,
    resolve_scan_directory,
)


def _touch(root: pathlib.Path, rel: str) -> pathlib.Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


class ExtensionFilterTests(unittest.TestCase):
    def test_supported_extensions_any_case(self):
        for ext in SUPPORTED_EXTENSIONS:
            self.assertTrue(is_supported_image(f"a{ext}"))
            self.assertTrue(is_supported_image(f"a{ext.upper()}"))

    def test_other_files_are_excluded(self):
        for name in ("notes.txt", "README", ".png", "archive.png.zip", "icon.tiff", ".DS_Store"):
            self.assertFalse(is_supported_image(name), name)

    def test_extensions_can_be_injected(self):
        self.assertTrue(is_supported_image("clip.tiff", {".tiff"}))
        self.assertFalse(is_supported_image("clip.png", {".tiff"}))


class ResolveDirectoryTests(unittest.TestCase):
    def test_entries(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = pathlib.Path(tmp)
            (root / "assets" / "icons").mkdir(parents=True)
            self.assertEqual(resolve_scan_directory("assets/icons/", root), root / "assets" / "icons")
            self.assertEqual(resolve_scan_directory("assets/icons", root), root / "assets" / "icons")
            self.assertEqual(resolve_scan_directory("assets/icons/home.png", root), root / "assets" / "icons")
            self.assertEqual(resolve_scan_directory("assets/icons/*.png", root), root / "assets" / "icons")
            self.assertEqual(resolve_scan_directory("missing", root), root / "missing")


class ScannerTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = pathlib.Path(self._tmp.name)
        self.scanner = AssetScanner(project_root=self.root)

    def tearDown(self):
        self._tmp.cleanup()

    def test_groups_by_immediate_parent(self):
        _touch(self.root, "assets/home.png")
        _touch(self.root, "assets/icons/home.png")
        _touch(self.root, "assets/icons/small/dot.svg")
        _touch(self.root, "assets/icons/readme.txt")

        result = self.scanner.scan(["assets/"])

        self.assertEqual(set(result.groups), {ROOT_GROUP, "Icons", "Small"})
        self.assertEqual([a.relative_path for a in result.groups[ROOT_GROUP].assets], ["assets/home.png"])
        self.assertEqual([a.relative_path for a in result.groups["Icons"].assets], ["assets/icons/home.png"])
        self.assertEqual([a.relative_path for a in result.groups["Small"].assets], ["assets/icons/small/dot.svg"])
        self.assertEqual(result.total, 3)
        self.assertEqual(result.warnings, [])

    def test_declared_subfolder_keeps_folder_group(self):
        _touch(self.root, "assets/icons/home.png")
        _touch(self.root, "assets/backgrounds/splash.png")
        result = self.scanner.scan(["assets/icons/", "assets/backgrounds/"])
        self.assertEqual(sorted(result.groups), ["Backgrounds", "Icons"])
        self.assertEqual(result.warnings, [])

    def test_project_root_entry(self):
        _touch(self.root, "logo.png")
        result = self.scanner.scan(["./"])
        self.assertEqual(list(result.groups), [ROOT_GROUP])
        self.assertEqual(result.groups[ROOT_GROUP].assets[0].relative_path, "logo.png")

    def test_missing_directory_warns_and_continues(self):
        _touch(self.root, "assets/icons/home.png")
        result = self.scanner.scan(["assets/missing/", "assets/"])
        self.assertEqual(result.total, 1)
        self.assertEqual(len(result.warnings), 1)
        self.assertEqual(result.warnings[0].entry, "assets/missing/")
        self.assertIn("assets/missing", result.warnings[0].message)

    def test_groups_merge_across_entries_without_dedup(self):
        _touch(self.root, "a/icons/one.png")
        _touch(self.root, "b/icons/two.png")
        _touch(self.root, "a/icons/three.png")
        result = self.scanner.scan(["a/", "b/", "a/"])
        self.assertEqual(list(result.groups), ["Icons"])
        paths = sorted(a.relative_path for a in result.groups["Icons"].assets)
        self.assertEqual(
            paths,
            ["a/icons/one.png", "a/icons/one.png", "a/icons/three.png", "a/icons/three.png", "b/icons/two.png"],
        )

    def test_asset_fields(self):
        _touch(self.root, "assets/logo.PNG")
        _touch(self.root, "assets/1st-icon.png")
        result = self.scanner.scan(["assets/"])
        by_id = {a.identifier: a for a in result.groups[ROOT_GROUP].assets}
        self.assertEqual(set(by_id), {"logo", "img1stIcon"})
        logo = by_id["logo"]
        self.assertEqual(logo.relative_path, "assets/logo.PNG")
        self.assertEqual(logo.name_identifier, "logoName")
        self.assertEqual(logo.name_value, "logo")
        self.assertEqual(logo.file_name, "logo.PNG")

    def test_file_name_style(self):
        _touch(self.root, "assets/logo.png")
        scanner = AssetScanner(project_root=self.root, name_style=NAME_STYLE_FILE_NAME)
        asset = scanner.scan(["assets/"]).groups[ROOT_GROUP].assets[0]
        self.assertEqual(asset.name_identifier, "logoFileName")
        self.assertEqual(asset.name_value, "logo.png")

    def test_follows_symlinked_folders(self):
        _touch(self.root, "shared/icons/a.png")
        (self.root / "assets").mkdir()
        try:
            (self.root / "assets" / "icons").symlink_to(self.root / "shared" / "icons", target_is_directory=True)
        except (OSError, NotImplementedError):
            self.skipTest("symlinks not supported")

        result = self.scanner.scan(["assets/"])

        self.assertEqual(result.total, 1)
        self.assertEqual([a.relative_path for a in result.groups["Icons"].assets], ["assets/icons/a.png"])

    def test_symlink_loops_are_walked_once(self):
        _touch(self.root, "assets/icons/a.png")
        try:
            (self.root / "assets" / "icons" / "again").symlink_to(self.root / "assets", target_is_directory=True)
        except (OSError, NotImplementedError):
            self.skipTest("symlinks not supported")

        result = self.scanner.scan(["assets/"])

        self.assertEqual(result.total, 1)

    def test_unreadable_folder_is_reported(self):
        _touch(self.root, "assets/icons/a.png")
        real_walk = os.walk
        locked = str(self.root / "assets" / "locked")

        def walk_with_error(top, onerror=None, followlinks=False):
            onerror(PermissionError(13, "Permission denied", locked))
            yield from real_walk(top, followlinks=followlinks)

        with mock.patch("asset_image_generator.core.scan.os.walk", side_effect=walk_with_error):
            result = self.scanner.scan(["assets/"])

        self.assertEqual(result.total, 1)
        self.assertEqual(len(result.warnings), 1)
        self.assertEqual(result.warnings[0].directory, "assets/locked")
        self.assertIn("Permission denied", result.warnings[0].message)

    def test_file_entry_scans_containing_directory(self):
        _touch(self.root, "assets/icons/home.png")
        _touch(self.root, "assets/icons/back.png")
        result = self.scanner.scan(["assets/icons/home.png"])
        self.assertEqual(len(result.groups["Icons"].assets), 2)


if __name__ == "__main__":
    unittest.main()
