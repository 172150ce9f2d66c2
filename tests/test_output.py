import os
import pathlib
import tempfile
import unittest
from unittest import mock

from asset_image_generator.core.errors import GenerationError, WriteFailure
from asset_image_generator.core.models import RenderedUnit
from asset_image_generator.core.output import STAGING_PREFIX, write_units


class WriteUnitsTests(unittest.TestCase):
    def test_creates_directory_and_overwrites(self):
        with tempfile.TemporaryDirectory() as tmp:
            target = pathlib.Path(tmp) / "lib" / "generated" / "images"
            write_units([RenderedUnit("a.dart", "old\n")], target)
            paths = write_units([RenderedUnit("a.dart", "new\n"), RenderedUnit("b.dart", "b\n")], target)

            self.assertEqual(paths, [target / "a.dart", target / "b.dart"])
            self.assertEqual((target / "a.dart").read_bytes(), b"new\n")
            self.assertEqual(sorted(os.listdir(target)), ["a.dart", "b.dart"])

    def test_keeps_unrelated_files(self):
        with tempfile.TemporaryDirectory() as tmp:
            target = pathlib.Path(tmp)
            (target / "custom.dart").write_text("keep", encoding="utf-8")
            write_units([RenderedUnit("a.dart", "a\n")], target)
            self.assertEqual((target / "custom.dart").read_text(encoding="utf-8"), "keep")

    def test_duplicate_file_names_rejected(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(GenerationError):
                write_units([RenderedUnit("a.dart", "1"), RenderedUnit("a.dart", "2")], tmp)
            self.assertEqual(os.listdir(tmp), [])

    def test_failed_write_leaves_existing_output(self):
        with tempfile.TemporaryDirectory() as tmp:
            target = pathlib.Path(tmp)
            (target / "a.dart").write_text("previous", encoding="utf-8")

            with mock.patch("asset_image_generator.core.output.write_text", side_effect=OSError("disk full")):
                with self.assertRaises(WriteFailure):
                    write_units([RenderedUnit("a.dart", "next"), RenderedUnit("b.dart", "b")], target)

            self.assertEqual((target / "a.dart").read_text(encoding="utf-8"), "previous")
            self.assertFalse(any(name.startswith(STAGING_PREFIX) for name in os.listdir(target)))
            self.assertFalse((target / "b.dart").exists())

    def test_output_path_is_a_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            blocker = pathlib.Path(tmp) / "blocker"
            blocker.write_text("x", encoding="utf-8")
            with self.assertRaises(WriteFailure):
                write_units([RenderedUnit("a.dart", "a")], blocker / "images")


if __name__ == "__main__":
    unittest.main()
