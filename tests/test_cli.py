from __future__ import annotations

import contextlib
import io
from pathlib import Path
import tempfile
import unittest

from PIL import Image

from vdview_core.cli import main


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.image = self.tmp / "base.png"
        Image.new("RGB", (64, 32), (255, 255, 255)).save(self.image)
        self.script = self.tmp / "drawing.vd"
        self.script.write_text("point(10,10,A)\npoint(50,10,B)\nline(A,B)\nline(A,C)\n", encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_view_save_writes_composed_png(self) -> None:
        out = self.tmp / "composed.png"
        code = main(["--log-level", "ERROR", "view", str(self.image), str(self.script), "--save", str(out)])
        self.assertEqual(code, 0)
        with Image.open(out) as saved:
            self.assertEqual(saved.size, (64, 32))
            self.assertEqual(saved.convert("RGBA").getpixel((30, 10)), (0, 0, 0, 255))

    def test_view_headless_renders_frames(self) -> None:
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            code = main(["--log-level", "ERROR", "view", str(self.image), str(self.script), "--frames", "2", "--fps", "1000"])
        self.assertEqual(code, 0)
        self.assertIn("frames=2 points=2 lines=1 diagnostics=1", stdout.getvalue())

    def test_view_with_missing_script_still_runs(self) -> None:
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            code = main(["--log-level", "ERROR", "view", str(self.image), str(self.tmp / "none.vd")])
        self.assertEqual(code, 0)
        self.assertIn("points=0 lines=0", stdout.getvalue())

    def test_view_with_bad_image_fails(self) -> None:
        bad = self.tmp / "bad.png"
        bad.write_text("not an image", encoding="utf-8")
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            code = main(["--log-level", "ERROR", "view", str(bad)])
        self.assertEqual(code, 1)
        self.assertIn("error:", stderr.getvalue())

    def test_check_reports_diagnostics(self) -> None:
        stdout = io.StringIO()
        stderr = io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            code = main(["--log-level", "ERROR", "check", str(self.script)])
        self.assertEqual(code, 1)
        self.assertEqual(stdout.getvalue(), "point(10,10,A)\npoint(50,10,B)\nline(A,B)\n")
        self.assertIn("unresolved", stderr.getvalue())

    def test_check_clean_script_succeeds(self) -> None:
        self.script.write_text("point(1,2,A)\n", encoding="utf-8")
        with contextlib.redirect_stdout(io.StringIO()):
            code = main(["--log-level", "ERROR", "check", str(self.script)])
        self.assertEqual(code, 0)


if __name__ == "__main__":
    unittest.main()
