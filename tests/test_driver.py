"""
Integration tests for batch and interactive runs and the recolor CLI (temp files only).
"""
import io
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
HERE = Path(__file__).resolve().parent
if str(HERE) not in sys.path:
    sys.path.insert(0, str(HERE))


class _TempDirCase(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.log = self.tmp / "logs" / "recolor.log"

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, name: str, text: str) -> Path:
        path = self.tmp / name
        path.write_bytes(text.encode("utf-8"))
        return path


class TestBatch(_TempDirCase):

    def test_batch_writes_output_and_log(self):
        from sample_theme import SAMPLE, SAMPLE_REPLACED
        from theme_recolor.driver import run_batch

        src = self.write("Dark.vstheme", SAMPLE)
        out = self.tmp / "out" / "deeper" / "Dark.vstheme"
        summary = run_batch(src, out, "#102030", self.log)
        self.assertEqual(summary.replaced, 2)
        self.assertEqual(out.read_text(encoding="utf-8"), SAMPLE_REPLACED)
        self.assertEqual(src.read_text(encoding="utf-8"), SAMPLE)
        self.assertEqual(self.log.read_text(encoding="utf-8").splitlines(), [
            "Environment,Title,#102030,#11212F",
            "Environment,Panel & Frame,#102030,#111F31",
        ])

    def test_no_match_is_byte_identical_with_empty_log(self):
        from sample_theme import SAMPLE
        from theme_recolor.driver import run_batch

        src = self.write("Dark.vstheme", SAMPLE)
        out = self.tmp / "same.vstheme"
        summary = run_batch(src, out, "#ABCDEF", self.log)
        self.assertEqual(summary.replaced, 0)
        self.assertEqual(out.read_bytes(), src.read_bytes())
        self.assertEqual(self.log.read_text(encoding="utf-8"), "")

    def test_explicit_target(self):
        from sample_theme import SAMPLE
        from theme_recolor.driver import run_batch

        src = self.write("Dark.vstheme", SAMPLE)
        out = self.tmp / "out.vstheme"
        summary = run_batch(src, out, "#102030", self.log, target="#000080")
        self.assertEqual([e.replacement for e in summary.entries], [(0, 0, 0x80), (1, 1, 0x81)])
        self.assertIn('Source="FF000080"', out.read_text(encoding="utf-8"))
        self.assertIn('Source="40010181"', out.read_text(encoding="utf-8"))

    def test_crlf_and_undecodable_bytes_preserved(self):
        from theme_recolor.driver import run_batch

        raw = (
            b"<!-- caf\xe9 -->\r\n<Category Name=\"X\">\r\n<Color Name=\"Y\">\r\n"
            b"<Background Type=\"CT_RAW\" Source=\"FF102030\"/>\r\n</Color>\r\n</Category>\r\n"
        )
        src = self.tmp / "raw.vstheme"
        src.write_bytes(raw)
        out = self.tmp / "raw.out.vstheme"
        run_batch(src, out, "#102030", self.log)
        self.assertEqual(out.read_bytes(), raw.replace(b"FF102030", b"FF112131"))

    def test_missing_input(self):
        from theme_recolor.driver import run_batch
        from theme_recolor.errors import PathNotFound

        out = self.tmp / "out.vstheme"
        with self.assertRaises(PathNotFound):
            run_batch(self.tmp / "missing.vstheme", out, "#102030", self.log)
        self.assertFalse(out.exists())
        self.assertFalse(self.log.exists())

    def test_relative_log_rejected_before_writing(self):
        from sample_theme import SAMPLE
        from theme_recolor.driver import run_batch
        from theme_recolor.errors import PathNotQualified

        src = self.write("Dark.vstheme", SAMPLE)
        out = self.tmp / "out.vstheme"
        with self.assertRaises(PathNotQualified):
            run_batch(src, out, "#102030", "recolor.log")
        self.assertFalse(out.exists())

    def test_invalid_source_rejected(self):
        from sample_theme import SAMPLE
        from theme_recolor.driver import run_batch
        from theme_recolor.errors import InvalidColor

        src = self.write("Dark.vstheme", SAMPLE)
        with self.assertRaises(InvalidColor):
            run_batch(src, self.tmp / "out.vstheme", "#10203", self.log)

    def test_dry_run_writes_nothing(self):
        from sample_theme import SAMPLE
        from theme_recolor.driver import run_batch

        src = self.write("Dark.vstheme", SAMPLE)
        out = self.tmp / "out.vstheme"
        summary = run_batch(src, out, "#102030", self.log, dry_run=True)
        self.assertEqual(summary.replaced, 2)
        self.assertFalse(out.exists())
        self.assertFalse(self.log.exists())


class TestInteractive(_TempDirCase):

    def _run(self, path, answers):
        from theme_recolor.driver import run_interactive

        replies = iter(answers)
        printed: list[str] = []
        with redirect_stderr(io.StringIO()):
            summary = run_interactive(path, self.log, prompt=lambda _msg: next(replies), out=printed.append)
        return summary, printed

    def test_later_prompts_see_earlier_results(self):
        """The color created by the first prompt is itself replaceable by the second."""
        from sample_theme import SAMPLE

        path = self.write("Dark.vstheme", SAMPLE)
        summary, _ = self._run(path, ["#102030", "#11212F", ""])
        self.assertEqual(summary.passes, 2)
        self.assertEqual(summary.replaced, 3)
        self.assertEqual(summary.entries[2].element, "Title")
        self.assertEqual(summary.entries[2].replacement, (0x12, 0x22, 0x30))
        self.assertIn('Source="FF122230"', path.read_text(encoding="utf-8"))

    def test_replacements_never_repeat(self):
        from sample_theme import SAMPLE, SAMPLE_REPLACED

        path = self.write("Dark.vstheme", SAMPLE)
        summary, _ = self._run(path, ["#102030", "#112131", "#102030", ""])
        replacements = [e.replacement for e in summary.entries]
        self.assertEqual(len(replacements), 3)
        self.assertEqual(len(set(replacements)), 3)
        expected = SAMPLE_REPLACED.replace("ff112131", "FF122232")
        self.assertEqual(path.read_text(encoding="utf-8"), expected)
        self.assertEqual(len(self.log.read_text(encoding="utf-8").splitlines()), 3)

    def test_bad_input_reprompts_and_eof_ends(self):
        from sample_theme import SAMPLE

        path = self.write("Dark.vstheme", SAMPLE)

        def answers():
            yield "not a color"
            yield "  #102030  "
            raise EOFError

        replies = answers()
        from theme_recolor.driver import run_interactive

        with redirect_stderr(io.StringIO()) as err:
            summary = run_interactive(path, self.log, prompt=lambda _msg: next(replies), out=lambda _s: None)
        self.assertEqual(summary.replaced, 2)
        self.assertIn("Invalid color", err.getvalue())

    def test_blank_first_answer_leaves_file_identical(self):
        from sample_theme import SAMPLE

        path = self.write("Dark.vstheme", SAMPLE)
        before = path.read_bytes()
        summary, _ = self._run(path, [""])
        self.assertEqual(summary.passes, 0)
        self.assertEqual(path.read_bytes(), before)
        self.assertTrue(self.log.exists())


class TestCli(_TempDirCase):

    def test_batch_cli_success(self):
        from sample_theme import SAMPLE
        from theme_recolor.cli import main

        src = self.write("Dark.vstheme", SAMPLE)
        out = self.tmp / "out.vstheme"
        with redirect_stdout(io.StringIO()) as stdout:
            code = main([str(src), "-o", str(out), "-s", "#102030", "--log", str(self.log)])
        self.assertEqual(code, 0)
        self.assertIn("2 color value(s) replaced", stdout.getvalue())
        self.assertTrue(out.exists())

    def test_batch_requires_output(self):
        from sample_theme import SAMPLE
        from theme_recolor.cli import main

        src = self.write("Dark.vstheme", SAMPLE)
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            main([str(src), "-s", "#102030", "--log", str(self.log)])
        self.assertEqual(ctx.exception.code, 2)

    def test_validation_error_exit_code(self):
        from theme_recolor.cli import main

        out = self.tmp / "out.vstheme"
        with redirect_stderr(io.StringIO()) as err:
            code = main([str(self.tmp / "missing.vstheme"), "-o", str(out), "-s", "#102030", "--log", str(self.log)])
        self.assertEqual(code, 1)
        self.assertIn("not found", err.getvalue())
        self.assertFalse(out.exists())

    def test_interactive_cli_reads_stdin(self):
        from sample_theme import SAMPLE, SAMPLE_REPLACED
        from theme_recolor.cli import main

        src = self.write("Dark.vstheme", SAMPLE)
        with mock.patch("sys.stdin", io.StringIO("#102030\n\n")), redirect_stdout(io.StringIO()):
            code = main([str(src), "--interactive", "--log", str(self.log)])
        self.assertEqual(code, 0)
        self.assertEqual(src.read_text(encoding="utf-8"), SAMPLE_REPLACED)

def _black_cube_theme() -> str:
    """Every color of the 2x2x2 cube at black: with radius 1, #000000 has nowhere to go."""
    import itertools

    from sample_theme import color_theme

    return color_theme([f"FF{r:02X}{g:02X}{b:02X}" for r, g, b in itertools.product((0, 1), repeat=3)])


class TestWriteTargets(_TempDirCase):

    def test_output_directory_rejected_before_writing(self):
        from sample_theme import SAMPLE
        from theme_recolor.driver import run_batch
        from theme_recolor.errors import PathNotWritable

        src = self.write("Dark.vstheme", SAMPLE)
        out_dir = self.tmp / "existing"
        out_dir.mkdir()
        with self.assertRaises(PathNotWritable):
            run_batch(src, out_dir, "#102030", self.log)
        self.assertFalse(self.log.exists())

    def test_log_directory_rejected_before_output_written(self):
        """A log path that is a directory fails before the output document exists."""
        from sample_theme import SAMPLE
        from theme_recolor.driver import run_batch
        from theme_recolor.errors import PathNotWritable

        src = self.write("Dark.vstheme", SAMPLE)
        out = self.tmp / "out.vstheme"
        self.log.mkdir(parents=True)
        with self.assertRaises(PathNotWritable):
            run_batch(src, out, "#102030", self.log)
        self.assertFalse(out.exists())

    def test_interactive_log_directory_rejected_before_prompting(self):
        from sample_theme import SAMPLE
        from theme_recolor.driver import run_interactive
        from theme_recolor.errors import PathNotWritable

        path = self.write("Dark.vstheme", SAMPLE)
        self.log.mkdir(parents=True)
        prompt = mock.Mock(side_effect=["#102030", ""])
        with self.assertRaises(PathNotWritable):
            run_interactive(path, self.log, prompt=prompt)
        prompt.assert_not_called()
        self.assertEqual(path.read_text(encoding="utf-8"), SAMPLE)

    def test_cli_output_directory_exit_code(self):
        from sample_theme import SAMPLE
        from theme_recolor.cli import main

        src = self.write("Dark.vstheme", SAMPLE)
        out_dir = self.tmp / "existing"
        out_dir.mkdir()
        with redirect_stderr(io.StringIO()) as err:
            code = main([str(src), "-o", str(out_dir), "-s", "#102030", "--log", str(self.log)])
        self.assertEqual(code, 1)
        self.assertIn("Error:", err.getvalue())
        self.assertFalse(self.log.exists())

    def test_cli_log_directory_leaves_no_output(self):
        from sample_theme import SAMPLE
        from theme_recolor.cli import main

        src = self.write("Dark.vstheme", SAMPLE)
        out = self.tmp / "out.vstheme"
        self.log.mkdir(parents=True)
        with redirect_stderr(io.StringIO()) as err:
            code = main([str(src), "-o", str(out), "-s", "#102030", "--log", str(self.log)])
        self.assertEqual(code, 1)
        self.assertIn("directory", err.getvalue())
        self.assertFalse(out.exists())

    def test_cli_reports_os_error_on_write(self):
        from sample_theme import SAMPLE
        from theme_recolor.cli import main

        src = self.write("Dark.vstheme", SAMPLE)
        out = self.tmp / "out.vstheme"
        with mock.patch("theme_recolor.driver.write_document", side_effect=PermissionError("denied")), \
                redirect_stderr(io.StringIO()) as err:
            code = main([str(src), "-o", str(out), "-s", "#102030", "--log", str(self.log)])
        self.assertEqual(code, 1)
        self.assertIn("Error: denied", err.getvalue())


class TestExhaustion(_TempDirCase):

    def test_interactive_exhausted_pass_skipped_next_prompt_applies(self):
        """#000000 cannot move within radius 1; the pass is dropped and #010101 still moves."""
        from theme_recolor.driver import run_interactive

        path = self.write("Cube.vstheme", _black_cube_theme())
        errors: list[str] = []
        prompt = mock.Mock(side_effect=["#000000", "#010101", ""])
        summary = run_interactive(
            path,
            self.log,
            config={"search": {"max_radius": 1}},
            prompt=prompt,
            out=lambda _s: None,
            err=errors.append,
        )
        self.assertEqual(summary.passes, 1)
        self.assertEqual(summary.replaced, 1)
        self.assertEqual(summary.entries[0].replacement, (2, 2, 2))
        text = path.read_text(encoding="utf-8")
        self.assertIn('Source="FF000000"', text)
        self.assertIn('Source="FF020202"', text)
        self.assertNotIn('Source="FF010101"', text)
        self.assertEqual(len(errors), 1)
        self.assertIn("No unused color", errors[0])

    def test_interactive_invalid_input_goes_to_err(self):
        from sample_theme import SAMPLE
        from theme_recolor.driver import run_interactive

        path = self.write("Dark.vstheme", SAMPLE)
        errors: list[str] = []
        prompt = mock.Mock(side_effect=["#12", ""])
        with redirect_stderr(io.StringIO()) as stderr:
            run_interactive(path, self.log, prompt=prompt, out=lambda _s: None, err=errors.append)
        self.assertEqual(len(errors), 1)
        self.assertTrue(errors[0].startswith("Error: Invalid color"))
        self.assertEqual(stderr.getvalue(), "")

    def test_batch_cli_exhaustion_writes_nothing(self):
        from theme_recolor.cli import main

        src = self.write("Cube.vstheme", _black_cube_theme())
        cfg = self.write("radius1.yaml", "search:\n  max_radius: 1\n")
        out = self.tmp / "out.vstheme"
        with redirect_stderr(io.StringIO()) as err:
            code = main([str(src), "-o", str(out), "-s", "#000000", "--log", str(self.log), "--config", str(cfg)])
        self.assertEqual(code, 1)
        self.assertIn("No unused color", err.getvalue())
        self.assertFalse(out.exists())
        self.assertFalse(self.log.exists())


if __name__ == "__main__":
    unittest.main()
