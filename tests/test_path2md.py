#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Functional test-suite for *path2md*.

• Exercises the CLI end to end on the fixture tree (full dump, structure-only,
  list-only, ignore globs, output file, JSON report).
• Covers the documented scenarios: ignored ``*.dat`` in a small project,
  single-file root, symlink root.
"""
from __future__ import annotations

import contextlib
import io
import json
import os
import re
import subprocess
import tempfile
import unittest
from pathlib import Path
from typing import List, Tuple
from unittest.mock import patch

# Make the src/ layout importable when running from a checkout
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in os.sys.path:
    os.sys.path.insert(0, str(SRC_DIR))

import path2md  # noqa: E402
from path2md import DumpConfig, Path2Md, render  # noqa: E402
from path2md.cli import run  # noqa: E402

# --------------------------------------------------------------------------- #
#  Fixtures                                                                   #
# --------------------------------------------------------------------------- #
TOOLS_DIR = Path(__file__).resolve().parent / "tools"
FIXTURES = Path(__file__).resolve().parents[1] / "test-fixtures"
BUILD_SCRIPT = TOOLS_DIR / "build_fixtures.py"
# Build the tree once at import-time — it is tiny
subprocess.check_call([os.sys.executable, str(BUILD_SCRIPT)], stdout=subprocess.DEVNULL)

TREE_STRUCTURE = (
    "# Directory Structure\n"
    "\n"
    "    .\n"
    "    ├─README.md\n"
    "    ├─zeta.txt\n"
    "    ├─build\n"
    "    │ └─out.log\n"
    "    ├─docs\n"
    "    │ ├─guide.md\n"
    "    │ └─img\n"
    "    │   └─logo.png\n"
    "    └─src\n"
    "      ├─main.py\n"
    "      ├─util.py\n"
    "      └─node_modules\n"
    "        └─dep.js\n"
    "\n"
    "\n"
)

TREE_FILES = [
    "README.md",
    "zeta.txt",
    "build/out.log",
    "docs/guide.md",
    "docs/img/logo.png",
    "src/main.py",
    "src/util.py",
    "src/node_modules/dep.js",
]


# --------------------------------------------------------------------------- #
#  Helpers                                                                    #
# --------------------------------------------------------------------------- #
def _run(args: List[str]) -> Tuple[int, str, str]:
    """Execute the CLI with *args*; return (exit code, stdout, stderr)."""
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stderr(err):
        code = run(args, stdout=out, stderr=err)
    return code, out.getvalue(), err.getvalue()


def _headers(dump: str, candidates: List[str]) -> List[str]:
    """Return the content headers of *dump* (lines equal to a candidate path), in order."""
    return [ln for ln in dump.splitlines() if ln in candidates]


class Path2MdBaseTest(unittest.TestCase):
    """Utility mix-in providing common assertions."""

    def assertInDump(self, member: str, dump: str, *, msg: str | None = None) -> None:
        self.assertIn(member, dump, msg or f"'{member}' not found in dump")

    def assertNotInDump(self, member: str, dump: str, *, msg: str | None = None) -> None:
        self.assertNotIn(member, dump, msg or f"'{member}' unexpectedly present")


# --------------------------------------------------------------------------- #
#  1. Documented scenarios                                                    #
# --------------------------------------------------------------------------- #
class ScenarioTests(Path2MdBaseTest):
    def test_project_with_ignored_dat(self) -> None:
        code, dump, _ = _run([str(FIXTURES / "proj"), "-i", "*.dat"])
        self.assertEqual(code, 0)
        self.assertEqual(
            dump,
            "# Directory Structure\n"
            "\n"
            "    .\n"
            "    └─a.txt\n"
            "\n"
            "\n"
            "a.txt\n"
            "\n"
            "    hello\n"
            "\n"
            "\n",
        )
        self.assertNotInDump("bin.dat", dump)

    def test_project_without_ignore_summarises_binary(self) -> None:
        code, dump, _ = _run([str(FIXTURES / "proj")])
        self.assertEqual(code, 0)
        self.assertInDump("    ├─a.txt\n    └─bin.dat\n", dump)
        self.assertInDump(
            "bin.dat\n\n    Arbitrary Binary Data (application/octet-stream)\n    ... 10 bytes ...\n\n\n",
            dump,
        )

    def test_single_file_root(self) -> None:
        code, dump, _ = _run([str(FIXTURES / "notes.txt")])
        self.assertEqual(code, 0)
        self.assertNotInDump("# Directory Structure", dump)
        self.assertEqual(dump, "notes.txt\n\n    first line\n    second\n\n\n")

    def test_utf16_file_rendered_as_text(self) -> None:
        code, dump, _ = _run([str(FIXTURES / "utf16.txt")])
        self.assertEqual(code, 0)
        self.assertEqual(dump, "utf16.txt\n\n    héllo\n    wörld\n\n\n")

    def test_crlf_line_endings_and_trailing_spaces_dropped(self) -> None:
        dump = render(DumpConfig(root=FIXTURES / "crlf.txt"))
        self.assertEqual(dump, "crlf.txt\n\n    one\n    two\n\n\n")
        self.assertNotInDump("\r", dump)

    def test_empty_file_has_header_only(self) -> None:
        report = path2md.DumpReport()
        dump = render(DumpConfig(root=FIXTURES / "empty.txt"), report=report)
        self.assertEqual(dump, "empty.txt\n\n\n\n")
        self.assertEqual(report.text_files, 1)
        self.assertEqual(report.binary_files, 0)

    def test_symlink_root_fails_without_output(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            link = Path(td) / "link"
            try:
                os.symlink(FIXTURES / "proj", link)
            except (OSError, NotImplementedError):
                self.skipTest("symlinks unavailable on this platform")
            with self.assertRaises(path2md.UnsupportedPathType):
                render(DumpConfig(root=link))

            code, dump, err = _run([str(link)])
            self.assertEqual(code, 1)
            self.assertEqual(dump, "")
            self.assertInDump("symlink", err)


# --------------------------------------------------------------------------- #
#  2. Full dump of a nested tree                                              #
# --------------------------------------------------------------------------- #
class FullDumpTests(Path2MdBaseTest):
    def setUp(self) -> None:
        code, self.dump, _ = _run([str(FIXTURES / "tree")])
        self.assertEqual(code, 0)

    def test_structure_section_first(self) -> None:
        self.assertTrue(self.dump.startswith(TREE_STRUCTURE))

    def test_headers_follow_walk_order(self) -> None:
        body = self.dump[len(TREE_STRUCTURE):]
        self.assertEqual(_headers(body, TREE_FILES), TREE_FILES)

    def test_text_lines_are_trimmed_and_indented(self) -> None:
        self.assertInDump("README.md\n\n    # Title\n    \n    text\n\n\n", self.dump)
        self.assertInDump("src/main.py\n\n    print('hi')\n    \n\n\n", self.dump)

    def test_png_summarised(self) -> None:
        size = (FIXTURES / "tree/docs/img/logo.png").stat().st_size
        self.assertInDump(
            "docs/img/logo.png\n\n"
            "    Portable Network Graphics (image/png)\n"
            f"    ... {size} bytes ...\n",
            self.dump,
        )
        self.assertNotInDump("PNG", self.dump.replace("Portable Network Graphics", ""))

    def test_output_is_reproducible(self) -> None:
        _, again, _ = _run([str(FIXTURES / "tree")])
        self.assertEqual(self.dump, again)


# --------------------------------------------------------------------------- #
#  3. Ignore rules                                                            #
# --------------------------------------------------------------------------- #
class IgnoreTests(Path2MdBaseTest):
    def test_directory_pattern_prunes_subtree(self) -> None:
        _, dump, _ = _run([str(FIXTURES / "tree"), "-i", "docs"])
        self.assertNotInDump("docs", dump)
        self.assertNotInDump("guide", dump)
        self.assertNotInDump("logo.png", dump)
        # build is now the second to last directory, src stays last
        self.assertInDump("    ├─build\n    │ └─out.log\n    └─src\n", dump)

    def test_bare_name_matches_at_any_depth(self) -> None:
        _, dump, _ = _run([str(FIXTURES / "tree"), "-i", "node_modules"])
        self.assertNotInDump("dep.js", dump)
        self.assertInDump("    └─src\n      ├─main.py\n      └─util.py\n", dump)

    def test_comma_delimited_and_repeated(self) -> None:
        _, dump, _ = _run([str(FIXTURES / "tree"), "-i", "build,docs", "-i", "src/*.py"])
        expected = [f for f in TREE_FILES if f in ("README.md", "zeta.txt", "src/node_modules/dep.js")]
        self.assertEqual(_headers(dump, TREE_FILES), expected)

    def test_last_sibling_recomputed_after_pruning(self) -> None:
        _, dump, _ = _run([str(FIXTURES / "tree"), "-i", "src"])
        self.assertInDump("    └─docs\n      ├─guide.md\n      └─img\n        └─logo.png\n", dump)

    def test_env_patterns_are_merged(self) -> None:
        with patch.dict(os.environ, {"PATH2MD_IGNORE": "*.md,*.png"}):
            _, dump, _ = _run([str(FIXTURES / "tree")])
        self.assertNotInDump("README.md", dump)
        self.assertNotInDump("logo.png", dump)
        self.assertInDump("zeta.txt", dump)

    def test_absolute_pattern_never_matches(self) -> None:
        absolute = str((FIXTURES / "proj" / "bin.dat").resolve())
        _, dump, _ = _run([str(FIXTURES / "proj"), "-i", absolute])
        self.assertInDump("bin.dat", dump)


# --------------------------------------------------------------------------- #
#  4. Alternative modes                                                       #
# --------------------------------------------------------------------------- #
class ModeTests(Path2MdBaseTest):
    def test_structure_only(self) -> None:
        code, dump, _ = _run([str(FIXTURES / "tree"), "--structure-only"])
        self.assertEqual(code, 0)
        self.assertEqual(dump, TREE_STRUCTURE)
        self.assertNotInDump("print('hi')", dump)

    def test_structure_only_single_file_is_noop(self) -> None:
        code, dump, _ = _run([str(FIXTURES / "notes.txt"), "-s"])
        self.assertEqual(code, 0)
        self.assertEqual(dump, "")

    def test_list_only(self) -> None:
        _, dump, _ = _run([str(FIXTURES / "tree"), "--list"])
        self.assertEqual(dump.splitlines(), TREE_FILES)

    def test_list_only_single_file(self) -> None:
        _, dump, _ = _run([str(FIXTURES / "notes.txt"), "-l"])
        self.assertEqual(dump, "notes.txt\n")

    def test_modes_are_mutually_exclusive(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as cm:
                run([str(FIXTURES / "tree"), "-s", "-l"])
        self.assertEqual(cm.exception.code, 2)

        with self.assertRaises(path2md.ConfigError):
            Path2Md(DumpConfig(root=FIXTURES, structure_only=True, list_only=True))


# --------------------------------------------------------------------------- #
#  5. Output sinks, errors and report                                         #
# --------------------------------------------------------------------------- #
class _ClosedPipe(io.StringIO):
    def write(self, s: str) -> int:
        raise BrokenPipeError(32, "Broken pipe")


class _FullDisk(io.StringIO):
    def write(self, s: str) -> int:
        raise OSError(28, "No space left on device")


class OutputTests(Path2MdBaseTest):
    def test_output_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            out = Path(td) / "dump.md"
            code, stdout, _ = _run([str(FIXTURES / "proj"), "-o", str(out)])
            self.assertEqual(code, 0)
            self.assertEqual(stdout, "")
            self.assertEqual(out.read_text(encoding="utf-8"), render(DumpConfig(root=FIXTURES / "proj")))

    def test_output_inside_root_is_not_dumped(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "a.txt").write_text("line\n" * 4000, encoding="utf-8")
            out = root / "b.md"
            code, _, _ = _run([str(root), "-o", str(out)])
            self.assertEqual(code, 0)
            dump = out.read_text(encoding="utf-8")
            self.assertNotInDump("b.md", dump)
            self.assertTrue(dump.startswith("# Directory Structure\n\n    .\n    └─a.txt\n\n\n"))
            self.assertEqual(dump.count("    line\n"), 4000)

    def test_output_excluded_with_relative_paths(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            sub = Path(td) / "docs"
            sub.mkdir()
            (sub / "a.txt").write_text("x\n", encoding="utf-8")
            cwd = os.getcwd()
            os.chdir(td)
            try:
                code, _, _ = _run(["docs", "-o", "docs/../docs/dump.md", "-l"])
            finally:
                os.chdir(cwd)
            self.assertEqual(code, 0)
            self.assertEqual((sub / "dump.md").read_text(encoding="utf-8"), "a.txt\n")

    def test_output_equal_to_single_file_root_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            target = Path(td) / "notes.md"
            target.write_text("keep me\n", encoding="utf-8")
            code, _, err = _run([str(target), "-o", str(target)])
            self.assertEqual(code, 1)
            self.assertInDump("Invalid configuration", err)
            self.assertEqual(target.read_text(encoding="utf-8"), "keep me\n")

    def test_missing_root(self) -> None:
        code, dump, err = _run([str(FIXTURES / "does-not-exist")])
        self.assertEqual(code, 1)
        self.assertEqual(dump, "")
        self.assertRegex(err, r"Failed to read metadata")

    def test_broken_pipe_exits_cleanly(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            code = run([str(FIXTURES / "proj")], stdout=_ClosedPipe())
        self.assertEqual(code, 0)

    def test_write_failure_is_wrapped(self) -> None:
        with self.assertRaises(path2md.OutputWriteFailed) as cm:
            Path2Md(DumpConfig(root=FIXTURES / "proj")).write(_FullDisk())
        self.assertIsInstance(cm.exception.__cause__, OSError)

        code, _, err = _run([str(FIXTURES / "notes.txt"), "-o", str(FIXTURES / "nope" / "out.md")])
        self.assertEqual(code, 1)
        self.assertInDump("Failed to write output", err)

    def test_json_report(self) -> None:
        code, _, err = _run([str(FIXTURES / "tree"), "--report"])
        self.assertEqual(code, 0)
        data = json.loads(err[err.index("{"):])
        self.assertEqual(data["mode"], "full")
        self.assertEqual(data["directories"], 5)
        self.assertEqual(data["text_files"], 7)
        self.assertEqual(data["binary_files"], 1)
        self.assertEqual(data["formats"]["Portable Network Graphics"], 1)

    def test_version_flag(self) -> None:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            with self.assertRaises(SystemExit) as cm:
                run(["--version"])
        self.assertEqual(cm.exception.code, 0)
        self.assertTrue(re.search(re.escape(path2md.__version__), out.getvalue()))


# --------------------------------------------------------------------------- #
#  Entry-point                                                                #
# --------------------------------------------------------------------------- #
if __name__ == "__main__":
    unittest.main(verbosity=2)
