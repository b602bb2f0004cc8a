"""
Test suite for the jlangc command line tool.

Author: xwest
"""

import unittest
import io
import sys
import os
import tempfile
from contextlib import redirect_stdout, redirect_stderr
from unittest import mock

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from jlang.cli import main, build_arg_parser


class TestCLI(unittest.TestCase):
    """Test cases for `jlangc`."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def _write(self, code: str) -> str:
        path = os.path.join(self.tmpdir.name, "program.jl")
        with open(path, "w", encoding="utf-8") as f:
            f.write(code)
        return path

    def _run(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            status = main(argv)
        return status, out.getvalue(), err.getvalue()

    def test_compile_file(self):
        path = self._write("extern sin(x)\ndef square(x) x*x\nsquare(sin(2))\n")
        status, out, _ = self._run([path])
        self.assertEqual(status, 0)
        self.assertIn("Parsed an extern", out)
        self.assertIn("Parsed a function definition.", out)
        self.assertIn("Parsed a top-level expr", out)
        self.assertIn('define double @"square"', out)
        self.assertIn('declare double @"sin"', out)
        self.assertNotIn("Jlang>", out)

    def test_module_dump(self):
        path = self._write("def one() 1")
        _, out, _ = self._run([path, "--module-name", "demo"])
        self.assertIn('ModuleID = "demo"', out)

        _, out, _ = self._run([path, "--no-module-dump"])
        self.assertNotIn("ModuleID", out)

    def test_errors_set_exit_status(self):
        path = self._write("def f(x) y\ndef g(x) x\n")
        with self.assertLogs("jlang.ir.ir_generator", level="ERROR") as logs:
            status, out, _ = self._run([path])
        self.assertEqual(status, 1)
        self.assertIn("Unknown variable name 'y'", logs.output[0])
        self.assertIn('define double @"g"', out)

    def test_missing_file(self):
        status, _, err = self._run([os.path.join(self.tmpdir.name, "missing.jl")])
        self.assertEqual(status, 2)
        self.assertIn("cannot read", err)

    def test_reads_stdin(self):
        with mock.patch("sys.stdin", io.StringIO("def id(x) x\nid(4);\n")):
            status, out, _ = self._run(["--no-module-dump"])
        self.assertEqual(status, 0)
        self.assertEqual(out.count("Parsed"), 2)

    def test_arguments(self):
        args = build_arg_parser().parse_args(["prog.jl", "--no-verify", "--log-level", "DEBUG"])
        self.assertEqual(args.file, "prog.jl")
        self.assertTrue(args.no_verify)
        self.assertEqual(args.log_level, "DEBUG")
        self.assertEqual(args.module_name, "jlang")


if __name__ == '__main__':
    unittest.main()
