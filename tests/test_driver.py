"""
Test suite for the Jlang top-level driver.

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from jlang.config import CompilerConfig
from jlang.driver import Session, ConstructKind


class TestSession(unittest.TestCase):
    """Test cases for compiling whole programs through a session."""

    def setUp(self):
        self.session = Session()

    def test_constructs_in_order(self):
        results = self.session.run("extern sin(x) def f(x) sin(x)*2 f(1)")
        self.assertEqual([r.kind for r in results],
                         [ConstructKind.EXTERN, ConstructKind.DEFINITION, ConstructKind.EXPRESSION])
        self.assertTrue(all(r.ok for r in results))
        self.assertEqual([r.function.name for r in results], ["sin", "f", "__anon_expr0"])
        self.assertEqual(self.session.results, results)

    def test_semicolons_are_skipped(self):
        self.assertEqual(self.session.run(";;;"), [])
        results = self.session.run("1; ;2;")
        self.assertEqual(len(results), 2)

    def test_empty_input(self):
        self.assertEqual(self.session.run(""), [])
        self.assertEqual(self.session.run("# just a comment\n"), [])

    def test_recovers_after_parse_error(self):
        with self.assertLogs("jlang.parser.parser", level="ERROR"):
            results = self.session.run(") def bar(x) x 1+1")
        self.assertEqual(len(results), 3)

        self.assertFalse(results[0].ok)
        self.assertEqual(results[0].stage, "parse")
        self.assertEqual(results[0].error.code, "P001")
        self.assertIsNone(results[0].node)

        self.assertEqual(results[1].kind, ConstructKind.DEFINITION)
        self.assertEqual(results[1].function.name, "bar")
        self.assertEqual(results[2].kind, ConstructKind.EXPRESSION)
        self.assertTrue(results[2].ok)

    def test_continues_after_lowering_error(self):
        with self.assertLogs("jlang.ir.ir_generator", level="ERROR"):
            results = self.session.run("def f(x) y def g(x) x*x g(3)")
        self.assertEqual([r.ok for r in results], [False, True, True])
        self.assertEqual(results[0].stage, "lowering")
        self.assertEqual(results[0].node.name, "f")
        self.assertIsNone(results[0].function)
        self.assertNotIn("f", self.session.module.globals)

    def test_module_shared_across_runs(self):
        self.session.run("def square(x) x*x 1")
        results = self.session.run("square(4) 2")
        self.assertTrue(all(r.ok for r in results))
        self.assertEqual([r.function.name for r in results], ["__anon_expr1", "__anon_expr2"])
        self.assertEqual(sorted(self.session.generator.context.functions),
                         ["__anon_expr0", "__anon_expr1", "__anon_expr2", "square"])

    def test_long_expression_then_more_input(self):
        results = self.session.run("1" + "+1" * 1200 + "; 2")
        self.assertEqual([r.ok for r in results], [True, True])
        self.assertEqual([r.function.name for r in results], ["__anon_expr0", "__anon_expr1"])

        later = self.session.run("def g(x) x")
        self.assertTrue(later[0].ok, later[0].error)
        self.assertIsNone(self.session.backend.verify_module(self.session.module))

    def test_deep_parentheses_then_more_input(self):
        source = "(" * 400 + "1" + ")" * 400 + "; def g(x) x*x g(2)"
        with self.assertLogs("jlang.parser.parser", level="ERROR"):
            results = self.session.run(source)
        self.assertEqual(results[0].error.code, "P007")
        self.assertEqual(results[0].stage, "parse")
        self.assertEqual([r.kind for r in results[-2:]],
                         [ConstructKind.DEFINITION, ConstructKind.EXPRESSION])
        self.assertTrue(all(r.ok for r in results[-2:]))
        self.assertIn("g", self.session.module.globals)
        self.assertIsNone(self.session.backend.verify_module(self.session.module))

    def test_nesting_limit_from_config(self):
        session = Session(CompilerConfig(max_nesting_depth=2))
        with self.assertLogs("jlang.parser.parser", level="ERROR"):
            results = session.run("((1)); (2)")
        self.assertEqual(results[0].error.code, "P007")
        self.assertTrue(results[-1].ok)

    def test_callbacks(self):
        seen = []
        prompts = []
        session = Session(on_result=seen.append, on_prompt=lambda: prompts.append(len(seen)))
        results = session.run("def f(x) x f(2)")
        self.assertEqual(seen, results)
        # Once before reading and once after each construct
        self.assertEqual(prompts, [0, 1, 2])

    def test_module_passes_llvm_verification(self):
        with self.assertLogs("jlang.parser.parser", level="ERROR"):
            self.session.run("""
            # A small program with a mistake in the middle
            extern sin(x)
            extern cos(x)
            def f(a b) sin(a) * cos(b) + a < b
            def broken(x) (x +
            f(1, 2)
            """)
        self.assertIsNone(self.session.backend.verify_module(self.session.module))

    def test_module_ir(self):
        self.session.run("extern sin(x) def f(x) sin(x)")
        ir = self.session.module_ir()
        self.assertIn('declare double @"sin"(double %"x")', ir)
        self.assertIn('define double @"f"(double %"x")', ir)

    def test_config(self):
        config = CompilerConfig(module_name="custom", anon_prefix="__top", verify=False)
        session = Session(config)
        self.assertEqual(session.module.name, "custom")
        self.assertIsNone(session.generator.verifier)
        results = session.run("1")
        self.assertEqual(results[0].function.name, "__top0")

    def test_custom_precedence(self):
        config = CompilerConfig()
        config.binop_precedence['<'] = 50
        session = Session(config)
        result = session.run("1 < 2 + 3")[0]
        self.assertEqual(result.node.body.op, '+')
        self.assertEqual(CompilerConfig().binop_precedence['<'], 10)


if __name__ == '__main__':
    unittest.main()
