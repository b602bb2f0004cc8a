#!/usr/bin/env python3
"""
Main test runner for the Jlang compiler tests.

Runs a quick end-to-end smoke compile, then the unittest suite in tests/.

Author: xwest
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


def run_smoke_test() -> bool:
    """Push a small program through the whole pipeline."""

    print("🚀 Jlang Compiler Test Suite")
    print("=" * 60)

    try:
        from jlang.driver import Session
        print("✅ All compiler modules imported successfully")
        print()
    except ImportError as e:
        print(f"❌ Failed to import compiler modules: {e}")
        print("   Install llvmlite for the IR backend: pip install llvmlite")
        return False

    print("Testing simple compilation pipeline...")
    code = """
    # square and a comparison
    extern sin(x)
    def square(x) x * x
    def less(a b) a < b
    square(3) + sin(1.5) * less(1, 2);
    """

    session = Session()
    results = session.run(code, "<smoke>")
    failures = [result for result in results if not result.ok]

    print(f"  🔧 {len(results)} top-level constructs compiled")
    if failures:
        for result in failures:
            print(f"     ❌ {result.error.message}")
        print("❌ Compilation pipeline test FAILED")
        return False

    print("✅ Full compilation pipeline test PASSED")
    print()
    print("Generated LLVM IR:")
    print("-" * 40)
    print(session.module_ir())
    print("-" * 40)
    print()
    return True


def run_all_tests() -> bool:
    """Run all Jlang compiler tests."""
    if not run_smoke_test():
        return False

    suite = unittest.defaultTestLoader.discover(os.path.join(project_root, "tests"))
    result = unittest.TextTestRunner(verbosity=2).run(suite)
    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
