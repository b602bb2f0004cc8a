"""
Command line front-end for the Jlang compiler (`jlangc`).

Reads Jlang source from a file or stdin, compiles each top-level
construct as it arrives and prints its LLVM IR.

Author: xwest
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from . import __version__
from .config import CompilerConfig
from .driver import ConstructKind, Session, TopLevelResult

BANNERS = {
    ConstructKind.DEFINITION: "Parsed a function definition.",
    ConstructKind.EXTERN: "Parsed an extern",
    ConstructKind.EXPRESSION: "Parsed a top-level expr",
}


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jlangc",
        description="Compile Jlang source to LLVM IR",
    )
    parser.add_argument("file", nargs="?", help="Source file (default: stdin)")
    parser.add_argument("--module-name", default="jlang", help="Name of the LLVM module")
    parser.add_argument("--no-verify", action="store_true",
                        help="Skip LLVM verification of each function")
    parser.add_argument("--no-module-dump", action="store_true",
                        help="Do not print the whole module at end of input")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Diagnostics verbosity (default: WARNING)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _print_result(out: TextIO):
    def on_result(result: TopLevelResult):
        if result.ok:
            print(BANNERS[result.kind], file=out)
            print(result.function, file=out)
    return on_result


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    config = CompilerConfig(module_name=args.module_name, verify=not args.no_verify)
    out = sys.stdout

    on_prompt = None
    if args.file is None and sys.stdin.isatty():
        def on_prompt():
            out.write(config.prompt)
            out.flush()

    session = Session(config, on_result=_print_result(out), on_prompt=on_prompt)

    if args.file is None:
        results = session.run(sys.stdin, "<stdin>")
    else:
        try:
            with open(args.file, "r", encoding="utf-8") as f:
                results = session.run(f, args.file)
        except OSError as e:
            print(f"jlangc: cannot read {args.file}: {e.strerror}", file=sys.stderr)
            return 2

    if not args.no_module_dump:
        print(session.module_ir(), file=out)

    return 0 if all(result.ok for result in results) else 1


if __name__ == "__main__":
    sys.exit(main())
