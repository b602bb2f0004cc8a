"""
Top-level driver for Jlang.

A `Session` reads top-level constructs one at a time (definitions,
extern declarations and bare expressions), lowers each into the
session's LLVM module and reports what happened. A construct that fails
to parse or lower is skipped; the session carries on with the next one.

Author: xwest
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, TextIO, Union

import llvmlite.ir as ll

from .config import CompilerConfig
from .diagnostics import CompilerError
from .lexer.lexer import Lexer
from .lexer.tokens import TokenType
from .parser.ast_nodes import Function, Prototype
from .parser.parser import Parser
from .ir.ir_generator import IRGenerator
from .backend.llvm_backend import LLVMBackend

logger = logging.getLogger(__name__)


class ConstructKind(Enum):
    """The three kinds of top-level construct."""
    DEFINITION = "definition"
    EXTERN = "extern"
    EXPRESSION = "expression"


@dataclass
class TopLevelResult:
    """What became of one top-level construct."""
    kind: ConstructKind
    node: Optional[Union[Function, Prototype]] = None
    function: Optional[ll.Function] = None
    error: Optional[CompilerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def stage(self) -> Optional[str]:
        """'parse' or 'lowering' for failed constructs."""
        if self.ok:
            return None
        return "parse" if self.node is None else "lowering"


class Session:
    """
    One compilation session.

    The session owns the IR generator, so every function lowered by any
    call to `run` stays visible to the constructs that follow.
    """

    def __init__(self, config: Optional[CompilerConfig] = None,
                 on_result: Optional[Callable[[TopLevelResult], None]] = None,
                 on_prompt: Optional[Callable[[], None]] = None):
        """
        Initialize the session.

        Args:
            config: Compiler settings; defaults to `CompilerConfig()`
            on_result: Called with each construct's result as soon as it is known
            on_prompt: Called whenever the session is ready for more input
        """
        self.config = config or CompilerConfig()
        self.backend = LLVMBackend()
        self.generator = IRGenerator(self.config.module_name,
                                     verifier=self.backend.verify_function,
                                     verify=self.config.verify)
        self.on_result = on_result
        self.on_prompt = on_prompt
        self.results: List[TopLevelResult] = []
        self._anon_count = 0

    @property
    def module(self) -> ll.Module:
        return self.generator.module

    def module_ir(self) -> str:
        return self.backend.print_llvm_ir(self.module)

    def run(self, source: Union[str, TextIO], filename: str = "<string>") -> List[TopLevelResult]:
        """
        Compile every top-level construct in `source`, in order.

        Returns:
            One result per construct (separating ';' are not constructs)
        """
        self._prompt()
        parser = Parser(Lexer(source, filename), self.config.binop_precedence,
                        self.config.anon_prefix, self.config.max_nesting_depth)
        # Anonymous names must stay unique across runs of the same session
        parser.anon_count = self._anon_count

        results = []
        while True:
            token = parser.current
            if token.type == TokenType.EOF:
                break
            if token.is_char(';'):
                parser.advance()
                continue

            if token.type == TokenType.DEF:
                result = self.handle_definition(parser)
            elif token.type == TokenType.EXTERN:
                result = self.handle_extern(parser)
            else:
                result = self.handle_top_level_expression(parser)

            results.append(result)
            if self.on_result is not None:
                self.on_result(result)
            self._prompt()

        self._anon_count = parser.anon_count
        self.results.extend(results)
        return results

    def handle_definition(self, parser: Parser) -> TopLevelResult:
        return self._handle(parser, ConstructKind.DEFINITION, parser.parse_definition)

    def handle_extern(self, parser: Parser) -> TopLevelResult:
        return self._handle(parser, ConstructKind.EXTERN, parser.parse_extern)

    def handle_top_level_expression(self, parser: Parser) -> TopLevelResult:
        return self._handle(parser, ConstructKind.EXPRESSION, parser.parse_top_level_expr)

    def _handle(self, parser: Parser, kind: ConstructKind, parse) -> TopLevelResult:
        parsed = parse()
        if not parsed.ok:
            # Skip the offending token so the next construct can start
            parser.advance()
            return TopLevelResult(kind, error=parsed.error)

        lowered = self.generator.lower(parsed.value)
        if not lowered.ok:
            return TopLevelResult(kind, node=parsed.value, error=lowered.error)

        logger.debug("Compiled %s %s", kind.value, lowered.value.name)
        return TopLevelResult(kind, node=parsed.value, function=lowered.value)

    def _prompt(self):
        if self.on_prompt is not None:
            self.on_prompt()
