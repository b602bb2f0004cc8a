"""
Jlang Parser Implementation

Recursive descent for primary expressions and operator-precedence
(precedence climbing) for binary expressions. The parser pulls tokens
from the lexer on demand and keeps one token of lookahead in `current`.

Each top-level entry point returns a `Result`: the AST on success, or the
`ParseError` that stopped it. On failure the offending token is left in
`current`; skipping past it is up to the caller.

Author: xwest
"""

import logging
from typing import Dict, List, Optional

from ..lexer.lexer import Lexer
from ..lexer.tokens import Token, TokenType
from ..diagnostics import Result, report
from .ast_nodes import (
    NumberExpr, VariableExpr, BinaryExpr, CallExpr, Prototype, Function
)
from .errors import (
    ParseError, create_unexpected_token_error, create_expected_token_error,
    create_prototype_name_error, create_prototype_open_error,
    create_prototype_close_error, create_argument_list_error, create_nesting_error
)

logger = logging.getLogger(__name__)


# Binary operator precedence; higher binds tighter
DEFAULT_BINOP_PRECEDENCE: Dict[str, int] = {
    '<': 10,
    '+': 20,
    '-': 20,
    '*': 40,
}

# Identifiers start with a letter, so this can never clash with a user name
ANONYMOUS_FUNCTION_PREFIX = "__anon_expr"

# How many expressions may be open at once (parentheses and call arguments)
MAX_NESTING_DEPTH = 100


class Parser:
    """
    Jlang parser.

    Owns the lexer and the current (lookahead) token. Construct it, then
    call one of `parse_definition`, `parse_extern` or `parse_top_level_expr`
    according to `current`.
    """

    def __init__(self, lexer: Lexer, binop_precedence: Optional[Dict[str, int]] = None,
                 anon_prefix: str = ANONYMOUS_FUNCTION_PREFIX,
                 max_nesting_depth: int = MAX_NESTING_DEPTH):
        """
        Initialize the parser and read the first token.

        Args:
            lexer: Token source
            binop_precedence: Operator precedence table (copied)
            anon_prefix: Name prefix for wrapped top-level expressions
            max_nesting_depth: Deepest expression nesting accepted before P007
        """
        self.lexer = lexer
        self.binop_precedence = dict(DEFAULT_BINOP_PRECEDENCE if binop_precedence is None
                                     else binop_precedence)
        self.anon_prefix = anon_prefix
        self.anon_count = 0
        self.max_nesting_depth = max_nesting_depth
        self.depth = 0
        self.errors: List[ParseError] = []

        self.current: Token = self.lexer.next_token()

    def advance(self) -> Token:
        """Replace the lookahead with the next token and return it."""
        self.current = self.lexer.next_token()
        return self.current

    def set_precedence(self, op: str, precedence: int):
        """Install (or change) a binary operator."""
        if len(op) != 1:
            raise ValueError(f"binary operators are single characters, got {op!r}")
        if precedence <= 0:
            raise ValueError("operator precedence must be positive")
        self.binop_precedence[op] = precedence

    def get_token_precedence(self) -> int:
        """Precedence of `current` as a binary operator, -1 if it is not one."""
        if self.current.type != TokenType.CHAR:
            return -1
        precedence = self.binop_precedence.get(self.current.lexeme, -1)
        if precedence <= 0:
            return -1
        return precedence

    # ------------------------------------------------------------------
    # Top-level constructs
    # ------------------------------------------------------------------

    def parse_definition(self) -> Result[Function]:
        """definition := 'def' prototype expression"""
        location = self.current.location
        self.advance()  # eat def

        proto = self.parse_prototype()
        if not proto.ok:
            return proto

        body = self.parse_expression()
        if not body.ok:
            return body

        return Result.success(Function(proto.value, body.value, location))

    def parse_extern(self) -> Result[Prototype]:
        """extern := 'extern' prototype"""
        self.advance()  # eat extern
        return self.parse_prototype()

    def parse_top_level_expr(self) -> Result[Function]:
        """Wrap a bare expression in an anonymous zero-argument function."""
        location = self.current.location
        body = self.parse_expression()
        if not body.ok:
            return body

        name = f"{self.anon_prefix}{self.anon_count}"
        self.anon_count += 1
        proto = Prototype(name, (), location)
        return Result.success(Function(proto, body.value, location))

    def parse_prototype(self) -> Result[Prototype]:
        """prototype := identifier '(' identifier* ')'"""
        if self.current.type != TokenType.IDENTIFIER:
            return self._fail(create_prototype_name_error(self.current))

        location = self.current.location
        name = self.current.value
        self.advance()

        if not self.current.is_char('('):
            return self._fail(create_prototype_open_error(self.current))

        params = []
        while self.advance().type == TokenType.IDENTIFIER:
            params.append(self.current.value)

        if not self.current.is_char(')'):
            return self._fail(create_prototype_close_error(self.current))
        self.advance()  # eat )

        return Result.success(Prototype(name, tuple(params), location))

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def parse_expression(self) -> Result:
        """expression := primary (binop primary)*"""
        if self.depth >= self.max_nesting_depth:
            return self._fail(create_nesting_error(self.current, self.max_nesting_depth))

        self.depth += 1
        try:
            lhs = self.parse_primary()
            if not lhs.ok:
                return lhs
            return self.parse_binop_rhs(0, lhs.value)
        finally:
            self.depth -= 1

    def parse_binop_rhs(self, expr_precedence: int, lhs) -> Result:
        """
        Precedence climbing.

        Folds `(binop primary)*` onto `lhs` while the operators bind at
        least as tightly as `expr_precedence`. Equal precedence associates
        to the left; a tighter operator after the right operand pulls the
        rest of that operand in through a recursive call.
        """
        while True:
            token_precedence = self.get_token_precedence()
            if token_precedence < expr_precedence:
                return Result.success(lhs)

            op_token = self.current
            self.advance()  # eat binop

            rhs = self.parse_primary()
            if not rhs.ok:
                return rhs

            if token_precedence < self.get_token_precedence():
                rhs = self.parse_binop_rhs(token_precedence + 1, rhs.value)
                if not rhs.ok:
                    return rhs

            lhs = BinaryExpr(op_token.lexeme, lhs, rhs.value, op_token.location)

    def parse_primary(self) -> Result:
        """primary := number | identifierexpr | parenexpr"""
        if self.current.type == TokenType.NUMBER:
            return self.parse_number_expr()
        if self.current.type == TokenType.IDENTIFIER:
            return self.parse_identifier_expr()
        if self.current.is_char('('):
            return self.parse_paren_expr()
        return self._fail(create_unexpected_token_error(self.current))

    def parse_number_expr(self) -> Result[NumberExpr]:
        result = NumberExpr(self.current.value, self.current.location)
        self.advance()
        return Result.success(result)

    def parse_paren_expr(self) -> Result:
        """parenexpr := '(' expression ')'"""
        self.advance()  # eat (
        inner = self.parse_expression()
        if not inner.ok:
            return inner

        if not self.current.is_char(')'):
            return self._fail(create_expected_token_error(')', self.current))
        self.advance()  # eat )
        return inner

    def parse_identifier_expr(self) -> Result:
        """
        identifierexpr := identifier
                        | identifier '(' (expression (',' expression)*)? ')'
        """
        location = self.current.location
        name = self.current.value
        self.advance()  # eat identifier

        if not self.current.is_char('('):
            return Result.success(VariableExpr(name, location))

        self.advance()  # eat (
        args = []
        if not self.current.is_char(')'):
            while True:
                arg = self.parse_expression()
                if not arg.ok:
                    return arg
                args.append(arg.value)

                if self.current.is_char(')'):
                    break
                if not self.current.is_char(','):
                    return self._fail(create_argument_list_error(self.current))
                self.advance()  # eat ,

        self.advance()  # eat )
        return Result.success(CallExpr(name, tuple(args), location))

    def _fail(self, error: ParseError) -> Result:
        self.errors.append(error)
        report(error, logger)
        return Result.failure(error)
