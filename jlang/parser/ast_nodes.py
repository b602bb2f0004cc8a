"""
Abstract Syntax Tree node definitions for Jlang.

The AST is data only: a closed set of immutable node types. Each node
exclusively owns its children, so a parsed construct is always a strict
tree. Lowering dispatches over these types in one place
(`jlang.ir.ir_generator.IRGenerator.lower`).

Source locations ride along for diagnostics but do not take part in
equality, so trees can be compared structurally.

Author: xwest
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from ..lexer.tokens import SourceLocation


@dataclass(frozen=True)
class NumberExpr:
    """Numeric literal, e.g. `1.5`."""
    value: float
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class VariableExpr:
    """Reference to a function parameter, resolved at lowering time."""
    name: str
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class BinaryExpr:
    """Binary operator application, e.g. `a + b`."""
    op: str
    lhs: "Expression"
    rhs: "Expression"
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class CallExpr:
    """Function call, e.g. `foo(1, x)`."""
    callee: str
    args: Tuple["Expression", ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Prototype:
    """
    A function's name and ordered parameter names.

    On its own (from `extern`) it is a forward declaration.
    """
    name: str
    params: Tuple[str, ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def arity(self) -> int:
        return len(self.params)


@dataclass(frozen=True)
class Function:
    """A function definition: prototype plus a single body expression."""
    proto: Prototype
    body: "Expression"
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def name(self) -> str:
        return self.proto.name


Expression = Union[NumberExpr, VariableExpr, BinaryExpr, CallExpr]

# Anything the IR generator accepts
ASTNode = Union[NumberExpr, VariableExpr, BinaryExpr, CallExpr, Prototype, Function]


def dump(node: ASTNode) -> str:
    """Render a node as compact s-expression text, for debugging and tests."""
    if isinstance(node, NumberExpr):
        return repr(node.value)
    if isinstance(node, VariableExpr):
        return node.name
    if isinstance(node, BinaryExpr):
        return f"({node.op} {dump(node.lhs)} {dump(node.rhs)})"
    if isinstance(node, CallExpr):
        args = " ".join(dump(arg) for arg in node.args)
        return f"(call {node.callee}{' ' + args if args else ''})"
    if isinstance(node, Prototype):
        return f"(proto {node.name} ({' '.join(node.params)}))"
    if isinstance(node, Function):
        return f"(def {dump(node.proto)} {dump(node.body)})"
    raise TypeError(f"not an AST node: {node!r}")
