"""
IR Generator for Jlang.

Lowers AST nodes into LLVM IR with `llvmlite.ir`. Every value in the
language is a double, so each function has the signature
`double(double, ...)`.

Author: xwest
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

import llvmlite.ir as ll

from ..diagnostics import Result, report
from ..parser.ast_nodes import (
    ASTNode, NumberExpr, VariableExpr, BinaryExpr, CallExpr, Prototype, Function
)
from ..backend.llvm_backend import LLVMBackend
from .errors import (
    LoweringError, create_unknown_variable_error, create_invalid_operator_error,
    create_unknown_function_error, create_argument_count_error,
    create_redefinition_error, create_arity_redefinition_error,
    create_duplicate_parameter_error, create_verification_error, create_nesting_error
)

logger = logging.getLogger(__name__)

DOUBLE = ll.DoubleType()

# Returns None for a well-formed function, otherwise a description of the problem
Verifier = Callable[[ll.Module, ll.Function], Optional[str]]


@dataclass
class LoweringContext:
    """
    State threaded through lowering.

    `module` lives for the whole session and doubles as the function table.
    `builder` and `named_values` belong to the function being lowered and
    are replaced at the start of each one.
    """
    module: ll.Module
    builder: Optional[ll.IRBuilder] = None
    named_values: Dict[str, ll.Argument] = field(default_factory=dict)

    @property
    def functions(self) -> Dict[str, ll.Function]:
        """Function table: every declared or defined function by name."""
        return {name: value for name, value in self.module.globals.items()
                if isinstance(value, ll.Function)}

    def lookup_function(self, name: str) -> Optional[ll.Function]:
        value = self.module.globals.get(name)
        if isinstance(value, ll.Function):
            return value
        return None

    def enter_function(self, function: ll.Function, params) -> ll.Block:
        """Open an entry block in `function` and scope its parameters."""
        entry_block = function.append_basic_block("entry")
        self.builder = ll.IRBuilder(entry_block)
        self.named_values = dict(zip(params, function.args))
        return entry_block

    def leave_function(self):
        self.builder = None
        self.named_values = {}

    def rename_args(self, function: ll.Function, params):
        """Give `function`'s arguments new names, in order."""
        # Release every old name first so a permutation is not deduplicated
        for arg in function.args:
            function.scope._useset.discard(arg.name)
        for arg, param in zip(function.args, params):
            arg.name = param

    def remove_function(self, function: ll.Function):
        """Drop `function` from the module so its name can be reused."""
        del self.module.globals[function.name]
        # llvmlite has no public API to release a global name
        self.module.scope._useset.discard(function.name)


class IRGenerator:
    """
    Generates LLVM IR from Jlang AST nodes.

    One generator corresponds to one compilation session: functions
    lowered earlier stay visible to everything lowered later.
    """

    def __init__(self, module_name: str = "jlang", verifier: Optional[Verifier] = None,
                 verify: bool = True):
        """
        Initialize the IR generator.

        Args:
            module_name: Name of the LLVM module being built
            verifier: Structural check run on each completed function;
                defaults to LLVM's verifier via `LLVMBackend`
            verify: Set to False to skip verification entirely
        """
        self.context = LoweringContext(ll.Module(name=module_name))
        if verify and verifier is None:
            verifier = LLVMBackend().verify_function
        self.verifier = verifier if verify else None
        self.errors: List[LoweringError] = []

    @property
    def module(self) -> ll.Module:
        return self.context.module

    def lower(self, node: ASTNode) -> Result:
        """Lower any AST node; expressions yield values, prototypes and functions yield functions."""
        if isinstance(node, NumberExpr):
            return self._lower_number(node)
        elif isinstance(node, VariableExpr):
            return self._lower_variable(node)
        elif isinstance(node, BinaryExpr):
            return self._lower_binary(node)
        elif isinstance(node, CallExpr):
            return self._lower_call(node)
        elif isinstance(node, Prototype):
            return self._lower_prototype(node)
        elif isinstance(node, Function):
            return self._lower_function(node)
        raise TypeError(f"cannot lower {type(node).__name__}")

    def _lower_number(self, node: NumberExpr) -> Result:
        return Result.success(ll.Constant(DOUBLE, node.value))

    def _lower_variable(self, node: VariableExpr) -> Result:
        value = self.context.named_values.get(node.name)
        if value is None:
            return self._fail(create_unknown_variable_error(
                node.name, node.location, list(self.context.named_values)))
        return Result.success(value)

    def _lower_binary(self, node: BinaryExpr) -> Result:
        # Left-associative chains nest down the lhs; walk that spine in a loop
        spine = []
        while isinstance(node, BinaryExpr):
            spine.append(node)
            node = node.lhs

        lhs = self.lower(node)
        if not lhs.ok:
            return lhs

        for binary in reversed(spine):
            rhs = self.lower(binary.rhs)
            if not rhs.ok:
                return rhs
            lhs = self._emit_binary(binary, lhs.value, rhs.value)
            if not lhs.ok:
                return lhs
        return lhs

    def _emit_binary(self, node: BinaryExpr, lhs: ll.Value, rhs: ll.Value) -> Result:
        builder = self.context.builder
        if node.op == '+':
            return Result.success(builder.fadd(lhs, rhs, "addtmp"))
        elif node.op == '-':
            return Result.success(builder.fsub(lhs, rhs, "subtmp"))
        elif node.op == '*':
            return Result.success(builder.fmul(lhs, rhs, "multmp"))
        elif node.op == '<':
            cmp = builder.fcmp_unordered('<', lhs, rhs, "cmptmp")
            # i1 back to the language's only type: 0.0 or 1.0
            return Result.success(builder.uitofp(cmp, DOUBLE, "booltmp"))
        return self._fail(create_invalid_operator_error(node.op, node.location))

    def _lower_call(self, node: CallExpr) -> Result:
        callee = self.context.lookup_function(node.callee)
        if callee is None:
            return self._fail(create_unknown_function_error(node.callee, node.location))

        if len(callee.args) != len(node.args):
            return self._fail(create_argument_count_error(
                node.callee, len(callee.args), len(node.args), node.location))

        args = []
        for arg in node.args:
            value = self.lower(arg)
            if not value.ok:
                return value
            args.append(value.value)

        return Result.success(self.context.builder.call(callee, args, "calltmp"))

    def _lower_prototype(self, node: Prototype) -> Result:
        seen = set()
        for param in node.params:
            if param in seen:
                return self._fail(create_duplicate_parameter_error(node.name, param, node.location))
            seen.add(param)

        existing = self.context.lookup_function(node.name)
        if existing is not None:
            if len(existing.args) != node.arity:
                return self._fail(create_arity_redefinition_error(
                    node.name, len(existing.args), node.arity, node.location))
            return Result.success(existing)

        function_type = ll.FunctionType(DOUBLE, [DOUBLE] * node.arity)
        function = ll.Function(self.module, function_type, name=node.name)
        for arg, param in zip(function.args, node.params):
            arg.name = param
        return Result.success(function)

    def _lower_function(self, node: Function) -> Result:
        proto = node.proto
        existing = self.context.lookup_function(proto.name)
        if existing is not None and existing.blocks:
            return self._fail(create_redefinition_error(proto.name, node.location))

        handle = self._lower_prototype(proto)
        if not handle.ok:
            return handle
        function = handle.value

        # A def may name its parameters differently from an earlier extern
        if [arg.name for arg in function.args] != list(proto.params):
            self.context.rename_args(function, proto.params)

        result = None
        self.context.enter_function(function, proto.params)
        try:
            result = self._lower_body(function, node)
        finally:
            self.context.leave_function()
            if result is None or not result.ok:
                self._discard(function, was_declared=existing is not None)

        if result.ok:
            logger.debug("Lowered function %s", function.name)
        return result

    def _lower_body(self, function: ll.Function, node: Function) -> Result:
        try:
            body = self.lower(node.body)
        except RecursionError:
            return self._fail(create_nesting_error(function.name, node.location))
        if not body.ok:
            return body

        self.context.builder.ret(body.value)
        error = self._verify(function, node)
        if error is not None:
            return self._fail(error)
        return Result.success(function)

    def _verify(self, function: ll.Function, node: Function) -> Optional[LoweringError]:
        if self.verifier is None:
            return None
        problem = self.verifier(self.module, function)
        if problem is None:
            return None
        return create_verification_error(problem, node.location)

    def _discard(self, function: ll.Function, was_declared: bool):
        """Undo a failed definition."""
        if was_declared:
            # Back to the bare extern declaration it was before
            function.blocks.clear()
        else:
            self.context.remove_function(function)

    def _fail(self, error: LoweringError) -> Result:
        self.errors.append(error)
        report(error, logger)
        return Result.failure(error)
