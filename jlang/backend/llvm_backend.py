"""
LLVM backend collaborator for Jlang.

The front-end builds IR with `llvmlite.ir`; this module is the narrow
slice of the backend it relies on: a structural verifier and IR text
rendering. Code generation and execution live outside this package.

Author: xwest
"""

import logging
from typing import Optional, Union

import llvmlite.binding as llvm
import llvmlite.ir as ll

logger = logging.getLogger(__name__)


class LLVMBackend:
    """
    LLVM backend for Jlang.

    Checks lowered modules with LLVM's own verifier and renders IR.
    """

    def parse(self, module: ll.Module) -> 'llvm.ModuleRef':
        """
        Round-trip a module through the LLVM assembly parser.

        Raises:
            RuntimeError: If LLVM rejects the textual IR
        """
        return llvm.parse_assembly(str(module))

    def verify_module(self, module: ll.Module) -> Optional[str]:
        """
        Run LLVM's verifier over `module`.

        Returns:
            None when the module is well formed, otherwise LLVM's complaint
        """
        try:
            llvm_module = self.parse(module)
            llvm_module.verify()
        except RuntimeError as e:
            logger.debug("LLVM rejected module %r:\n%s", module.name, module)
            return str(e).strip()
        return None

    def verify_function(self, module: ll.Module, function: ll.Function) -> Optional[str]:
        """Verify the module that `function` was just added to."""
        problem = self.verify_module(module)
        if problem is not None:
            return f"function '{function.name}': {problem}"
        return None

    def print_llvm_ir(self, ir_object: Union[ll.Module, ll.Function]) -> str:
        """
        Get the LLVM IR of a module or a single function as a string.
        """
        return str(ir_object)
