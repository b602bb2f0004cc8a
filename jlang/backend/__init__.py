"""
Jlang Backend Package

The part of the LLVM backend the front-end talks to: module verification
and IR rendering.

Author: xwest
"""

from .llvm_backend import LLVMBackend

__all__ = [
    "LLVMBackend",
]
