"""
Backends turning expanded trees into runnable code.
"""

from .python import PythonEmitter, emit_function, compile_function

__all__ = ["PythonEmitter", "emit_function", "compile_function"]
