"""Header compilation services."""

from .header_compiler import CompileOptions, HeaderCompiler, compile_contract_header

__all__ = ["CompileOptions", "HeaderCompiler", "compile_contract_header"]
