"""Generators for QBI documents."""

from .file_compiler import compile_header_file, load_contract_indices
from .registry_generator import RegistryGenerator

__all__ = [
    "RegistryGenerator",
    "compile_header_file",
    "load_contract_indices",
]
