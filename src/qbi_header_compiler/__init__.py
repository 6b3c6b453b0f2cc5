"""QBI header compiler - Qubic contract interface extraction from C++ headers."""

from .domain.models.qbi import QbiDocument, document_to_json
from .domain.services.compilation import CompileOptions, HeaderCompiler, compile_contract_header
from .domain.services.validation import ValidationResult, validate_qbi_document
from .infrastructure.config import Config
from .main import main

__all__ = [
    "CompileOptions",
    "Config",
    "HeaderCompiler",
    "QbiDocument",
    "ValidationResult",
    "compile_contract_header",
    "document_to_json",
    "main",
    "validate_qbi_document",
]
