"""Document validation services."""

from .document_validator import ValidationResult, format_json_path, validate_qbi_document

__all__ = ["ValidationResult", "format_json_path", "validate_qbi_document"]
