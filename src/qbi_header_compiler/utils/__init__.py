"""Utilities module initialization."""

from .contract_key import contract_public_key_hex
from .path_utils import (
    contract_name_from_header,
    create_document_filename,
    is_contract_header,
    sanitize_for_filesystem,
)

__all__ = [
    "contract_name_from_header",
    "contract_public_key_hex",
    "create_document_filename",
    "is_contract_header",
    "sanitize_for_filesystem",
]
