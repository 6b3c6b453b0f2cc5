"""Path utilities for contract headers and QBI documents."""

import re
import string
from pathlib import Path

_CONTRACT_HEADER = re.compile(r"^[A-Z].*\.h$")


def sanitize_for_filesystem(name: str, replacement: str = "_") -> str:
    """Sanitize a string to be safe for use as a filename."""
    if not name:
        return "unnamed"

    valid_chars = set(string.ascii_letters + string.digits + "_-.")
    sanitized = "".join(c if c in valid_chars else replacement for c in name)

    # Collapse multiple replacement characters
    if replacement in sanitized:
        pattern = re.escape(replacement) + "+"
        sanitized = re.sub(pattern, replacement, sanitized)

    sanitized = sanitized.strip(replacement)
    return sanitized or "unnamed"


def contract_name_from_header(header_path: str | Path) -> str:
    """``contracts/QUtil.h`` -> ``QUtil``."""
    name = Path(header_path).name
    return name[:-2] if name.endswith(".h") else name


def is_contract_header(file_name: str, qpi_header: str = "qpi.h") -> bool:
    """Whether a file in the contracts directory is a contract header.

    Contract headers start with an uppercase letter; the shared qpi.h
    prelude is never one.
    """
    return file_name != qpi_header and bool(_CONTRACT_HEADER.match(file_name))


def create_document_filename(contract_name: str, suffix: str = ".qbi") -> str:
    """Create a safe document filename for a contract."""
    return f"{sanitize_for_filesystem(contract_name)}{suffix}"
