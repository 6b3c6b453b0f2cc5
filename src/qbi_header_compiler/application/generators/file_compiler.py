#!/usr/bin/env python3

"""Compilation of header files on disk (Application Layer)."""

from pathlib import Path

from ...domain.models.qbi import QbiDocument
from ...domain.services.compilation import CompileOptions, compile_contract_header
from ...domain.services.parsing import contract_indices_by_header, parse_contract_def
from ...infrastructure.config import get_config
from ...infrastructure.logging import get_logger
from ...utils import contract_name_from_header, contract_public_key_hex

logger = get_logger(__name__)


def read_text(path: Path) -> str:
    """Read a header as UTF-8."""
    return path.read_text(encoding="utf-8")


def load_contract_indices(contract_def_path: Path) -> dict[str, int]:
    """Map header base names to contract indices from a contract_def.h file."""
    entries = parse_contract_def(read_text(contract_def_path))
    logger.debug(f"{contract_def_path}: {len(entries)} contract stanzas")
    return contract_indices_by_header(entries)


def with_prelude(source: str, prelude: str | None) -> str:
    """Prepend the qpi.h prelude so its constants and types resolve."""
    return f"{prelude}\n{source}" if prelude is not None else source


def compile_header_file(
    header_path: Path,
    qpi_path: Path | None = None,
    contract_def_path: Path | None = None,
    generator_version: str | None = None,
) -> QbiDocument:
    """Compile a single contract header file.

    Args:
        header_path: Contract header, e.g. ``contracts/QUtil.h``
        qpi_path: Optional qpi.h prepended to the header
        contract_def_path: Optional contract_def.h used to look up the index
        generator_version: Version recorded in ``meta.generatorVersion``

    Returns:
        Compiled document
    """
    prelude = read_text(qpi_path) if qpi_path is not None else None
    source = with_prelude(read_text(header_path), prelude)

    contract_index: int | None = None
    if contract_def_path is not None:
        contract_index = load_contract_indices(contract_def_path).get(header_path.name)
        if contract_index is None:
            logger.warning(f"{header_path.name} is not registered in {contract_def_path}")

    options = CompileOptions(
        contract_name=contract_name_from_header(header_path),
        contract_index=contract_index,
        contract_public_key_hex=(
            contract_public_key_hex(contract_index) if contract_index is not None else None
        ),
        source_path=str(header_path),
        generator_version=generator_version,
        include_generated_at=get_config()["INCLUDE_GENERATED_AT"],
    )
    return compile_contract_header(source, options)
