#!/usr/bin/env python3

"""Registry generator (Application Layer).

Compiles every contract header of a contracts directory into
``<Name>.qbi`` documents, using contract_def.h for indices and qpi.h as a
shared prelude. Registry documents omit ``generatedAt`` so that
regenerating from the same source revision is byte-for-byte stable.
"""

from pathlib import Path

from ...domain.models.qbi import document_to_json
from ...domain.services.compilation import CompileOptions, HeaderCompiler
from ...infrastructure.config import get_config
from ...infrastructure.logging import ProgressTracker, get_logger, log_timing
from ...utils import (
    contract_name_from_header,
    contract_public_key_hex,
    create_document_filename,
    is_contract_header,
)
from .file_compiler import load_contract_indices, read_text, with_prelude

logger = get_logger(__name__)


class RegistryGenerator:
    """Generates a directory of QBI documents from contract headers."""

    def __init__(
        self,
        contract_def_path: Path,
        contracts_dir: Path,
        output_dir: Path,
        source_repo: str | None = None,
        source_revision: str | None = None,
        generator_version: str | None = None,
    ):
        """Initialize generator.

        Args:
            contract_def_path: contract_def.h listing contract indices
            contracts_dir: Directory holding qpi.h and the contract headers
            output_dir: Directory that receives the .qbi documents
            source_repo: Source repository URL recorded in each document
            source_revision: Source revision recorded in each document
            generator_version: Version recorded in each document
        """
        self.contract_def_path = contract_def_path
        self.contracts_dir = contracts_dir
        self.output_dir = output_dir
        self.source_repo = source_repo
        self.source_revision = source_revision
        self.generator_version = generator_version
        self.config = get_config()
        self.progress = ProgressTracker(logger)

    def find_contract_headers(self) -> list[str]:
        """List contract header file names, sorted."""
        return sorted(
            path.name
            for path in self.contracts_dir.iterdir()
            if path.is_file() and is_contract_header(path.name, self.config["QPI_HEADER"])
        )

    @log_timing
    def generate(self) -> list[Path]:
        """Compile all contract headers and write their documents.

        Returns:
            Paths of the written documents, in header name order

        Raises:
            FileNotFoundError: If contract_def.h or qpi.h is missing
        """
        self.progress.reset()
        written: list[Path] = []

        with self.progress.track_operation("compile-registry"):
            indices = load_contract_indices(self.contract_def_path)
            prelude = read_text(self.contracts_dir / self.config["QPI_HEADER"])
            headers = self.find_contract_headers()
            logger.info(f"Compiling {len(headers)} contract headers from {self.contracts_dir}")

            self.output_dir.mkdir(parents=True, exist_ok=True)

            for file_name in headers:
                with self.progress.track_header(file_name):
                    written.append(self._compile_one(file_name, prelude, indices))

        self.progress.log_memory_usage()
        self.progress.report_summary()
        return written

    def _compile_one(self, file_name: str, prelude: str, indices: dict[str, int]) -> Path:
        contract_name = contract_name_from_header(file_name)
        contract_index = indices.get(file_name)
        if contract_index is None:
            logger.debug(f"{file_name} has no contract_def.h stanza")

        options = CompileOptions(
            contract_name=contract_name,
            contract_index=contract_index,
            contract_public_key_hex=(
                contract_public_key_hex(contract_index) if contract_index is not None else None
            ),
            source_path=f"contracts/{file_name}",
            source_repo=self.source_repo,
            source_revision=self.source_revision,
            generator_version=self.generator_version,
            include_generated_at=False,
        )
        source = with_prelude(read_text(self.contracts_dir / file_name), prelude)
        document = HeaderCompiler(options).compile(source)

        self.progress.count_entries(len(document.entries))
        self.progress.count_warnings(len(document.warnings))

        output_path = self.output_dir / create_document_filename(
            contract_name, self.config["OUTPUT_SUFFIX"]
        )
        output_path.write_text(document_to_json(document), encoding="utf-8")
        logger.info(f"[SUCCESS] {output_path} ({len(document.entries)} entries)")
        return output_path
