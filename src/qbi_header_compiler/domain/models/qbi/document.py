#!/usr/bin/env python3

"""QBI document model."""

from dataclasses import dataclass

from .entry import CompiledEntry

QBI_VERSION = "0.1"


@dataclass(frozen=True)
class ContractInfo:
    """Contract identity."""

    name: str
    contract_index: int | None = None
    contract_public_key_hex: str | None = None
    """32-byte hex string (little-endian u64 index, rest zeros) when known."""
    contract_id: str | None = None


@dataclass(frozen=True)
class DocumentMeta:
    """Provenance and diagnostics attached to a document."""

    source: str | None = None
    source_repo: str | None = None
    source_revision: str | None = None
    generated_at: str | None = None
    generator: str | None = None
    generator_version: str | None = None
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class QbiDocument:
    """Compiled interface of one contract header."""

    contract: ContractInfo
    entries: tuple[CompiledEntry, ...]
    meta: DocumentMeta | None = None
    qbi_version: str = QBI_VERSION

    @property
    def warnings(self) -> tuple[str, ...]:
        return self.meta.warnings if self.meta is not None else ()

    def find_entry(self, name: str) -> CompiledEntry | None:
        """Return the first entry with the given name."""
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None
