#!/usr/bin/env python3

"""Contract header to QBI document compilation.

Orchestrates the parsing and layout services for one header:

- constant table, type aliases and registered entries are extracted first
- each entry's ``<Name>_input`` / ``<Name>_output`` struct is resolved
- layouts are computed and empty sides normalized to ``nodata``
- entries are ordered by ``(inputType, name)``

All mutable state (warnings, struct cache) is created per call, so separate
compilations never observe each other.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from ....infrastructure.config import get_constant_seed
from ....infrastructure.logging import get_logger, log_timing
from ...models.qbi import (
    CompiledEntry,
    ContractInfo,
    DocumentMeta,
    NoData,
    QbiDocument,
    RegisteredEntry,
    Struct,
    TypeRef,
)
from ...repositories.cache import StructCache
from ..layout import calculate_layout, calculate_padding
from ..parsing import (
    TypeResolver,
    build_constant_table,
    extract_registered_entries,
    extract_type_aliases,
)
from ..parsing.text_utils import strip_comments

logger = get_logger(__name__)

GENERATOR_NAME = "qbi-header-compiler"


@dataclass(frozen=True)
class CompileOptions:
    """Identity and provenance for one compilation."""

    contract_name: str
    contract_index: int | None = None
    contract_public_key_hex: str | None = None
    source_path: str | None = None
    source_repo: str | None = None
    source_revision: str | None = None
    generator_version: str | None = None
    include_generated_at: bool = True


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class HeaderCompiler:
    """Compiles contract header text into a QbiDocument."""

    def __init__(self, options: CompileOptions):
        """Initialize compiler.

        Args:
            options: Contract identity and provenance
        """
        self.options = options

    @log_timing
    def compile(self, header_source: str) -> QbiDocument:
        """Compile a header.

        Args:
            header_source: Header text, optionally prefixed with the qpi.h prelude

        Returns:
            Compiled document; resolution problems are listed in ``meta.warnings``

        Raises:
            LayoutError: If a resolved TypeRef violates a layout invariant
        """
        source = strip_comments(header_source)
        warnings: list[str] = []

        constants = build_constant_table(source, get_constant_seed())
        aliases = extract_type_aliases(source)
        registered = extract_registered_entries(source)
        resolver = TypeResolver(source, constants, aliases, warnings, StructCache())

        logger.debug(
            f"{self.options.contract_name}: {len(constants)} constants, "
            f"{len(aliases)} aliases, {len(registered)} registered entries"
        )

        compiled = [self._compile_entry(entry, resolver) for entry in registered]
        compiled.sort(key=lambda entry: entry.sort_key)
        logger.debug(f"{self.options.contract_name}: struct cache {resolver.struct_cache.stats()}")

        if warnings:
            logger.warning(
                f"{self.options.contract_name}: {len(warnings)} resolution warnings; "
                "affected fields were dropped or sized as bytes[0]"
            )

        return QbiDocument(
            contract=ContractInfo(
                name=self.options.contract_name,
                contract_index=self.options.contract_index,
                contract_public_key_hex=self.options.contract_public_key_hex,
            ),
            entries=tuple(compiled),
            meta=self._build_meta(warnings),
        )

    def _compile_entry(self, entry: RegisteredEntry, resolver: TypeResolver) -> CompiledEntry:
        input_ref, input_size = self._resolve_side(f"{entry.name}_input", resolver)
        output_ref, output_size = self._resolve_side(f"{entry.name}_output", resolver)

        logger.debug(
            f"{entry.kind.value} {entry.name} (inputType={entry.input_type}): "
            f"input={input_size}B output={output_size}B"
        )

        return CompiledEntry(
            kind=entry.kind,
            name=entry.name,
            input_type=entry.input_type,
            input=input_ref,
            output=output_ref,
            input_size=input_size,
            output_size=output_size,
        )

    def _resolve_side(self, struct_name: str, resolver: TypeResolver) -> tuple[TypeRef, int]:
        """Resolve one side of an entry and its size.

        Returns:
            Tuple of (type_ref, size); a missing or empty struct becomes
            ``NoData`` carrying its physical size
        """
        type_ref = resolver.resolve_struct(struct_name)
        if type_ref is None:
            type_ref = NoData()

        size = calculate_layout(type_ref).size

        if isinstance(type_ref, Struct):
            if not type_ref.fields:
                return NoData(expected_size=size), size
            padding = calculate_padding(type_ref)
            if padding:
                logger.debug(f"{struct_name}: {padding} padding bytes")
            return type_ref, size

        if isinstance(type_ref, NoData):
            return NoData(expected_size=size), size

        return type_ref, size

    def _build_meta(self, warnings: list[str]) -> DocumentMeta:
        options = self.options
        return DocumentMeta(
            source=options.source_path,
            source_repo=options.source_repo,
            source_revision=options.source_revision,
            generated_at=_utc_timestamp() if options.include_generated_at else None,
            generator=GENERATOR_NAME,
            generator_version=options.generator_version,
            warnings=tuple(warnings),
        )


def compile_contract_header(header_source: str, options: CompileOptions) -> QbiDocument:
    """Compile a header with a fresh :class:`HeaderCompiler`."""
    return HeaderCompiler(options).compile(header_source)
