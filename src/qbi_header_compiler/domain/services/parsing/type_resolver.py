#!/usr/bin/env python3

"""Resolution of declared C++ type strings into TypeRefs.

Resolution never fails. Anything that cannot be resolved becomes
``Bytes(0)`` and a warning is appended to the compilation's warning list.
Order of resolution:

1. normalization (``const``, ``&``, ``QPI::``)
2. the pattern catalog in :mod:`.type_patterns`
3. ``typedef``/``using`` aliases declared in the header
4. structs declared in the same header, memoized per compilation
5. fallback to ``Bytes(0)`` with an "Unknown type" warning
"""

import re
from collections.abc import Mapping

from ....infrastructure.logging import get_logger
from ...models.qbi import Bytes, TypeRef
from ...repositories.cache import StructCache
from .constant_evaluator import resolve_length
from .field_parser import parse_struct_fields
from .struct_locator import locate_struct_body
from .text_utils import collapse_whitespace
from .type_patterns import match_type_pattern

logger = get_logger(__name__)

_LEADING_CONST = re.compile(r"^const\s+")
_ELABORATED = re.compile(r"^(?:struct|class)\s+")
_NAMESPACE_PREFIX = "QPI::"


def normalize_type_name(raw_type: str) -> str:
    """Strip qualifiers, elaborated specifiers and the QPI namespace from a declared type."""
    name = collapse_whitespace(raw_type)
    name = _LEADING_CONST.sub("", name)
    name = _ELABORATED.sub("", name)
    if name.endswith("&"):
        name = name[:-1].rstrip()
    if name.startswith(_NAMESPACE_PREFIX):
        name = name[len(_NAMESPACE_PREFIX) :]
    return name


class TypeResolver:
    """Resolves type strings within one header compilation.

    All state (constants, aliases, warnings, struct cache) belongs to the
    compilation that created the resolver.

    Attributes:
        source: Header text used to find same-header structs
        constants: Named integer constants
        aliases: Alias name to raw target type
        warnings: Accumulated resolution warnings
        struct_cache: Memo of resolved same-header structs
    """

    def __init__(
        self,
        source: str,
        constants: Mapping[str, int],
        aliases: Mapping[str, str],
        warnings: list[str] | None = None,
        struct_cache: StructCache | None = None,
    ):
        self.source = source
        self.constants = constants
        self.aliases = aliases
        self.warnings: list[str] = warnings if warnings is not None else []
        self.struct_cache = struct_cache if struct_cache is not None else StructCache()
        self._aliases_in_progress: set[str] = set()

    def warn(self, message: str) -> None:
        """Record a resolution warning."""
        logger.debug(f"Resolution warning: {message}")
        self.warnings.append(message)

    def resolve_length(self, token: str) -> int | None:
        """Resolve an array length against this compilation's constants."""
        return resolve_length(token, self.constants)

    def resolve(self, raw_type: str) -> TypeRef:
        """Resolve a declared type string.

        Args:
            raw_type: Type as written in the header, e.g. ``"const QPI::id&"``

        Returns:
            The resolved TypeRef; ``Bytes(0)`` if unresolvable
        """
        name = normalize_type_name(raw_type)

        found = match_type_pattern(name)
        if found is not None:
            pattern, match = found
            return pattern.build(match, self)

        target = self.aliases.get(name)
        if target is not None and normalize_type_name(target) != name:
            return self._resolve_alias(name, target)

        struct_ref = self.resolve_struct(name)
        if struct_ref is not None:
            return struct_ref

        self.warn(f"Unknown type: {name} (treated as bytes[0])")
        return Bytes(0)

    def _resolve_alias(self, name: str, target: str) -> TypeRef:
        if name in self._aliases_in_progress:
            self.warn(f"Recursive type alias: {name} (treated as bytes[0])")
            return Bytes(0)

        self._aliases_in_progress.add(name)
        try:
            return self.resolve(target)
        finally:
            self._aliases_in_progress.discard(name)

    def resolve_struct(self, name: str) -> TypeRef | None:
        """Resolve a struct declared in the header by name.

        Returns:
            The memoized Struct, or None if the header declares no such struct
        """
        cached = self.struct_cache.get(name)
        if cached is not None:
            return cached

        body = locate_struct_body(self.source, name)
        if body is None:
            return None

        if not self.struct_cache.begin(name):
            self.warn(f"Recursive struct reference: {name} (treated as bytes[0])")
            return Bytes(0)

        try:
            type_ref = parse_struct_fields(body, self)
        except Exception:
            self.struct_cache.abandon(name)
            raise
        self.struct_cache.put(name, type_ref)
        logger.debug(f"Resolved struct {name} ({len(type_ref.fields)} fields)")
        return type_ref
