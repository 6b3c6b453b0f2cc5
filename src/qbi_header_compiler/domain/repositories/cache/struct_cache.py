#!/usr/bin/env python3

"""Per-compilation memo of resolved same-header structs."""

from typing import Any

from ....domain.models.qbi import TypeRef


class StructCache:
    """Maps struct names to their resolved TypeRef for one compilation.

    Also tracks which structs are currently being resolved so a struct that
    (directly or through other structs) refers to itself is detected instead
    of recursed into forever. Instances must not be shared between
    compilations.
    """

    def __init__(self) -> None:
        self.cache: dict[str, TypeRef] = {}
        self._in_progress: set[str] = set()
        self.hits = 0
        self.misses = 0

    def get(self, name: str) -> TypeRef | None:
        """Get a resolved struct by name.

        Args:
            name: Struct name

        Returns:
            Cached TypeRef or None if not resolved yet
        """
        if name in self.cache:
            self.hits += 1
            return self.cache[name]

        self.misses += 1
        return None

    def put(self, name: str, type_ref: TypeRef) -> None:
        """Store a resolved struct and clear its in-progress mark."""
        self.cache[name] = type_ref
        self._in_progress.discard(name)

    def begin(self, name: str) -> bool:
        """Mark a struct as being resolved.

        Returns:
            False if the struct is already being resolved (a cycle)
        """
        if name in self._in_progress:
            return False
        self._in_progress.add(name)
        return True

    def abandon(self, name: str) -> None:
        """Clear the in-progress mark without caching a result."""
        self._in_progress.discard(name)

    def stats(self) -> dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with cache performance metrics
        """
        total_requests = self.hits + self.misses
        hit_rate = (self.hits / total_requests * 100) if total_requests > 0 else 0.0

        return {
            "size": len(self.cache),
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": f"{hit_rate:.1f}%",
        }

    def __len__(self) -> int:
        """Return current cache size."""
        return len(self.cache)

    def __contains__(self, name: str) -> bool:
        """Check if a struct has been resolved without counting a lookup."""
        return name in self.cache
