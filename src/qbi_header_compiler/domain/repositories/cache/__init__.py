#!/usr/bin/env python3

"""Caches scoped to a single header compilation."""

from .struct_cache import StructCache

__all__ = [
    "StructCache",
]
