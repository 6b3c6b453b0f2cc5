#!/usr/bin/env python3

"""Repositories for compilation-scoped state."""

from . import cache

__all__ = [
    "cache",
]
