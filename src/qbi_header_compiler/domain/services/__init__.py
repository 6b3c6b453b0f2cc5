#!/usr/bin/env python3

"""Domain services layer."""

from . import compilation, layout, parsing, validation

__all__ = [
    "compilation",
    "layout",
    "parsing",
    "validation",
]
