#!/usr/bin/env python3

"""Application layer orchestrating header compilation."""

from . import generators

__all__ = [
    "generators",
]
