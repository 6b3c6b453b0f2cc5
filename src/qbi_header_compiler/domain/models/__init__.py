#!/usr/bin/env python3

"""Domain models for the header compiler."""

from . import qbi

__all__ = [
    "qbi",
]
