#!/usr/bin/env python3

"""Registered and compiled entry models."""

from dataclasses import dataclass
from enum import Enum

from .type_ref import TypeRef


class EntryKind(Enum):
    """Which registration macro declared the entry."""

    FUNCTION = "function"
    PROCEDURE = "procedure"


@dataclass(frozen=True)
class RegisteredEntry:
    """One REGISTER_USER_FUNCTION / REGISTER_USER_PROCEDURE occurrence."""

    kind: EntryKind
    name: str
    input_type: int


@dataclass(frozen=True)
class CompiledEntry:
    """A registered entry with its resolved input/output shapes and sizes."""

    kind: EntryKind
    name: str
    input_type: int
    input: TypeRef
    output: TypeRef
    input_size: int
    output_size: int

    @property
    def sort_key(self) -> tuple[int, str]:
        return (self.input_type, self.name)
