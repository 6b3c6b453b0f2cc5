#!/usr/bin/env python3

"""Parsing services for contract header text."""

from .alias_extractor import extract_type_aliases
from .constant_evaluator import build_constant_table, evaluate, resolve_length
from .contract_def_parser import ContractDefEntry, contract_indices_by_header, parse_contract_def
from .entry_extractor import extract_registered_entries
from .field_parser import parse_struct_fields, split_statements
from .struct_locator import locate_struct_body
from .type_patterns import TYPE_PATTERNS, TypePattern, match_type_pattern
from .type_resolver import TypeResolver, normalize_type_name

__all__ = [
    "ContractDefEntry",
    "TYPE_PATTERNS",
    "TypePattern",
    "TypeResolver",
    "build_constant_table",
    "contract_indices_by_header",
    "evaluate",
    "extract_registered_entries",
    "extract_type_aliases",
    "locate_struct_body",
    "match_type_pattern",
    "normalize_type_name",
    "parse_contract_def",
    "parse_struct_fields",
    "resolve_length",
    "split_statements",
]
