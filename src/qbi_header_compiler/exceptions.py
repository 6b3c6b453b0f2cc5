#!/usr/bin/env python3

"""Exception hierarchy for fatal errors.

Resolution problems inside a header (unknown types, unresolved lengths) are
never raised; they are collected as warnings. The errors below signal caller
bugs or unusable input and unwind the whole operation.
"""


class QbiError(Exception):
    """Base class for all fatal compiler errors."""


class LayoutError(QbiError, ValueError):
    """A TypeRef violates a structural invariant (e.g. a negative length)."""


class ContractIndexError(QbiError, ValueError):
    """A contract index does not fit in an unsigned 32-bit integer."""


class QbiFormatError(QbiError, ValueError):
    """A serialized QBI value could not be decoded."""


class ConfigError(QbiError, ValueError):
    """The runtime configuration is invalid."""
