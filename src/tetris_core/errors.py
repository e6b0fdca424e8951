"""Exception types raised by the engine."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised for invalid field dimensions or a malformed shape table."""


class InvariantError(RuntimeError):
    """Raised when engine state would be corrupted by an internal defect.

    These are programming errors, for example settling a piece onto a border
    cell or a cell that is already occupied.  They are never caught inside the
    package.
    """
