"""Exceptions raised outside the descriptor core."""

from __future__ import annotations


class ElementInfoError(Exception):
    """Base class for elinfo errors."""


class RefNotFoundError(ElementInfoError, LookupError):
    """A ref or selector did not resolve to an element of the current snapshot."""


class CDPError(ElementInfoError, RuntimeError):
    """The DevTools connection failed or returned an error response."""
