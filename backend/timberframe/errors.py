"""Exception types raised by the sizing engine."""

from __future__ import annotations


class TimberFrameError(Exception):
    """Base class for timberframe errors."""


class InvalidSizingInput(TimberFrameError, ValueError):
    """A sizing input is non-positive, non-finite or otherwise unusable."""


class CatalogError(TimberFrameError):
    """The size catalog file cannot be used at all."""
