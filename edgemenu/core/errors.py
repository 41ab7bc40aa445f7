"""Errors raised by the menu core."""

from __future__ import annotations


class EdgeMenuError(Exception):
    """Base class for recoverable core errors."""


class InvalidState(EdgeMenuError):
    """Operation called in the wrong drag state (e.g. move while idle)."""


class InvalidGeometry(EdgeMenuError):
    """Non-positive size or count, or an inverted travel range."""
