"""Exceptions raised by flowtree operations.

All of them derive from ValueError so callers that only know about
ValueError keep working.
"""

from __future__ import annotations


class FlowtreeError(ValueError):
    """Base class for every error raised by an operation."""


class SelectionError(FlowtreeError):
    """The anchor is missing, or the wrong number or kind of nodes was given."""


class DescriptorError(FlowtreeError):
    """A descriptor is missing or malformed, or a parent lookup failed."""


class GeometryError(FlowtreeError):
    """Requested sizes or gaps would produce an unusable placement."""
