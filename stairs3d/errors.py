"""Errors raised while validating parameters or building stair meshes."""
from __future__ import annotations


class StairError(ValueError):
    """Base class for every error raised by :mod:`stairs3d`."""


class InvalidParameter(StairError):
    """A caller-supplied parameter is out of its valid range."""


class DegenerateGeometry(StairError):
    """A derived dimension collapsed to zero or became non-finite."""


__all__ = ["StairError", "InvalidParameter", "DegenerateGeometry"]
