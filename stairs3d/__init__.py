"""Procedural staircase meshes: straight and curved runs as flat-shaded vertex buffers."""
from __future__ import annotations

from typing import TYPE_CHECKING

from .curved import CurvedStairParameters, build_curved_geometry, generate_curved_stairs
from .errors import DegenerateGeometry, InvalidParameter, StairError
from .mesh import MeshBuffer, StairGeometry, assemble_mesh
from .steps import NumSteps, StepHeight, StepLayout, StepType, resolve_steps
from .straight import StraightStairParameters, build_straight_geometry, generate_straight_stairs

__all__ = [
    "generate_straight_stairs",
    "generate_curved_stairs",
    "build_straight_geometry",
    "build_curved_geometry",
    "StraightStairParameters",
    "CurvedStairParameters",
    "NumSteps",
    "StepHeight",
    "StepLayout",
    "StepType",
    "resolve_steps",
    "StairGeometry",
    "MeshBuffer",
    "assemble_mesh",
    "StairError",
    "InvalidParameter",
    "DegenerateGeometry",
    "render_preview",
]

if TYPE_CHECKING:  # pragma: no cover
    from .preview import render_preview


def __getattr__(name: str):
    if name == "render_preview":
        from .preview import render_preview as _render_preview

        return _render_preview
    raise AttributeError(name)
