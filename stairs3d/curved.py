"""Procedural curved (helical) staircase generator."""
from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple

from .errors import DegenerateGeometry, InvalidParameter
from .mesh import GeometryBuilder, MeshBuffer, StairGeometry, assemble_mesh
from .steps import NumSteps, StepType, check_nondegenerate, check_positive, make_step_type, resolve_steps

logger = logging.getLogger(__name__)


@dataclass
class CurvedStairParameters:
    """Shape of a staircase swept around a vertical axis.

    ``curvature`` is the total sweep in degrees. The axis sits
    ``inner_radius + step_width / 2`` away from the origin so the first riser
    is centred on it; ``ccw`` mirrors the sweep across the yz plane.
    """

    height: float = 2.0
    step_width: float = 1.0
    step_type: StepType = field(default_factory=NumSteps)
    curvature: float = 60.0
    inner_radius: float = 3.0
    ccw: bool = False
    sides: bool = True


class SweepRing(NamedTuple):
    """Vertex ids placed at one angular position of the sweep.

    ``inner_top``/``outer_top`` are ``None`` at the final position, which only
    carries the top edge of the last tread.
    """

    inner_base: int
    outer_base: int
    inner_top: Optional[int]
    outer_top: Optional[int]


def _check_curvature(curvature: object) -> float:
    if isinstance(curvature, bool) or not isinstance(curvature, numbers.Real):
        raise InvalidParameter(f"curvature must be a real number, got {curvature!r}")
    curvature = float(curvature)
    if not curvature >= 0.0:
        raise InvalidParameter(f"curvature must not be negative, got {curvature!r}")
    return curvature


def build_curved_geometry(params: CurvedStairParameters | None = None) -> StairGeometry:
    """Build the indexed faces of a curved staircase.

    Each step has a riser quad and a tread quad following the arc between two
    sweep positions. With ``params.sides`` a ground ring closes the solid with
    side triangles, wall slats, a bottom strip and a back quad.
    """
    params = params or CurvedStairParameters()
    step_width = check_nondegenerate("step_width", check_positive("step_width", params.step_width))
    inner_radius = check_nondegenerate("inner_radius", check_positive("inner_radius", params.inner_radius))
    curvature = _check_curvature(params.curvature)
    layout = resolve_steps(params.height, params.step_type)
    num_steps = layout.num_steps
    step_height = layout.step_height

    delta_angle = check_nondegenerate("delta_angle", math.radians(curvature) / num_steps)
    # At half a turn a tread collapses through the axis; beyond it the tread flips over.
    if delta_angle >= math.pi:
        raise DegenerateGeometry(f"delta_angle {delta_angle!r} must be less than half a turn")
    if params.sides and curvature >= 360.0:
        raise InvalidParameter(f"curvature must be below 360 degrees with sides, got {curvature!r}")
    mid_radius = inner_radius + step_width / 2.0
    # Scaled by num_steps a second time; the side and bottom uvs depend on it.
    step_depth = check_nondegenerate("step_depth", delta_angle * mid_radius / num_steps)

    outer_radius = inner_radius + step_width
    sign = 1.0 if params.ccw else -1.0
    axis_x = -sign * mid_radius

    def radial_points(i: int) -> Tuple[float, float, float, float]:
        dx = sign * math.cos(i * delta_angle)
        dz = math.sin(i * delta_angle)
        return (dx * inner_radius + axis_x, dz * inner_radius,
                dx * outer_radius + axis_x, dz * outer_radius)

    builder = GeometryBuilder()
    rings: List[SweepRing] = []
    for i in range(num_steps + 1):
        x0, z0, x1, z1 = radial_points(i)
        inner_base = builder.add_vertex(x0, i * step_height, z0)
        outer_base = builder.add_vertex(x1, i * step_height, z1)
        inner_top = outer_top = None
        if i != num_steps:
            inner_top = builder.add_vertex(x0, (i + 1) * step_height, z0)
            outer_top = builder.add_vertex(x1, (i + 1) * step_height, z1)
        rings.append(SweepRing(inner_base, outer_base, inner_top, outer_top))

    v = 0.0
    for ring, nxt in zip(rings, rings[1:]):
        builder.add_face(
            (ring.inner_base, ring.outer_base, ring.outer_top, ring.inner_top),
            [(0.0, v), (step_width, v), (step_width, v + step_height), (0.0, v + step_height)],
        )
        v += step_height
        builder.add_face(
            (ring.inner_top, ring.outer_top, nxt.outer_base, nxt.inner_base),
            [(0.0, v), (step_width, v), (step_width, v + step_depth), (0.0, v + step_depth)],
        )
        v += step_depth

    if params.sides:
        _add_sides(builder, rings, radial_points, step_width, step_depth)

    logger.debug("curved stairs: %d steps over %g degrees, %d vertices, %d faces",
                 num_steps, curvature, len(builder.vertices), len(builder.faces))
    return builder.freeze(layout, reverse=params.ccw)


def _add_sides(builder: GeometryBuilder, rings: List[SweepRing], radial_points,
               step_width: float, step_depth: float) -> None:
    num_steps = len(rings) - 1

    def side_uvs(corners: List[Tuple[int, int]]) -> List[Tuple[float, float]]:
        # (vertex id, sweep position) -> (arc offset, z)
        return [(position * step_depth, builder.vertices[vid][2]) for vid, position in corners]

    # Ground ring; the first sweep position already sits on the ground.
    ground: List[Tuple[int, int]] = [(rings[0].inner_base, rings[0].outer_base)]
    for i in range(1, num_steps + 1):
        x0, z0, x1, z1 = radial_points(i)
        ground.append((builder.add_vertex(x0, 0.0, z0), builder.add_vertex(x1, 0.0, z1)))

    # Triangles between each riser top and the next tread
    for i, (ring, nxt) in enumerate(zip(rings, rings[1:])):
        inner = [(ring.inner_base, i), (ring.inner_top, i), (nxt.inner_base, i + 1)]
        outer = [(ring.outer_base, i), (nxt.outer_base, i + 1), (ring.outer_top, i)]
        builder.add_face([vid for vid, _ in inner], side_uvs(inner))
        builder.add_face([vid for vid, _ in outer], side_uvs(outer))

    # Wall slats from each step's silhouette down to the ground ring
    for i, (ring, nxt) in enumerate(zip(rings, rings[1:])):
        (g_inner, g_outer), (h_inner, h_outer) = ground[i], ground[i + 1]
        if i == 0:
            inner = [(ring.inner_base, 0), (nxt.inner_base, 1), (h_inner, 1)]
            outer = [(ring.outer_base, 0), (h_outer, 1), (nxt.outer_base, 1)]
        else:
            inner = [(g_inner, i), (ring.inner_base, i), (nxt.inner_base, i + 1), (h_inner, i + 1)]
            outer = [(g_outer, i), (h_outer, i + 1), (nxt.outer_base, i + 1), (ring.outer_base, i)]
        builder.add_face([vid for vid, _ in inner], side_uvs(inner))
        builder.add_face([vid for vid, _ in outer], side_uvs(outer))

    for i in range(num_steps):
        (g_inner, g_outer), (h_inner, h_outer) = ground[i], ground[i + 1]
        builder.add_face(
            (g_inner, h_inner, h_outer, g_outer),
            [(0.0, i * step_depth), (0.0, (i + 1) * step_depth),
             (step_width, (i + 1) * step_depth), (step_width, i * step_depth)],
        )

    last = rings[-1]
    end_inner, end_outer = ground[-1]
    builder.add_face(
        (last.inner_base, last.outer_base, end_outer, end_inner),
        [(0.0, 1.0), (1.0, 1.0), (1.0, 0.0), (0.0, 0.0)],
    )


def generate_curved_stairs(
    height: float = 2.0,
    step_width: float = 1.0,
    step_type: object = "num_steps",
    num_steps: int = 6,
    user_step_height: float = 0.5,
    curvature: float = 60.0,
    inner_radius: float = 3.0,
    ccw: bool = False,
    sides: bool = True,
) -> MeshBuffer:
    """Generate a render-ready curved staircase."""
    params = CurvedStairParameters(
        height=height,
        step_width=step_width,
        step_type=make_step_type(step_type, num_steps, user_step_height),
        curvature=curvature,
        inner_radius=inner_radius,
        ccw=ccw,
        sides=sides,
    )
    return assemble_mesh(build_curved_geometry(params))


__all__ = ["CurvedStairParameters", "build_curved_geometry", "generate_curved_stairs"]
