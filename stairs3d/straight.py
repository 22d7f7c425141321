"""Procedural straight staircase generator."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, NamedTuple

from .mesh import GeometryBuilder, MeshBuffer, StairGeometry, assemble_mesh
from .steps import NumSteps, StepType, check_nondegenerate, check_positive, make_step_type, resolve_steps

logger = logging.getLogger(__name__)


@dataclass
class StraightStairParameters:
    """Overall dimensions of a straight run.

    The run is centred on x, climbs along +y and advances along +z.
    """

    width: float = 1.0
    height: float = 2.0
    depth: float = 2.0
    step_type: StepType = field(default_factory=NumSteps)
    sides: bool = True


class StepRing(NamedTuple):
    """Vertex ids of the four corners at the front of one step."""

    left_base: int
    right_base: int
    left_top: int
    right_top: int


def build_straight_geometry(params: StraightStairParameters | None = None) -> StairGeometry:
    """Build the indexed faces of a straight staircase.

    Each step contributes a vertical riser and, from the second step on, the
    horizontal tread of the step below it. The last tread runs to the landing
    at full depth. With ``params.sides`` the run is closed into a solid with a
    back wall, a bottom, sawtooth side triangles and a side-wall fan.
    """
    params = params or StraightStairParameters()
    width = check_nondegenerate("width", check_positive("width", params.width))
    depth = check_positive("depth", params.depth)
    layout = resolve_steps(params.height, params.step_type)
    num_steps = layout.num_steps
    step_height = layout.step_height
    height = layout.height
    step_depth = check_nondegenerate("step_depth", depth / num_steps)

    half = width / 2.0
    builder = GeometryBuilder()
    rings: List[StepRing] = []
    uv_offset = 0.0

    for i in range(num_steps):
        y0 = i * step_height
        y1 = (i + 1) * step_height
        z = i * step_depth
        ring = StepRing(
            builder.add_vertex(-half, y0, z),
            builder.add_vertex(half, y0, z),
            builder.add_vertex(-half, y1, z),
            builder.add_vertex(half, y1, z),
        )
        if rings:
            below = rings[-1]
            builder.add_face(
                (ring.left_base, ring.right_base, below.right_top, below.left_top),
                [(-half, uv_offset + step_depth), (-half, uv_offset), (half, uv_offset), (half, uv_offset + step_depth)],
            )
            uv_offset += step_depth
        builder.add_face(
            (ring.left_base, ring.left_top, ring.right_top, ring.right_base),
            [(-half, uv_offset), (half, uv_offset), (half, uv_offset + step_height), (-half, uv_offset + step_height)],
        )
        uv_offset += step_height
        rings.append(ring)

    # Landing edge at the top of the run
    landing_left = builder.add_vertex(-half, height, depth)
    landing_right = builder.add_vertex(half, height, depth)
    last = rings[-1]
    builder.add_face(
        (landing_left, landing_right, last.right_top, last.left_top),
        [(-half, uv_offset + step_depth), (-half, uv_offset), (half, uv_offset), (half, uv_offset + step_depth)],
    )

    if params.sides:
        ground_left = builder.add_vertex(-half, 0.0, depth)
        ground_right = builder.add_vertex(half, 0.0, depth)
        first = rings[0]

        builder.add_face(
            (landing_left, ground_left, ground_right, landing_right),
            [(-half, height), (half, height), (half, 0.0), (-half, 0.0)],
        )
        builder.add_face(
            (first.left_base, first.right_base, ground_right, ground_left),
            [(-half, depth), (-half, 0.0), (half, 0.0), (half, depth)],
        )

        for i, ring in enumerate(rings):
            if i + 1 < num_steps:
                next_left, next_right = rings[i + 1].left_base, rings[i + 1].right_base
            else:
                next_left, next_right = landing_left, landing_right
            sawtooth = [
                (ring.left_base, next_left, ring.left_top),
                (ring.right_base, ring.right_top, next_right),
                # side walls fan out from the back corners to each step's diagonal
                (ring.left_base, ground_left, next_left),
                (ring.right_base, next_right, ground_right),
            ]
            for face in sawtooth:
                builder.add_face(face, builder.planar_uvs(face))

    logger.debug("straight stairs: %d steps, %d vertices, %d faces",
                 num_steps, len(builder.vertices), len(builder.faces))
    return builder.freeze(layout)


def generate_straight_stairs(
    width: float = 1.0,
    height: float = 2.0,
    depth: float = 2.0,
    step_type: object = "num_steps",
    num_steps: int = 6,
    user_step_height: float = 0.5,
    sides: bool = True,
) -> MeshBuffer:
    """Generate a render-ready straight staircase.

    ``step_type`` is ``"num_steps"`` (use ``num_steps``), ``"step_height"``
    (use ``user_step_height`` and snap the height) or a :data:`StepType`.
    """
    params = StraightStairParameters(
        width=width,
        height=height,
        depth=depth,
        step_type=make_step_type(step_type, num_steps, user_step_height),
        sides=sides,
    )
    return assemble_mesh(build_straight_geometry(params))


__all__ = ["StraightStairParameters", "build_straight_geometry", "generate_straight_stairs"]
