"""Command line entry point: generate a staircase and export or preview it."""
from __future__ import annotations

import argparse
from typing import Optional, Sequence

from .curved import generate_curved_stairs
from .errors import StairError
from .mesh import MeshBuffer
from .straight import generate_straight_stairs


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stairs3d", description="Generate a procedural staircase mesh")
    parser.add_argument("--curved", action="store_true", help="Sweep the run around a vertical axis")
    parser.add_argument("--width", type=float, default=1.0, help="Width of a straight run")
    parser.add_argument("--height", type=float, default=2.0, help="Total rise")
    parser.add_argument("--depth", type=float, default=2.0, help="Total going of a straight run")
    parser.add_argument("--steps", type=int, default=6, help="Number of steps")
    parser.add_argument(
        "--step-height",
        type=float,
        default=None,
        help="Fixed riser height; overrides --steps and snaps the total height",
    )
    parser.add_argument("--step-width", type=float, default=1.0, help="Tread width of a curved run")
    parser.add_argument("--curvature", type=float, default=60.0, help="Total sweep of a curved run in degrees")
    parser.add_argument("--inner-radius", type=float, default=3.0, help="Axis to inner tread edge distance")
    parser.add_argument("--ccw", action="store_true", help="Sweep counter-clockwise")
    parser.add_argument("--no-sides", action="store_true", help="Only emit risers and treads")
    parser.add_argument("--export", type=str, default=None, metavar="PATH", help="Write the mesh as an OBJ file")
    parser.add_argument("--preview", type=str, default=None, metavar="PATH", help="Save a PNG preview")
    return parser


def build_mesh(args: argparse.Namespace) -> MeshBuffer:
    step_type = "step_height" if args.step_height is not None else "num_steps"
    user_step_height = args.step_height if args.step_height is not None else 0.5
    if args.curved:
        return generate_curved_stairs(
            height=args.height,
            step_width=args.step_width,
            step_type=step_type,
            num_steps=args.steps,
            user_step_height=user_step_height,
            curvature=args.curvature,
            inner_radius=args.inner_radius,
            ccw=args.ccw,
            sides=not args.no_sides,
        )
    return generate_straight_stairs(
        width=args.width,
        height=args.height,
        depth=args.depth,
        step_type=step_type,
        num_steps=args.steps,
        user_step_height=user_step_height,
        sides=not args.no_sides,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        mesh = build_mesh(args)
    except StairError as exc:
        parser.error(str(exc))

    layout = mesh.step_layout
    print(f"{layout.num_steps} steps of {layout.step_height:g} (height {layout.height:g}): "
          f"{mesh.vertex_count} corners, {mesh.triangle_count} triangles")

    if args.export:
        with open(args.export, "w", encoding="utf-8") as fh:
            fh.write(mesh.to_obj())
        print(f"Exported stair mesh to {args.export}")
    if args.preview:
        from .preview import render_preview

        render_preview(mesh, args.preview)
        print(f"Saved preview to {args.preview}")


if __name__ == "__main__":
    main()
