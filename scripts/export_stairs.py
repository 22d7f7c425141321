"""Generate a staircase OBJ file using the procedural stair generators."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from stairs3d import generate_curved_stairs, generate_straight_stairs


def export_obj(output: Path, curved: bool = False) -> None:
    mesh = generate_curved_stairs() if curved else generate_straight_stairs()
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(mesh.to_obj(), encoding="utf-8")
    print(f"Exported stair mesh to {output}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("output", type=Path, nargs="?", default=Path("assets/stairs.obj"))
    parser.add_argument("--curved", action="store_true", help="Export the default curved staircase")
    args = parser.parse_args()
    export_obj(args.output, curved=args.curved)
