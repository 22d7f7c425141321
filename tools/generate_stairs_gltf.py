"""Export the default straight and curved staircases as one glTF asset.

The straight run is placed at x = -1 and the curved run at x = +1, side by side
on the ground plane. Run directly to overwrite ``static/models/stairs.gltf``.
"""
from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from stairs3d import generate_curved_stairs, generate_straight_stairs
from stairs3d.gltf import write_gltf


if __name__ == "__main__":
    output = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("static/models/stairs.gltf")
    write_gltf(
        output,
        [("StraightStairs", generate_straight_stairs()), ("CurvedStairs", generate_curved_stairs())],
        translations=[(-1.0, 0.0, 0.0), (1.0, 0.0, 0.0)],
    )
    print(f"Wrote {output}")
