"""Matplotlib-based still preview of a generated stair mesh."""
from __future__ import annotations

from pathlib import Path
from typing import Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure
from mpl_toolkits.mplot3d.art3d import Poly3DCollection

from .mesh import MeshBuffer

LIGHT_DIRECTION = (0.3, 0.9, -0.4)


def _shade(normals: np.ndarray, base_color: Tuple[float, float, float]) -> np.ndarray:
    light = np.asarray(LIGHT_DIRECTION, dtype=np.float64)
    light /= np.linalg.norm(light)
    intensity = 0.35 + 0.65 * np.clip(normals @ light, 0.0, 1.0)
    colors = np.empty((normals.shape[0], 4))
    colors[:, :3] = intensity[:, None] * np.asarray(base_color)[None, :]
    colors[:, 3] = 1.0
    return colors


def render_preview(
    buffer: MeshBuffer,
    output: str | Path | None = None,
    base_color: Tuple[float, float, float] = (0.78, 0.7, 0.58),
    background_color: str = "#1d2630",
    elevation: float = 25.0,
    azimuth: float = -60.0,
) -> Figure:
    """Draw every triangle of ``buffer`` flat-shaded by its face normal.

    The mesh is y-up; it is shown with y mapped to the vertical axis of the
    plot. When ``output`` is given the figure is saved there and closed.
    """
    tri_index = buffer.indices.reshape(-1, 3)
    triangles = buffer.positions[tri_index].astype(np.float64)
    # Plot axes are (x, z, y) so the staircase stands upright.
    triangles = triangles[:, :, [0, 2, 1]]
    face_normals = buffer.normals[tri_index[:, 0]].astype(np.float64)

    fig = plt.figure(figsize=(6, 5))
    ax = fig.add_subplot(111, projection="3d")
    ax.set_facecolor(background_color)
    ax.grid(False)
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_zticks([])

    poly = Poly3DCollection(list(triangles), edgecolors="#2b2b2b", linewidths=0.2)
    poly.set_facecolor(_shade(face_normals, base_color))
    ax.add_collection3d(poly)

    low = triangles.reshape(-1, 3).min(axis=0)
    high = triangles.reshape(-1, 3).max(axis=0)
    center = (low + high) * 0.5
    half = max(float((high - low).max()) * 0.5, 1e-6)
    ax.set_xlim([center[0] - half, center[0] + half])
    ax.set_ylim([center[1] - half, center[1] + half])
    ax.set_zlim([center[2] - half, center[2] + half])
    ax.view_init(elev=elevation, azim=azimuth)
    fig.subplots_adjust(left=0, right=1, top=1, bottom=0)

    if output is not None:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, facecolor=background_color)
        plt.close(fig)
    return fig


__all__ = ["render_preview"]
