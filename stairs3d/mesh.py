"""Mesh containers and the assembler that turns stair geometry into render buffers."""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .errors import DegenerateGeometry, InvalidParameter
from .steps import StepLayout

logger = logging.getLogger(__name__)

Vector3 = Tuple[float, float, float]
UV = Tuple[float, float]
Face = Tuple[int, ...]


def _vec_sub(a: Vector3, b: Vector3) -> Vector3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _vec_cross(a: Vector3, b: Vector3) -> Vector3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _vec_length(v: Vector3) -> float:
    return (v[0] * v[0] + v[1] * v[1] + v[2] * v[2]) ** 0.5


def _vec_normalize(v: Vector3) -> Vector3:
    length = _vec_length(v)
    if length == 0.0:
        raise DegenerateGeometry("face has zero area; cannot compute its normal")
    return (v[0] / length, v[1] / length, v[2] / length)


def face_normal(p0: Vector3, p1: Vector3, p2: Vector3) -> Vector3:
    """Flat normal of the polygon whose first three corners are ``p0, p1, p2``."""
    return _vec_normalize(_vec_cross(_vec_sub(p1, p0), _vec_sub(p2, p0)))


@dataclass(frozen=True)
class StairGeometry:
    """Indexed polygon description produced by a stair generator.

    ``faces`` hold 3 or 4 vertex ids each and ``uvs`` hold one coordinate per
    face corner, in the same order as the face.
    """

    vertices: Tuple[Vector3, ...]
    faces: Tuple[Face, ...]
    uvs: Tuple[Tuple[UV, ...], ...]
    step_layout: Optional[StepLayout] = None

    def validate(self) -> None:
        """Raise :class:`InvalidParameter` if the faces, UVs and vertices disagree."""
        if len(self.faces) != len(self.uvs):
            raise InvalidParameter(f"{len(self.faces)} faces but {len(self.uvs)} uv sets")
        count = len(self.vertices)
        for index, (face, uv) in enumerate(zip(self.faces, self.uvs)):
            if len(face) not in (3, 4):
                raise InvalidParameter(f"face {index} has {len(face)} vertices; only 3 or 4 are supported")
            if len(face) != len(uv):
                raise InvalidParameter(f"face {index} has {len(face)} vertices but {len(uv)} uvs")
            for vid in face:
                if not 0 <= vid < count:
                    raise InvalidParameter(f"face {index} references vertex {vid}, only {count} exist")


class GeometryBuilder:
    """Growable vertex/face/uv lists, frozen into a :class:`StairGeometry` when done."""

    def __init__(self) -> None:
        self.vertices: List[Vector3] = []
        self.faces: List[Face] = []
        self.uvs: List[Tuple[UV, ...]] = []

    def add_vertex(self, x: float, y: float, z: float) -> int:
        self.vertices.append((x, y, z))
        return len(self.vertices) - 1

    def add_face(self, face: Sequence[int], uvs: Sequence[UV]) -> None:
        self.faces.append(tuple(face))
        self.uvs.append(tuple((float(u), float(v)) for u, v in uvs))

    def planar_uvs(self, face: Sequence[int]) -> List[UV]:
        """World-space ``(x, z)`` projection of each corner of ``face``."""
        return [(self.vertices[vid][0], self.vertices[vid][2]) for vid in face]

    def freeze(self, step_layout: Optional[StepLayout] = None, reverse: bool = False) -> StairGeometry:
        faces = self.faces
        uvs = self.uvs
        if reverse:
            faces = [face[::-1] for face in faces]
            uvs = [uv[::-1] for uv in uvs]
        geometry = StairGeometry(tuple(self.vertices), tuple(faces), tuple(uvs), step_layout)
        geometry.validate()
        return geometry


def _readonly(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class MeshBuffer:
    """Renderer-ready mesh: one entry per emitted corner plus a triangle list."""

    positions: np.ndarray  # shape: (N, 3) float32
    normals: np.ndarray  # shape: (N, 3) float32
    uvs: np.ndarray  # shape: (N, 2) float32
    indices: np.ndarray  # shape: (3T,) uint32
    step_layout: Optional[StepLayout] = None

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.indices.shape[0] // 3)

    def triangles(self) -> np.ndarray:
        """Corner positions of every triangle, shape ``(T, 3, 3)``."""
        return self.positions[self.indices.reshape(-1, 3)]

    def bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        return self.positions.min(axis=0), self.positions.max(axis=0)

    def edge_counts(self, decimals: int = 6) -> Counter:
        """Count triangle edges keyed by their undirected, rounded endpoint positions."""
        counts: Counter = Counter()
        rounded = np.round(self.positions.astype(np.float64), decimals) + 0.0
        for a, b, c in self.indices.reshape(-1, 3):
            corners = [tuple(rounded[a]), tuple(rounded[b]), tuple(rounded[c])]
            for i in range(3):
                p, q = corners[i], corners[(i + 1) % 3]
                counts[(p, q) if p <= q else (q, p)] += 1
        return counts

    def is_watertight(self, decimals: int = 6) -> bool:
        """True when every edge borders exactly two triangles."""
        counts = self.edge_counts(decimals)
        return bool(counts) and all(n == 2 for n in counts.values())

    def signed_volume(self) -> float:
        """Volume enclosed by a closed mesh; positive when normals face outward."""
        tri_index = self.indices.reshape(-1, 3)
        tris = self.positions[tri_index].astype(np.float64)
        normals = self.normals[tri_index[:, 0]].astype(np.float64)
        areas = 0.5 * np.linalg.norm(np.cross(tris[:, 1] - tris[:, 0], tris[:, 2] - tris[:, 0]), axis=1)
        centroids = tris.mean(axis=1)
        return float(np.sum(areas * np.einsum("ij,ij->i", centroids, normals)) / 3.0)

    def to_obj(self) -> str:
        lines: List[str] = ["# stairs3d mesh"]
        for x, y, z in self.positions:
            lines.append(f"v {x:.6f} {y:.6f} {z:.6f}")
        for u, v in self.uvs:
            lines.append(f"vt {u:.6f} {v:.6f}")
        for x, y, z in self.normals:
            lines.append(f"vn {x:.6f} {y:.6f} {z:.6f}")
        for tri in self.indices.reshape(-1, 3):
            i0, i1, i2 = (int(i) + 1 for i in tri)
            lines.append(f"f {i0}/{i0}/{i0} {i1}/{i1}/{i1} {i2}/{i2}/{i2}")
        return "\n".join(lines) + "\n"


def assemble_mesh(geometry: StairGeometry) -> MeshBuffer:
    """Expand indexed faces into flat-shaded corners and triangulate them.

    Each face contributes one corner per vertex, all sharing the face normal
    ``normalize(cross(p1 - p0, p2 - p0))``. Triangles are emitted as
    ``(c0, c2, c1)`` and, for quads, ``(c0, c3, c2)``.
    """
    geometry.validate()
    verts = geometry.vertices
    positions: List[Vector3] = []
    normals: List[Vector3] = []
    uvs: List[UV] = []
    indices: List[int] = []

    for face, face_uvs in zip(geometry.faces, geometry.uvs):
        start = len(positions)
        n = face_normal(verts[face[0]], verts[face[1]], verts[face[2]])
        for vid, uv in zip(face, face_uvs):
            positions.append(verts[vid])
            normals.append(n)
            uvs.append(uv)
        indices.extend((start, start + 2, start + 1))
        if len(face) == 4:
            indices.extend((start, start + 3, start + 2))

    logger.debug("assembled %d faces into %d corners and %d triangles",
                 len(geometry.faces), len(positions), len(indices) // 3)
    return MeshBuffer(
        positions=_readonly(np.array(positions, dtype=np.float32).reshape(-1, 3)),
        normals=_readonly(np.array(normals, dtype=np.float32).reshape(-1, 3)),
        uvs=_readonly(np.array(uvs, dtype=np.float32).reshape(-1, 2)),
        indices=_readonly(np.array(indices, dtype=np.uint32)),
        step_layout=geometry.step_layout,
    )


__all__ = [
    "Vector3",
    "UV",
    "Face",
    "StairGeometry",
    "GeometryBuilder",
    "MeshBuffer",
    "assemble_mesh",
    "face_normal",
]
