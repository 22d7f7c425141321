"""Pack stair mesh buffers into a self-contained glTF 2.0 asset."""
from __future__ import annotations

import base64
import json
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .mesh import MeshBuffer

FLOAT = 5126
UNSIGNED_INT = 5125
ARRAY_BUFFER = 34962
ELEMENT_ARRAY_BUFFER = 34963

# accessor component type and little-endian dtype per buffer kind
COMPONENT_TYPES = {
    "f": (FLOAT, np.dtype("<f4")),
    "u": (UNSIGNED_INT, np.dtype("<u4")),
}
ACCESSOR_TYPES = {1: "SCALAR", 2: "VEC2", 3: "VEC3"}


def add_attribute(
    buffer: bytearray,
    buffer_views: List[dict],
    accessors: List[dict],
    array: np.ndarray,
    target: int,
) -> int:
    """Append ``array`` to ``buffer`` and register a view and accessor for it.

    Rows of a 2-D array are vector elements; a 1-D array is a scalar index list.
    """
    component_type, dtype = COMPONENT_TYPES[array.dtype.kind]
    data = np.ascontiguousarray(array, dtype=dtype).tobytes()
    width = 1 if array.ndim == 1 else array.shape[1]
    mins = np.atleast_1d(array.min(axis=0)).tolist()
    maxs = np.atleast_1d(array.max(axis=0)).tolist()

    while len(buffer) % 4:
        buffer.extend(b"\x00")
    offset = len(buffer)
    buffer.extend(data)

    buffer_views.append({
        "buffer": 0,
        "byteOffset": offset,
        "byteLength": len(data),
        "target": target,
    })
    accessors.append({
        "bufferView": len(buffer_views) - 1,
        "componentType": component_type,
        "count": len(array),
        "type": ACCESSOR_TYPES[width],
        "min": mins,
        "max": maxs,
    })
    return len(accessors) - 1


def build_gltf(
    meshes: Sequence[Tuple[str, MeshBuffer]],
    translations: Sequence[Tuple[float, float, float]] | None = None,
) -> Dict:
    """Return the glTF document (as a dict) holding one node per named mesh."""
    buffer = bytearray()
    buffer_views: List[dict] = []
    accessors: List[dict] = []
    gltf_meshes: List[dict] = []
    nodes: List[dict] = [{"name": "Stairs", "children": list(range(1, len(meshes) + 1))}]

    for index, (name, mesh) in enumerate(meshes):
        attributes = {
            "POSITION": add_attribute(buffer, buffer_views, accessors, mesh.positions, ARRAY_BUFFER),
            "NORMAL": add_attribute(buffer, buffer_views, accessors, mesh.normals, ARRAY_BUFFER),
            "TEXCOORD_0": add_attribute(buffer, buffer_views, accessors, mesh.uvs, ARRAY_BUFFER),
        }
        idx = add_attribute(buffer, buffer_views, accessors, mesh.indices, ELEMENT_ARRAY_BUFFER)
        gltf_meshes.append({"name": name, "primitives": [{"attributes": attributes, "indices": idx}]})
        node = {"name": name, "mesh": index}
        if translations is not None:
            node["translation"] = list(translations[index])
        nodes.append(node)

    buffer_uri = "data:application/octet-stream;base64," + base64.b64encode(bytes(buffer)).decode()
    return {
        "asset": {"version": "2.0", "generator": "stairs3d"},
        "scene": 0,
        "scenes": [{"nodes": [0]}],
        "nodes": nodes,
        "meshes": gltf_meshes,
        "buffers": [{"byteLength": len(buffer), "uri": buffer_uri}],
        "bufferViews": buffer_views,
        "accessors": accessors,
    }


def write_gltf(output: Path, meshes: Sequence[Tuple[str, MeshBuffer]],
               translations: Sequence[Tuple[float, float, float]] | None = None) -> None:
    model = build_gltf(meshes, translations)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(model, indent=2))


__all__ = ["build_gltf", "write_gltf", "add_attribute"]
