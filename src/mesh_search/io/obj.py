# io/obj.py
"""Minimal Wavefront OBJ reader: vertex positions and faces only."""

import numpy as np

from mesh_search.config.models import Vec3
from mesh_search.domain.errors import MalformedMeshError


def _face_index(token: str, nverts: int, lineno: int) -> int:
    head = token.split("/", 1)[0]
    try:
        i = int(head)
    except ValueError:
        raise MalformedMeshError(f"line {lineno}: bad face index {token!r}") from None
    if i == 0:
        raise MalformedMeshError(f"line {lineno}: OBJ indices start at 1")
    # negative indices count back from the last vertex read so far
    return i - 1 if i > 0 else nverts + i


def parse_obj(text: str, offset: Vec3 = (0.0, 0.0, 0.0)) -> tuple[np.ndarray, np.ndarray]:
    ox, oy, oz = offset
    verts: list[tuple[float, float, float]] = []
    faces: list[tuple[int, int, int]] = []

    for lineno, line in enumerate(text.splitlines(), start=1):
        s = line.split()
        if not s:
            continue
        if s[0] == "v":
            if len(s) < 4:
                raise MalformedMeshError(f"line {lineno}: vertex needs 3 coordinates")
            try:
                x, y, z = float(s[1]), float(s[2]), float(s[3])
            except ValueError:
                raise MalformedMeshError(f"line {lineno}: bad vertex {line!r}") from None
            verts.append((x + ox, y + oy, z + oz))
        elif s[0] == "f":
            if len(s) < 4:
                raise MalformedMeshError(f"line {lineno}: face needs at least 3 vertices")
            idx = [_face_index(tok, len(verts), lineno) for tok in s[1:]]
            # fan-triangulate polygons
            for a, b in zip(idx[1:-1], idx[2:]):
                faces.append((idx[0], a, b))

    positions = np.asarray(verts, dtype=np.float64).reshape(-1, 3)
    tris = np.asarray(faces, dtype=np.int64).reshape(-1, 3)
    return positions, tris


def load_obj(path: str, offset: Vec3 = (0.0, 0.0, 0.0)) -> tuple[np.ndarray, np.ndarray]:
    with open(path, encoding="utf-8") as f:
        return parse_obj(f.read(), offset)
