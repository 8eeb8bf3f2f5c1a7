# mesh_search/runtime/resources.py
from functools import lru_cache

import numpy as np

from mesh_search.io.obj import load_obj


@lru_cache(maxsize=8)
def load_mesh_from_path(file: str, fmt: str, offset=(0.0, 0.0, 0.0)):
    """(positions, faces) arrays for a mesh file. Cached; callers must not mutate."""
    if fmt == "obj":
        return load_obj(file, offset)
    if fmt == "npz":
        with np.load(file) as data:
            positions = data["positions"].astype(np.float64) + np.asarray(offset)
            # index dtype is checked when the graph is built
            return positions, np.asarray(data["faces"])
    raise ValueError(f"Unsupported mesh fmt {fmt!r}")
