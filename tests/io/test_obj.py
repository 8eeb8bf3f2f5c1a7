import numpy as np
import pytest

from mesh_search.domain.errors import MalformedMeshError
from mesh_search.domain.graph import MeshGraph
from mesh_search.io.obj import load_obj, parse_obj
from mesh_search.runtime.resources import load_mesh_from_path

CUBE_FACE = """\
# one quad and one triangle
o thing
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
vn 0 0 1
vt 0 0
f 1/1/1 2/1/1 3/1/1 4/1/1
f -4 -2 -1
"""


def test_parse_vertices_and_fan_triangulated_faces():
    positions, faces = parse_obj(CUBE_FACE)
    assert positions.shape == (4, 3) and positions.dtype == np.float64
    assert faces.tolist() == [[0, 1, 2], [0, 2, 3], [0, 2, 3]]


def test_offset_is_applied_to_every_vertex():
    positions, _ = parse_obj("v 1 2 3\nv 0 0 0\n", offset=(0.02, -0.1, 0.0))
    np.testing.assert_allclose(positions, [[1.02, 1.9, 3.0], [0.02, -0.1, 0.0]])


def test_empty_text_gives_empty_arrays():
    positions, faces = parse_obj("")
    assert positions.shape == (0, 3)
    assert faces.shape == (0, 3)


@pytest.mark.parametrize(
    "text",
    [
        "v 1 2\n",
        "v 1 x 3\n",
        "v 0 0 0\nv 1 0 0\nf 1 2\n",
        "v 0 0 0\nf 1 0 1\n",
        "v 0 0 0\nf a b c\n",
    ],
)
def test_unparsable_records_are_malformed(text):
    with pytest.raises(MalformedMeshError):
        parse_obj(text)


def test_face_past_last_vertex_fails_at_graph_build():
    positions, faces = parse_obj("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 4\n")
    with pytest.raises(MalformedMeshError):
        MeshGraph.build(positions, faces)


def test_load_obj_and_cached_loader(tmp_path):
    path = tmp_path / "tri.obj"
    path.write_text("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n", encoding="utf-8")
    positions, faces = load_obj(str(path))
    assert faces.tolist() == [[0, 1, 2]]

    p2, f2 = load_mesh_from_path(str(path), "obj", (0.0, 0.0, 1.0))
    assert p2[:, 2].tolist() == [1.0, 1.0, 1.0]
    assert load_mesh_from_path(str(path), "obj", (0.0, 0.0, 1.0))[0] is p2


def test_npz_loader(tmp_path):
    path = tmp_path / "tri.npz"
    np.savez(path, positions=np.eye(3), faces=np.array([[0, 1, 2]]))
    positions, faces = load_mesh_from_path(str(path), "npz", (1.0, 0.0, 0.0))
    np.testing.assert_allclose(positions[:, 0], [2.0, 1.0, 1.0])
    assert np.issubdtype(faces.dtype, np.integer)


def test_npz_float_faces_are_rejected_at_graph_build(tmp_path):
    path = tmp_path / "float_faces.npz"
    np.savez(path, positions=np.zeros((3, 3)), faces=np.array([[0.9, 1.7, 2.2]]))
    positions, faces = load_mesh_from_path(str(path), "npz")
    with pytest.raises(MalformedMeshError):
        MeshGraph.build(positions, faces)


def test_unknown_format(tmp_path):
    with pytest.raises(ValueError):
        load_mesh_from_path(str(tmp_path / "x.ply"), "ply")
