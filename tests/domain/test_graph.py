# tests/domain/test_graph.py
import math

import numpy as np
import pytest

from mesh_search.domain.entities.geometry import Point3
from mesh_search.domain.errors import EmptyGraphError, MalformedMeshError
from mesh_search.domain.graph import MeshGraph

TRI = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]


def test_face_adds_directed_three_cycle_only():
    g = MeshGraph.build(TRI, [(0, 1, 2)])
    assert [v.neighbors for v in g.vertices] == [[1], [2], [0]]
    assert g.edge_count == 3


def test_shared_faces_keep_duplicate_neighbors():
    g = MeshGraph.build(TRI, [(0, 1, 2), (0, 1, 2)])
    assert g.neighbors(0) == [1, 1]
    assert g.neighbors(2) == [0, 0]


def test_bidirectional_adds_reverse_edges_after_forward():
    g = MeshGraph.build(TRI, [(0, 1, 2)], bidirectional=True)
    assert g.neighbors(0) == [1, 2]
    assert g.neighbors(1) == [2, 0]
    assert g.neighbors(2) == [0, 1]


def test_vertices_keep_input_order_and_positions():
    g = MeshGraph.build(TRI, [])
    assert [v.index for v in g.vertices] == [0, 1, 2]
    assert g.position(1) == Point3(1.0, 0.0, 0.0)
    assert all(not v.is_closed and v.previous is None for v in g.vertices)


@pytest.mark.parametrize("face", [(0, 1, 3), (0, -1, 2), (7, 8, 9)])
def test_out_of_range_face_is_malformed(face):
    with pytest.raises(MalformedMeshError):
        MeshGraph.build(TRI, [(0, 1, 2), face])


def test_bad_shapes_are_malformed():
    with pytest.raises(MalformedMeshError):
        MeshGraph.build([(0.0, 0.0)], [])
    with pytest.raises(MalformedMeshError):
        MeshGraph.build(TRI, [(0, 1)])
    with pytest.raises(MalformedMeshError):
        MeshGraph.build([(0.0, float("nan"), 0.0)], [])


def test_malformed_mesh_is_a_value_error():
    with pytest.raises(ValueError):
        MeshGraph.build(TRI, [(0, 1, 5)])


def test_distance_is_euclidean_by_default():
    g = MeshGraph.build([(0.0, 0.0, 0.0), (1.0, 2.0, 2.0)], [])
    assert g.distance(0, 1) == pytest.approx(3.0)
    assert g.distance(1, 0) == pytest.approx(3.0)


def test_from_edges_with_length_override(chain4):
    assert chain4.neighbors(0) == [1, 3]
    assert chain4.distance(0, 1) == pytest.approx(1.0)
    assert chain4.distance(0, 3) == 5.0
    # override is per direction
    assert chain4.distance(3, 0) == pytest.approx(3.0)


def test_from_edges_rejects_bad_lengths():
    with pytest.raises(MalformedMeshError):
        MeshGraph.from_edges(TRI, [(0, 1)], lengths={(0, 1): -1.0})
    with pytest.raises(MalformedMeshError):
        MeshGraph.from_edges(TRI, [(0, 1)], lengths={(0, 9): 1.0})
    with pytest.raises(MalformedMeshError):
        MeshGraph.from_edges(TRI, [(0, 4)])


def test_find_nearest_vertex():
    g = MeshGraph.build(TRI, [(0, 1, 2)])
    assert g.find_nearest_vertex((0.9, 0.1, 0.0)) == 1
    assert g.find_nearest_vertex(Point3(0.1, 0.8, 0.3)) == 2
    assert g.find_nearest_vertex((-5.0, -5.0, 0.0)) == 0


def test_find_nearest_vertex_ties_go_to_first():
    g = MeshGraph.build([(1.0, 0.0, 0.0), (-1.0, 0.0, 0.0), (0.0, 1.0, 0.0)], [])
    assert g.find_nearest_vertex((0.0, 0.0, 0.0)) == 0


def test_find_nearest_vertex_on_empty_graph():
    g = MeshGraph.build(np.empty((0, 3)), np.empty((0, 3), dtype=np.int64))
    assert len(g) == 0
    with pytest.raises(EmptyGraphError):
        g.find_nearest_vertex((0.0, 0.0, 0.0))


def test_grid_mesh_is_strongly_connected_through_face_cycles(grid4):
    seen, todo = {0}, [0]
    while todo:
        for n in grid4.neighbors(todo.pop()):
            if n not in seen:
                seen.add(n)
                todo.append(n)
    assert seen == set(range(16))
    assert grid4.distance(0, 5) == pytest.approx(math.sqrt(2))


@pytest.mark.parametrize("point", [(float("nan"), 0.0, 0.0), (0.0, float("inf"), 0.0)])
def test_find_nearest_vertex_rejects_non_finite_point(point):
    g = MeshGraph.build(TRI, [(0, 1, 2)])
    with pytest.raises(ValueError):
        g.find_nearest_vertex(point)
