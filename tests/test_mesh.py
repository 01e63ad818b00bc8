"""Tests for the topology builder."""
import numpy as np
import pytest

from snapsubd import FlatMesh, TopologyGraph, TopologyError, build_topology
from snapsubd import primitives


def test_single_quad_topology(quad):
    g = build_topology(quad)

    assert g.num_vertices == 4
    assert g.num_edges == 4
    assert g.num_faces == 1
    assert g.source is quad

    face = g.faces[0]
    assert face.is_quad
    assert face.vertices == (0, 1, 2, 3)
    # edge i joins vertex i and vertex i+1
    for i, eid in enumerate(face.edges):
        edge = g.edges[eid]
        assert edge.key == tuple(sorted((face.vertices[i], face.vertices[(i + 1) % 4])))
        assert edge.face_count == 1


def test_single_triangle_topology(triangle):
    g = build_topology(triangle)
    assert g.num_edges == 3
    assert not g.faces[0].is_quad


@pytest.mark.parametrize("factory", [primitives.cube, primitives.tetrahedron,
                                     primitives.triangular_prism])
def test_closed_edge_count(factory):
    mesh = factory()
    g = build_topology(mesh)

    corner_total = sum(len(f) for f in mesh.faces)
    assert corner_total % 2 == 0
    assert g.num_edges == corner_total // 2
    assert all(e.face_count == 2 for e in g.edges)
    assert g.boundary_edges() == []


def test_open_grid_face_counts():
    g = build_topology(primitives.quad_grid(2.0, 1.0, 3, 2))

    counts = [e.face_count for e in g.edges]
    assert set(counts) == {1, 2}
    # perimeter of a 3 x 2 grid
    assert counts.count(1) == 10
    assert g.num_edges == 17


def test_vertex_back_references(cube):
    g = build_topology(cube)

    for v in g.vertices:
        assert v.valence == 3
        assert len(v.edges) == 3
        # no edge registered twice against the same vertex
        assert len(set(v.edges)) == len(v.edges)
        for eid in v.edges:
            assert v.id in g.edges[eid].key
        for fid in v.faces:
            assert v.id in g.faces[fid].vertices


def test_shared_positions_are_merged():
    # Two quads sharing an edge, each with its own copy of the shared corners
    # and different texture coordinates on the copies.
    positions = [[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0],
                 [1, 0, 0], [2, 0, 0], [2, 1, 0], [1, 1, 0]]
    texcoords = [[0, 0], [0.5, 0], [0.5, 1], [0, 1],
                 [0, 0], [1, 0], [1, 1], [0, 1]]
    mesh = FlatMesh(positions, [(0, 1, 2, 3), (4, 5, 6, 7)], texcoords=texcoords)

    g = build_topology(mesh)
    assert g.num_vertices == 6
    assert g.num_edges == 7

    shared = g.find_edge(g.get_vertex_index([1, 0, 0]), g.get_vertex_index([1, 1, 0]))
    assert shared is not None
    assert g.edges[shared].faces == [0, 1]
    assert g.faces[1].corners == (4, 5, 6, 7)


def test_non_manifold_edge_is_rejected():
    positions = [[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0],
                 [0, -1, 0], [1, -1, 0],
                 [1, 0, 1], [0, 0, 1]]
    faces = [(0, 1, 2, 3),
             (1, 0, 4, 5),
             (0, 1, 6, 7)]

    with pytest.raises(TopologyError, match="non-manifold"):
        build_topology(FlatMesh(positions, faces))


def test_degenerate_face_is_rejected():
    positions = [[0, 0, 0], [1, 0, 0], [1, 0, 0], [0, 1, 0]]
    with pytest.raises(TopologyError, match="degenerate"):
        build_topology(FlatMesh(positions, [(0, 1, 2, 3)]))


def test_build_is_deterministic(prism):
    g1 = build_topology(prism)
    g2 = build_topology(prism)

    assert (g1.num_vertices, g1.num_edges, g1.num_faces) == \
           (g2.num_vertices, g2.num_edges, g2.num_faces)
    assert [e.key for e in g1.edges] == [e.key for e in g2.edges]
    assert [e.faces for e in g1.edges] == [e.faces for e in g2.edges]
    assert [f.vertices for f in g1.faces] == [f.vertices for f in g2.faces]
    assert [v.edges for v in g1.vertices] == [v.edges for v in g2.vertices]


def test_move_vertex_updates_lookup(quad):
    g = build_topology(quad)
    g.move_vertex(0, [0.0, 0.0, 5.0])

    assert np.allclose(g.vertices[0].position, [0.0, 0.0, 5.0])
    assert g.get_vertex_index([0.0, 0.0, 5.0]) == 0
    # the old position is free again, so asking for it creates a new vertex
    assert g.get_vertex_index([0.0, 0.0, 0.0]) == 4


def test_move_vertex_collision(quad):
    g = build_topology(quad)

    with pytest.raises(TopologyError, match="owned by vertex 1"):
        g.move_vertex(0, [1.0, 0.0, 0.0])

    # unchanged after the failed move
    assert np.allclose(g.vertices[0].position, [0.0, 0.0, 0.0])
    assert g.get_vertex_index([0.0, 0.0, 0.0]) == 0


def test_move_vertices_allows_swaps(quad):
    g = build_topology(quad)
    before = g.positions()

    g.move_vertices({0: before[2], 2: before[0]})

    assert np.allclose(g.vertices[0].position, before[2])
    assert np.allclose(g.vertices[2].position, before[0])
    assert g.get_vertex_index(before[2]) == 0
    assert g.get_vertex_index(before[0]) == 2


def test_move_vertices_rejects_shared_target(quad):
    g = build_topology(quad)
    target = [3.0, 3.0, 3.0]

    with pytest.raises(TopologyError, match="would both move"):
        g.move_vertices({1: target, 3: target})
    assert np.allclose(g.positions(), quad.positions)


def test_empty_graph():
    g = TopologyGraph()
    assert g.positions().shape == (0, 3)
    assert g.num_edges == 0


def test_large_coordinates_stay_distinct():
    quad = primitives.unit_quad()
    positions = quad.positions * 1e10 + 5e10
    g = build_topology(FlatMesh(positions, quad.faces))

    assert g.num_vertices == 4
    assert g.num_edges == 4
    assert g.faces[0].vertices == (0, 1, 2, 3)


def test_rejected_face_leaves_graph_unchanged():
    g = TopologyGraph()
    g.add_face([[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]])
    g.add_face([[1, 0, 0], [0, 0, 0], [0, -1, 0], [1, -1, 0]])
    counts = (g.num_vertices, g.num_edges, g.num_faces)
    edge_lists = [list(v.edges) for v in g.vertices]

    with pytest.raises(TopologyError, match="non-manifold"):
        g.add_face([[0, 0, 0], [1, 0, 0], [1, 0, 1], [0, 0, 1]])
    with pytest.raises(TopologyError, match="degenerate"):
        g.add_face([[5, 5, 5], [6, 5, 5], [6, 5, 5]])

    assert (g.num_vertices, g.num_edges, g.num_faces) == counts == (6, 7, 2)
    assert [list(v.edges) for v in g.vertices] == edge_lists
    assert g.get_vertex_index([1, 0, 1]) == 6

    # the graph is still usable afterwards
    g.add_face([[0, 1, 0], [1, 1, 0], [1, 2, 0], [0, 2, 0]])
    assert g.num_faces == 3
