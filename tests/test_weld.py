"""Tests for the optional vertex welding pass."""
import numpy as np

from snapsubd import catmull_clark, weld_vertices
from snapsubd import primitives


def test_weld_single_quad_result(quad):
    out = catmull_clark(quad)
    welded, remap = weld_vertices(out)

    assert welded.num_vertices == 9
    assert welded.num_faces == 4
    assert remap.shape == (16,)
    assert remap.max() == 8

    # every welded quad shares the face point index
    shared = set.intersection(*(set(q) for q in welded.faces))
    assert len(shared) == 1
    assert np.allclose(welded.positions[shared.pop()], [0.5, 0.5, 0.0])


def test_weld_keeps_first_occurrence(quad):
    out = catmull_clark(quad)
    welded, remap = weld_vertices(out)

    for old, new in enumerate(remap):
        assert np.allclose(welded.positions[new], out.positions[old])
    assert welded.texcoords.shape == (9, 2)
    assert np.allclose(welded.texcoords[0], out.texcoords[0])


def test_weld_closed_cube(cube):
    welded, _ = weld_vertices(catmull_clark(cube))
    # 6 face points + 12 edge points + 8 vertex points
    assert welded.num_vertices == 26
    assert welded.num_faces == 24


def test_weld_respects_tolerance():
    mesh = primitives.unit_quad()
    mesh.positions[1] = [1e-4, 0.0, 0.0]

    tight, _ = weld_vertices(mesh, tolerance=1e-9)
    loose, remap = weld_vertices(mesh, tolerance=1e-3)

    assert tight.num_vertices == 4
    assert loose.num_vertices == 3
    assert remap[1] == remap[0]
