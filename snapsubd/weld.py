"""
snapsubd/weld.py
----------------
Optional post-process that merges coincident vertices of a FlatMesh.
The subdivision step emits every quad with its own vertex copies; welding
turns that into a shared index pool when the caller wants one.
"""
import numpy as np
from scipy.spatial import cKDTree

from .flatmesh import FlatMesh

DEFAULT_WELD_TOLERANCE = 1e-9


def weld_vertices(mesh, tolerance=DEFAULT_WELD_TOLERANCE):
    """
    Merges vertices closer than `tolerance`. The first occurrence (lowest
    index) of each cluster is kept along with its attributes.

    Returns:
        (FlatMesh, np.ndarray): the welded mesh and the old -> new index map.
    """
    n = mesh.num_vertices
    remap = np.full(n, -1, dtype=np.int64)
    if n == 0:
        return mesh.copy(), remap

    tree = cKDTree(mesh.positions)
    keep = []
    for i in range(n):
        if remap[i] >= 0:
            continue
        new_idx = len(keep)
        keep.append(i)
        for j in tree.query_ball_point(mesh.positions[i], r=tolerance):
            if remap[j] < 0:
                remap[j] = new_idx

    keep = np.array(keep, dtype=np.int64)
    faces = [tuple(int(remap[i]) for i in face) for face in mesh.faces]

    welded = FlatMesh(mesh.positions[keep], faces,
                      normals=None if mesh.normals is None else mesh.normals[keep],
                      texcoords=None if mesh.texcoords is None else mesh.texcoords[keep])
    return welded, remap
