"""
snapsubd/flatmesh.py
--------------------
Plain vertex list + face list container exchanged with the outside world.
Asset importers hand one of these in, the subdivision step hands one back.
"""
import numpy as np

from .topology import MeshFormatError


def validate_faces(faces, num_vertices):
    """
    Rejects faces that are not triangles or quads, or that reference
    vertices outside [0, num_vertices). Returns the faces as int tuples.
    """
    checked = []
    for f_idx, face in enumerate(faces):
        face = tuple(face)
        for i in face:
            if int(i) != i:
                raise MeshFormatError(f'Face {f_idx} has non-integer vertex index {i}.')
        face = tuple(int(i) for i in face)
        if len(face) not in (3, 4):
            raise MeshFormatError(f'Face {f_idx} has {len(face)} corners; '
                                  f'only triangles and quads are supported.')
        for idx in face:
            if idx < 0 or idx >= num_vertices:
                raise MeshFormatError(f'Face {f_idx} references vertex {idx}, '
                                      f'mesh has {num_vertices} vertices.')
        checked.append(face)
    return checked


def _as_attribute(values, width, name, num_vertices):
    if values is None:
        return None
    arr = np.array(values, dtype=np.float64)
    if arr.ndim != 2 or arr.shape != (num_vertices, width):
        raise MeshFormatError(f'{name} must have shape ({num_vertices}, {width}), '
                              f'got {arr.shape}.')
    return arr


class FlatMesh:
    """
    Triangle/quad mesh with optional per-vertex attributes.

    Usage:
        mesh = FlatMesh(positions, faces, texcoords=uvs)
        mesh.num_quads, mesh.num_triangles
    """
    def __init__(self, positions, faces, normals=None, texcoords=None):
        pos = np.array(positions, dtype=np.float64)
        if pos.size == 0:
            pos = pos.reshape(0, 3)
        if pos.ndim != 2 or pos.shape[1] != 3:
            raise MeshFormatError(f'positions must have shape (N, 3), got {pos.shape}.')
        if not np.all(np.isfinite(pos)):
            bad = sorted(set(np.argwhere(~np.isfinite(pos))[:, 0].tolist()))
            raise MeshFormatError(f'positions contain non-finite values at vertices {bad}.')

        self.positions = pos
        self.normals = _as_attribute(normals, 3, 'normals', len(pos))
        self.texcoords = _as_attribute(texcoords, 2, 'texcoords', len(pos))
        self.faces = validate_faces(faces, len(pos))

    @property
    def num_vertices(self):
        return len(self.positions)

    @property
    def num_faces(self):
        return len(self.faces)

    @property
    def num_triangles(self):
        return sum(1 for f in self.faces if len(f) == 3)

    @property
    def num_quads(self):
        return sum(1 for f in self.faces if len(f) == 4)

    @property
    def is_all_quads(self):
        return all(len(f) == 4 for f in self.faces)

    def quad_array(self):
        """ Returns faces as an (M, 4) int array, ready for an index buffer. """
        if not self.is_all_quads:
            raise MeshFormatError('quad_array() needs a mesh made only of quads.')
        return np.array(self.faces, dtype=np.int64).reshape(-1, 4)

    def copy(self):
        return FlatMesh(self.positions.copy(), list(self.faces),
                        normals=None if self.normals is None else self.normals.copy(),
                        texcoords=None if self.texcoords is None else self.texcoords.copy())

    def __repr__(self):
        return (f'FlatMesh(vertices={self.num_vertices}, faces={self.num_faces}, '
                f'quads={self.num_quads}, triangles={self.num_triangles})')
