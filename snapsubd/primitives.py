"""
snapsubd/primitives.py
----------------------
Small reference meshes (planar patches and closed solids) used to drive the
topology builder and the subdivision step.
"""
import numpy as np

from .flatmesh import FlatMesh


def unit_quad():
    """ One quad: (0,0,0) (1,0,0) (1,1,0) (0,1,0), counter-clockwise. """
    positions = [[0.0, 0.0, 0.0],
                 [1.0, 0.0, 0.0],
                 [1.0, 1.0, 0.0],
                 [0.0, 1.0, 0.0]]
    texcoords = [[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]]
    normals = [[0.0, 0.0, 1.0]] * 4
    return FlatMesh(positions, [(0, 1, 2, 3)], normals=normals, texcoords=texcoords)


def unit_triangle():
    """ One right triangle in the z = 0 plane. """
    positions = [[0.0, 0.0, 0.0],
                 [1.0, 0.0, 0.0],
                 [0.0, 1.0, 0.0]]
    return FlatMesh(positions, [(0, 1, 2)])


def quad_grid(width, height, nx, ny, with_texcoords=True):
    """
    Generates a flat rectangular patch made of nx * ny quads.

    Args:
        width, height: Physical dimensions of the patch.
        nx, ny: Number of quads along X and Y.
    """
    if nx < 1 or ny < 1:
        raise ValueError(f'quad_grid needs at least one quad per side, got {nx} x {ny}.')

    # node_grid[j, i] holds the vertex index at row j, column i
    node_grid = np.zeros((ny + 1, nx + 1), dtype=int)
    positions = []
    texcoords = []

    for j in range(ny + 1):
        for i in range(nx + 1):
            u = i / float(nx)
            v = j / float(ny)
            node_grid[j, i] = len(positions)
            positions.append([u * width, v * height, 0.0])
            texcoords.append([u, v])

    # n3 -- n4
    # |     |
    # n1 -- n2
    faces = []
    for j in range(ny):
        for i in range(nx):
            n1 = node_grid[j, i]
            n2 = node_grid[j, i + 1]
            n3 = node_grid[j + 1, i]
            n4 = node_grid[j + 1, i + 1]
            faces.append((n1, n2, n4, n3))

    return FlatMesh(positions, faces, texcoords=texcoords if with_texcoords else None)


def cube(size=1.0):
    """ Closed axis-aligned cube centred on the origin, 8 vertices, 6 quads
        wound outward. """
    h = 0.5 * size
    positions = [[-h, -h, -h], [h, -h, -h], [h, h, -h], [-h, h, -h],
                 [-h, -h, h], [h, -h, h], [h, h, h], [-h, h, h]]
    faces = [(0, 3, 2, 1),  # bottom (-z)
             (4, 5, 6, 7),  # top    (+z)
             (0, 1, 5, 4),  # front  (-y)
             (2, 3, 7, 6),  # back   (+y)
             (1, 2, 6, 5),  # right  (+x)
             (3, 0, 4, 7)]  # left   (-x)
    return FlatMesh(positions, faces)


def tetrahedron():
    """ Closed regular tetrahedron, 4 vertices, 4 triangles. """
    positions = [[1.0, 1.0, 1.0],
                 [1.0, -1.0, -1.0],
                 [-1.0, 1.0, -1.0],
                 [-1.0, -1.0, 1.0]]
    faces = [(0, 1, 2), (0, 3, 1), (0, 2, 3), (1, 3, 2)]
    return FlatMesh(positions, faces)


def triangular_prism(height=1.0):
    """ Closed prism mixing both face shapes: 2 triangle caps, 3 quad sides. """
    positions = [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0],
                 [0.0, 0.0, height], [1.0, 0.0, height], [0.0, 1.0, height]]
    faces = [(0, 2, 1),
             (3, 4, 5),
             (0, 1, 4, 3),
             (1, 2, 5, 4),
             (2, 0, 3, 5)]
    return FlatMesh(positions, faces)
