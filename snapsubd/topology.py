import numpy as np

from enum import Enum

# Grid step used to turn float coordinates into hashable position keys
KEY_RESOLUTION = 1e-9


class MeshError(ValueError):
    ''' Base class for every error raised by snapsubd. '''


class MeshFormatError(MeshError):
    ''' Raw input mesh is malformed (bad corner count, bad index, bad shape). '''


class TopologyError(MeshError):
    ''' Connectivity cannot be built or kept consistent (non-manifold edge,
        degenerate face, vertex collision, isolated vertex). '''


def position_key(position, resolution=KEY_RESOLUTION):
    ''' Quantizes a 3D position onto an integer grid and returns the
        (i, j, k) tuple used as the identity of a topological vertex.
    '''
    p = np.asarray(position, dtype=np.float64).reshape(3)
    if not np.all(np.isfinite(p)):
        raise MeshFormatError(f'Position {p} is not finite.')
    # Python ints, so large coordinates cannot overflow the key
    return tuple(int(c) for c in np.rint(p / resolution))


class FaceShape(Enum):
    TRIANGLE = 3
    QUAD = 4

    @property
    def corner_count(self):
        return self.value

    @classmethod
    def from_corner_count(cls, n):
        try:
            return cls(n)
        except ValueError:
            raise MeshFormatError(f'Faces must have 3 or 4 corners, got {n}.') from None


class VertexRecord:
    ''' Represents a topological vertex, identified by its position.

    Vertices are created by the TopologyGraph the first time a face corner
    lands on an unseen position. They keep back-references to every edge and
    face touching them, which is all the subdivision step needs to average
    neighbourhoods. The position is the only mutable field, and it must be
    changed through the graph so the position lookup stays in sync.

    Attributes:
        id (int): Index of the record in the graph's vertex arena.
        position (np.ndarray): (3,) float64 coordinates.
        edges (list of int): Incident edge ids, in discovery order.
        faces (list of int): Incident face ids, in discovery order.
    '''
    __slots__ = ['id', 'position', 'edges', 'faces']

    def __init__(self, vid, position):
        self.id = int(vid)
        self.position = np.array(position, dtype=np.float64).reshape(3)
        self.edges = []
        self.faces = []

    @property
    def valence(self):
        ''' Number of faces incident to this vertex. '''
        return len(self.faces)

    def __repr__(self):
        x, y, z = self.position
        return (f'VertexRecord(id = {self.id:4d}: '
                f'pos = ({x:10.4f}, {y:10.4f}, {z:10.4f}), valence = {self.valence})')


class EdgeRecord:
    ''' Undirected edge between two vertices, stored as (low, high).

    A manifold edge borders at most two faces. Registering a third face is a
    topology error: non-manifold input is rejected, never patched.

    Attributes:
        id (int): Index of the record in the graph's edge arena.
        low (int): Smaller endpoint vertex id.
        high (int): Larger endpoint vertex id.
        faces (list of int): Incident face ids (0, 1 or 2 of them).
    '''
    __slots__ = ['id', 'low', 'high', 'faces']

    MAX_FACES = 2

    def __init__(self, eid, v0, v1):
        if v0 == v1:
            raise TopologyError(f'Edge {eid} would connect vertex {v0} to itself.')
        self.id = int(eid)
        self.low = int(min(v0, v1))
        self.high = int(max(v0, v1))
        self.faces = []

    @property
    def key(self):
        return (self.low, self.high)

    @property
    def face_count(self):
        return len(self.faces)

    @property
    def is_boundary(self):
        return len(self.faces) == 1

    def add_face(self, face_id):
        if len(self.faces) >= self.MAX_FACES:
            raise TopologyError(f'Edge {self.id} ({self.low}, {self.high}) is non-manifold: '
                                f'face {face_id} would be its third face '
                                f'(already used by faces {self.faces}).')
        self.faces.append(int(face_id))

    def other(self, vertex_id):
        ''' Returns the endpoint opposite to vertex_id. '''
        if vertex_id == self.low:
            return self.high
        if vertex_id == self.high:
            return self.low
        raise TopologyError(f'Vertex {vertex_id} is not an endpoint of edge {self.id}.')

    def __repr__(self):
        return (f'EdgeRecord(id = {self.id:4d}: '
                f'vertices = ({self.low}, {self.high}), faces = {self.faces})')


class FaceRecord:
    ''' A triangle or quad of the topology graph.

    Vertex and edge lists are parallel: edge i joins vertex i and vertex
    (i + 1) % n, so walking the face in winding order visits both in step.
    `corners` keeps the raw input vertex index each corner came from, which
    is what lets per-corner attributes (normals, texture coordinates) survive
    the position based deduplication.

    Attributes:
        id (int): Index of the record in the graph's face arena.
        shape (FaceShape): TRIANGLE or QUAD.
        vertices (tuple of int): Vertex ids in winding order.
        edges (tuple of int): Edge ids, edge i from vertex i to vertex i + 1.
        corners (tuple of int or None): Input vertex index per corner.
    '''
    __slots__ = ['id', 'shape', 'vertices', 'edges', 'corners']

    def __init__(self, fid, vertices, edges, corners=None):
        shape = FaceShape.from_corner_count(len(vertices))
        if len(edges) != shape.corner_count:
            raise TopologyError(f'Face {fid} has {len(vertices)} vertices '
                                f'but {len(edges)} edges.')

        self.id = int(fid)
        self.shape = shape
        self.vertices = tuple(int(v) for v in vertices)
        self.edges = tuple(int(e) for e in edges)
        self.corners = None if corners is None else tuple(int(c) for c in corners)

    @property
    def is_quad(self):
        return self.shape is FaceShape.QUAD

    def __len__(self):
        return self.shape.corner_count

    def __repr__(self):
        return f'FaceRecord(id={self.id}, {self.shape.name}, vertices={self.vertices})'
