import numpy as np

from .topology import (KEY_RESOLUTION, TopologyError, VertexRecord, EdgeRecord, FaceShape,
                       FaceRecord, position_key)


# --- The Topology Graph ---
class TopologyGraph:
    ''' Vertex / edge / face connectivity of a triangle-and-quad mesh.

    Records live in three arenas (plain lists) and refer to each other by
    integer id, which is also their index in the arena. Two lookups keep
    construction O(1) per corner: quantized position -> vertex id, and
    (low, high) vertex pair -> edge id.
    '''
    def __init__(self, resolution=KEY_RESOLUTION):
        self.resolution = float(resolution)
        self.vertices = []
        self.edges = []
        self.faces = []

        # Mesh the graph was built from; used to forward per-corner attributes
        self.source = None

        self._position_to_vertex = {}
        self._pair_to_edge = {}

    @property
    def num_vertices(self):
        return len(self.vertices)

    @property
    def num_edges(self):
        return len(self.edges)

    @property
    def num_faces(self):
        return len(self.faces)

    def _key(self, position):
        return position_key(position, self.resolution)

    def get_vertex_index(self, position):
        """ Returns the id of the vertex at `position`, creating it if unseen. """
        key = self._key(position)
        vid = self._position_to_vertex.get(key)
        if vid is None:
            vid = len(self.vertices)
            self.vertices.append(VertexRecord(vid, position))
            self._position_to_vertex[key] = vid
        return vid

    def get_edge_index(self, v0, v1):
        """
        Returns the id of the edge joining v0 and v1 in either order.
        A new edge is registered on both endpoints exactly once, here.
        """
        key = (min(v0, v1), max(v0, v1))
        eid = self._pair_to_edge.get(key)
        if eid is None:
            eid = len(self.edges)
            edge = EdgeRecord(eid, v0, v1)
            self.edges.append(edge)
            self._pair_to_edge[key] = eid
            self.vertices[edge.low].edges.append(eid)
            self.vertices[edge.high].edges.append(eid)
        return eid

    def find_edge(self, v0, v1):
        """ Returns the edge id joining v0 and v1, or None. """
        return self._pair_to_edge.get((min(v0, v1), max(v0, v1)))

    def add_face(self, positions, corners=None):
        """
        Adds one triangle or quad given its corner positions in winding order.
        `corners` optionally records the input vertex index of each corner.

        Every check runs before any record is inserted, so a rejected face
        leaves the graph exactly as it was.
        """
        fid = len(self.faces)
        positions = [np.asarray(p, dtype=np.float64) for p in positions]
        n = FaceShape.from_corner_count(len(positions)).corner_count

        # 1. Look corners up without inserting
        keys = [self._key(p) for p in positions]
        known = [self._position_to_vertex.get(k) for k in keys]
        if len(set(keys)) != n:
            raise TopologyError(f'Face {fid} is degenerate: corners collapse onto '
                                f'repeated positions (vertices {known}).')

        # 2. A face only reaches a third face on an edge between known vertices
        for i in range(n):
            v0, v1 = known[i], known[(i + 1) % n]
            if v0 is None or v1 is None:
                continue
            eid = self.find_edge(v0, v1)
            if eid is not None and self.edges[eid].face_count >= EdgeRecord.MAX_FACES:
                edge = self.edges[eid]
                raise TopologyError(f'Edge {eid} ({edge.low}, {edge.high}) is non-manifold: '
                                    f'face {fid} would be its third face '
                                    f'(already used by faces {edge.faces}).')

        # 3. Resolve (and register) vertices and edges, vertex i -> vertex i+1
        vids = [self.get_vertex_index(p) for p in positions]
        eids = [self.get_edge_index(vids[i], vids[(i + 1) % n]) for i in range(n)]

        # 4. Create the face record
        face = FaceRecord(fid, vids, eids, corners)
        self.faces.append(face)

        # 5. Back-references
        for vid in vids:
            self.vertices[vid].faces.append(fid)
        for eid in eids:
            self.edges[eid].add_face(fid)

        return face

    def move_vertex(self, vertex_id, position):
        """ Moves one vertex, refusing to land on a position owned by another. """
        self.move_vertices({vertex_id: position})

    def move_vertices(self, moves):
        """
        Moves several vertices at once. `moves` maps vertex id -> new position.

        Old positions are released before new ones are claimed, so vertices
        may trade places. Two vertices landing on one key, or a vertex landing
        on a vertex that is not moving, raises TopologyError and leaves the
        graph unchanged.
        """
        moves = dict(moves)
        targets = {}
        for vid, pos in moves.items():
            key = self._key(pos)
            if key in targets:
                raise TopologyError(f'Vertices {targets[key]} and {vid} would both move '
                                    f'to {np.asarray(pos, dtype=np.float64)}.')
            owner = self._position_to_vertex.get(key)
            if owner is not None and owner != vid and owner not in moves:
                raise TopologyError(f'Vertex {vid} cannot move to '
                                    f'{np.asarray(pos, dtype=np.float64)}: '
                                    f'position is owned by vertex {owner}.')
            targets[key] = vid

        for vid in moves:
            old_key = self._key(self.vertices[vid].position)
            if self._position_to_vertex.get(old_key) == vid:
                del self._position_to_vertex[old_key]

        for key, vid in targets.items():
            self.vertices[vid].position = np.array(moves[vid], dtype=np.float64).reshape(3)
            self._position_to_vertex[key] = vid

    def positions(self):
        """ Returns a (V, 3) copy of the current vertex positions. """
        if not self.vertices:
            return np.zeros((0, 3), dtype=np.float64)
        return np.array([v.position for v in self.vertices], dtype=np.float64)

    def boundary_edges(self):
        return [e for e in self.edges if e.is_boundary]

    def __repr__(self):
        return (f'TopologyGraph(vertices={self.num_vertices}, edges={self.num_edges}, '
                f'faces={self.num_faces})')


def build_topology(mesh, resolution=KEY_RESOLUTION):
    """
    Builds the connectivity graph of a FlatMesh, face by face in list order.
    Vertices sharing a position become one topological vertex.
    """
    graph = TopologyGraph(resolution)
    graph.source = mesh

    for face in mesh.faces:
        graph.add_face([mesh.positions[i] for i in face], corners=face)

    return graph
