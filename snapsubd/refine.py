import numpy as np

from .flatmesh import FlatMesh
from .mesh import build_topology
from .topology import KEY_RESOLUTION, TopologyError


def subdivide(graph):
    """
    Performs one Catmull-Clark step on a TopologyGraph.
    Returns a NEW all-quad FlatMesh. The graph's vertices are moved in place,
    so the graph should be thrown away afterwards.
    """
    # Every rule below reads the ORIGINAL positions, never the moved ones
    original = graph.positions()

    # --- 1. Face Points (centroid of the corners) ---
    face_points = np.zeros((graph.num_faces, 3), dtype=np.float64)
    for face in graph.faces:
        face_points[face.id] = original[list(face.vertices)].mean(axis=0)

    # --- 2. Edge Points ---
    midpoints = np.zeros((graph.num_edges, 3), dtype=np.float64)
    edge_points = np.zeros((graph.num_edges, 3), dtype=np.float64)
    for edge in graph.edges:
        a = original[edge.low]
        b = original[edge.high]
        midpoints[edge.id] = 0.5 * (a + b)

        if edge.face_count == 2:
            # Interior: both endpoints and both neighbouring face points
            f0, f1 = edge.faces
            edge_points[edge.id] = 0.25 * (a + b + face_points[f0] + face_points[f1])
        else:
            # Boundary: plain midpoint
            edge_points[edge.id] = midpoints[edge.id]

    # --- 3. Vertex Points ---
    for vertex in graph.vertices:
        if vertex.valence == 0:
            raise TopologyError(f'Vertex {vertex.id} at {vertex.position} has no incident '
                                f'faces and cannot be subdivided.')

    moves = {}
    for vertex in graph.vertices:
        n = float(vertex.valence)
        p = original[vertex.id]
        f_avg = face_points[vertex.faces].mean(axis=0)
        e_avg = midpoints[vertex.edges].mean(axis=0)

        # ((n-3)/n) P + (1/n) F + (2/n) E
        moves[vertex.id] = ((n - 3.0) / n) * p + (1.0 / n) * f_avg + (2.0 / n) * e_avg

    graph.move_vertices(moves)

    # --- 4. Emit Quads (one per original corner, unwelded) ---
    source = graph.source
    forward_uv = _can_forward(graph, source, 'texcoords')
    forward_normals = _can_forward(graph, source, 'normals')

    positions = []
    texcoords = []
    normals = []
    quads = []

    for face in graph.faces:
        n = face.shape.corner_count
        fp = face_points[face.id]

        if forward_uv:
            uv_quads = _interpolate_corners(source.texcoords, face.corners)
        if forward_normals:
            normal_quads = _interpolate_corners(source.normals, face.corners, normalize=True)

        for i in range(n):
            # Corner i sits between edge i-1 (incoming) and edge i (outgoing)
            e_prev = face.edges[i - 1]
            e_next = face.edges[i]

            base = len(positions)
            positions.append(edge_points[e_prev])
            positions.append(graph.vertices[face.vertices[i]].position)
            positions.append(edge_points[e_next])
            positions.append(fp)
            quads.append((base, base + 1, base + 2, base + 3))

            if forward_uv:
                texcoords.extend(uv_quads[i])
            if forward_normals:
                normals.extend(normal_quads[i])

    return FlatMesh(np.array(positions, dtype=np.float64).reshape(-1, 3), quads,
                    normals=np.array(normals).reshape(-1, 3) if forward_normals else None,
                    texcoords=np.array(texcoords).reshape(-1, 2) if forward_uv else None)


def catmull_clark(mesh, resolution=KEY_RESOLUTION):
    """ Builds the topology of a FlatMesh and applies ONE subdivision step. """
    return subdivide(build_topology(mesh, resolution))


def _can_forward(graph, source, attribute):
    if source is None or getattr(source, attribute) is None:
        return False
    return all(face.corners is not None for face in graph.faces)


def _interpolate_corners(values, corners, normalize=False):
    """
    Per-face attribute values for the quads emitted around each corner:
    (incoming edge, corner, outgoing edge, face centre), interpolated
    linearly from this face's own corner values.
    """
    c = values[list(corners)]
    n = len(c)
    centre = c.mean(axis=0)

    out = []
    for i in range(n):
        incoming = 0.5 * (c[i - 1] + c[i])
        outgoing = 0.5 * (c[i] + c[(i + 1) % n])
        quad = np.array([incoming, c[i], outgoing, centre], dtype=np.float64)
        if normalize:
            lengths = np.linalg.norm(quad, axis=1, keepdims=True)
            quad = np.divide(quad, lengths, out=np.zeros_like(quad), where=lengths > 0)
        out.append(quad)
    return out
