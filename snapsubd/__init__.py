# snapsubd/__init__.py

__version__ = "0.1.0"

# Import Records and Errors
from .topology import (FaceShape, VertexRecord, EdgeRecord, FaceRecord,
                       MeshError, MeshFormatError, TopologyError,
                       KEY_RESOLUTION, position_key)

# Import the Mesh containers
from .flatmesh import FlatMesh, validate_faces
from .mesh import TopologyGraph, build_topology

# Import Subdivision
from .refine import subdivide, catmull_clark
from .weld import weld_vertices
