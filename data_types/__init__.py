from .errors import MalformedTopologyError, MissingAttributeError
from .mesh_descriptor import MeshDescriptor, validate_topology
