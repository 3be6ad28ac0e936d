class MalformedTopologyError(ValueError):
    """A triangle references a vertex index outside the vertex array, or an array has the wrong shape."""


class MissingAttributeError(LookupError):
    """Vertex normals were requested before any normal estimator ran on the mesh."""
