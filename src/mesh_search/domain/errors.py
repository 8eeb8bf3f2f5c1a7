class MeshSearchError(Exception):
    """Base class for errors raised by mesh_search."""


class MalformedMeshError(MeshSearchError, ValueError):
    """Mesh input cannot form a graph (bad index, bad shape, bad number)."""


class EmptyGraphError(MeshSearchError, LookupError):
    """Vertex query against a graph with no vertices."""


class SearchAlreadyTerminatedError(MeshSearchError, RuntimeError):
    """A finished search was stepped again without re-initializing."""
