from .dag import TaskGraph
from .types import CyclicDependencyError, GraphError

__all__ = ["TaskGraph", "GraphError", "CyclicDependencyError"]
