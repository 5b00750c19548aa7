from .registry import Registry
from .types import (
    Action,
    DuplicateTaskError,
    RegistryError,
    RegistryFrozenError,
    Task,
    UnknownTaskError,
)

__all__ = [
    "Registry",
    "Action",
    "Task",
    "RegistryError",
    "DuplicateTaskError",
    "UnknownTaskError",
    "RegistryFrozenError",
]
