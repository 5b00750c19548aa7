"""taskline - a declarative task runner with ordered, fail-fast execution."""

__version__ = "0.1.0"

from taskline.config import ConfigError, ProjectConfig, load_project
from taskline.executor import (
    ActionFailure,
    ActionRunner,
    Engine,
    RunResult,
    Status,
    SubprocessRunner,
    TaskOutcome,
)
from taskline.graph import CyclicDependencyError, GraphError, TaskGraph
from taskline.registry import (
    Action,
    DuplicateTaskError,
    Registry,
    RegistryError,
    RegistryFrozenError,
    Task,
    UnknownTaskError,
)

__all__ = [
    "__version__",
    "Action",
    "Task",
    "Registry",
    "RegistryError",
    "DuplicateTaskError",
    "UnknownTaskError",
    "RegistryFrozenError",
    "TaskGraph",
    "GraphError",
    "CyclicDependencyError",
    "Engine",
    "ActionRunner",
    "SubprocessRunner",
    "ActionFailure",
    "RunResult",
    "Status",
    "TaskOutcome",
    "load_project",
    "ProjectConfig",
    "ConfigError",
]
