from .executor import Engine
from .runner import ActionRunner, SubprocessRunner
from .types import ActionFailure, RunResult, Status, TaskOutcome

__all__ = [
    "Engine",
    "ActionRunner",
    "SubprocessRunner",
    "ActionFailure",
    "RunResult",
    "Status",
    "TaskOutcome",
]
