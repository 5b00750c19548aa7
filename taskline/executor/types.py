from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Status(Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


class ActionFailure(Exception):
    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True)
class TaskOutcome:
    name: str
    status: Status
    reason: str | None = None
    duration_s: float = 0.0


@dataclass(frozen=True)
class RunResult:
    root: str
    plan: list[str]
    outcomes: list[TaskOutcome]

    @property
    def ok(self) -> bool:
        return all(o.status is Status.SUCCEEDED for o in self.outcomes)

    @property
    def attempted(self) -> list[str]:
        return [o.name for o in self.outcomes if o.status is not Status.SKIPPED]

    @property
    def failed(self) -> TaskOutcome | None:
        for outcome in self.outcomes:
            if outcome.status is Status.FAILED:
                return outcome
        return None

    @property
    def skipped(self) -> list[str]:
        return [o.name for o in self.outcomes if o.status is Status.SKIPPED]

    def outcome(self, name: str) -> TaskOutcome:
        for outcome in self.outcomes:
            if outcome.name == name:
                return outcome
        raise KeyError(name)
