from __future__ import annotations

import shlex
from dataclasses import dataclass


@dataclass(frozen=True)
class Action:
    program: str
    args: tuple[str, ...] = ()

    def __str__(self) -> str:
        return shlex.join([self.program, *self.args])


@dataclass(frozen=True)
class Task:
    name: str
    action: Action | None = None
    deps: tuple[str, ...] = ()
    message: str | None = None

    @property
    def is_aggregate(self) -> bool:
        return self.action is None


class RegistryError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class DuplicateTaskError(RegistryError):
    def __init__(self, name: str):
        super().__init__(f"Duplicate task: '{name}'")
        self.name = name


class UnknownTaskError(RegistryError):
    def __init__(self, name: str, referenced_by: str | None = None):
        if referenced_by is None:
            message = f"Unknown task: '{name}'"
        else:
            message = f"Task '{referenced_by}' depends on unknown task '{name}'"
        super().__init__(message)
        self.name = name
        self.referenced_by = referenced_by


class RegistryFrozenError(RegistryError):
    def __init__(self, name: str):
        super().__init__(f"Registry is frozen, cannot register '{name}'")
        self.name = name
