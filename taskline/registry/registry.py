from __future__ import annotations

from typing import Iterable, Iterator

from .types import DuplicateTaskError, RegistryFrozenError, Task, UnknownTaskError


class Registry:
    """Task definitions keyed by name.

    Filled during a load phase with `register`, then sealed with `freeze`.
    A frozen registry is never mutated and can be shared between readers.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}
        self._frozen = False

    @classmethod
    def from_tasks(cls, tasks: Iterable[Task]) -> Registry:
        registry = cls()
        for task in tasks:
            registry.register(task)
        registry.freeze()
        return registry

    def register(self, task: Task) -> None:
        if self._frozen:
            raise RegistryFrozenError(task.name)

        if task.name in self._tasks:
            raise DuplicateTaskError(task.name)

        self._tasks[task.name] = task

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, name: str) -> Task:
        try:
            return self._tasks[name]
        except KeyError:
            raise UnknownTaskError(name) from None

    def names(self) -> list[str]:
        return sorted(self._tasks)

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[Task]:
        for name in sorted(self._tasks):
            yield self._tasks[name]

    def __len__(self) -> int:
        return len(self._tasks)
