from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from taskline.registry import Registry, UnknownTaskError

from .types import CyclicDependencyError

logger = logging.getLogger(__name__)


class _Visit(Enum):
    VISITING = auto()
    VISITED = auto()


@dataclass(frozen=True)
class TaskGraph:
    registry: Registry

    def plan(self, root: str) -> list[str]:
        """Linearize the dependency closure of `root`.

        Dependencies are walked depth-first in the order they were declared,
        so the same registry always yields the same plan. Every task shows up
        once, after all of its dependencies, with `root` last.
        """
        state: dict[str, _Visit] = {}
        out: list[str] = []
        stack: list[str] = []
        pos: dict[str, int] = {}
        # One pending-deps iterator per entry of `stack`
        frames: list[Iterator[str]] = []

        def enter(tid: str, referenced_by: str | None) -> None:
            match state.get(tid):
                case _Visit.VISITED:
                    return
                case _Visit.VISITING:
                    raise CyclicDependencyError(stack[pos[tid] :] + [tid])

            if tid not in self.registry:
                raise UnknownTaskError(tid, referenced_by)
            task = self.registry.lookup(tid)

            state[tid] = _Visit.VISITING
            pos[tid] = len(stack)
            stack.append(tid)
            frames.append(iter(task.deps))

        enter(root, None)
        while frames:
            dep = next(frames[-1], None)
            if dep is not None:
                enter(dep, stack[-1])
                continue

            frames.pop()
            tid = stack.pop()
            pos.pop(tid)
            state[tid] = _Visit.VISITED
            out.append(tid)

        logger.debug("Plan for %s: %s", root, ", ".join(out))
        return out
