from __future__ import annotations

import logging
import time

from taskline.graph import TaskGraph
from taskline.registry import Registry

from .runner import ActionRunner, SubprocessRunner
from .types import ActionFailure, RunResult, Status, TaskOutcome

logger = logging.getLogger(__name__)


class Engine:
    def __init__(self, registry: Registry, runner: ActionRunner | None = None):
        self.registry = registry
        self.graph = TaskGraph(registry)
        self.runner = runner if runner is not None else SubprocessRunner()

    def execute(self, root: str) -> RunResult:
        plan = self.graph.plan(root)
        return self.run_plan(root, plan)

    def run_plan(self, root: str, plan: list[str]) -> RunResult:
        outcomes: list[TaskOutcome] = []

        for index, tid in enumerate(plan):
            outcome = self._run_task(tid)
            outcomes.append(outcome)

            if outcome.status is Status.FAILED:
                logger.error("Task %s failed: %s", tid, outcome.reason)
                for rest in plan[index + 1 :]:
                    logger.info("Skipping %s", rest)
                    outcomes.append(TaskOutcome(rest, Status.SKIPPED))
                break

        return RunResult(root, list(plan), outcomes)

    def _run_task(self, tid: str) -> TaskOutcome:
        task = self.registry.lookup(tid)
        if task.is_aggregate:
            logger.info("Task %s has no action", tid)
            return TaskOutcome(tid, Status.SUCCEEDED)

        logger.info("Running %s: %s", tid, task.action)
        start = time.monotonic()
        try:
            self.runner.run(task.action.program, task.action.args)
        except ActionFailure as exc:
            duration = time.monotonic() - start
            reason = exc.reason
            if task.message is not None:
                reason = f"{task.message} ({exc.reason})"
            return TaskOutcome(tid, Status.FAILED, reason, duration)

        return TaskOutcome(tid, Status.SUCCEEDED, None, time.monotonic() - start)
