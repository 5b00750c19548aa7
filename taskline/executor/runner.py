from __future__ import annotations

import logging
import shlex
import subprocess
from typing import Protocol, Sequence

from .types import ActionFailure

logger = logging.getLogger(__name__)


class ActionRunner(Protocol):
    def run(self, program: str, args: Sequence[str]) -> None:
        """Run `program` with `args` to completion.

        Returns on success, raises `ActionFailure` otherwise.
        """
        ...


class SubprocessRunner:
    """Spawns each action as a child process sharing our stdio."""

    def run(self, program: str, args: Sequence[str]) -> None:
        argv = [program, *args]
        logger.debug("Spawning: %s", shlex.join(argv))

        try:
            result = subprocess.run(argv, check=False)
        except (OSError, ValueError) as exc:
            raise ActionFailure(f"Failed to launch {program}: {exc}") from exc

        if result.returncode != 0:
            raise ActionFailure(f"{program} exited with status {result.returncode}")
