from __future__ import annotations

import argparse
import logging
import sys

from taskline.config import ConfigError, ProjectConfig, load_project
from taskline.executor import Engine, RunResult, Status
from taskline.graph import GraphError, TaskGraph
from taskline.registry import RegistryError

from .args import build_parser


def main() -> None:
    sys.exit(run_cli())


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        _configure_logging(args.verbose)

        match args.command:
            case "run":
                return cmd_run(args)
            case "plan":
                return cmd_plan(args)
            case "list":
                return cmd_list(args)
            case "graph":
                return cmd_graph(args)
            case _:
                return 2

    except (ConfigError, RegistryError, GraphError) as exc:
        print(str(exc), file=sys.stderr)
        return 2

    except KeyboardInterrupt:
        return 130


def cmd_run(args: argparse.Namespace) -> int:
    project = load_project(args.config)
    engine = Engine(project.registry)
    rr = engine.execute(_target(args, project))
    _print_result(rr)
    return 0 if rr.ok else 1


def cmd_plan(args: argparse.Namespace) -> int:
    project = load_project(args.config)
    for tid in TaskGraph(project.registry).plan(_target(args, project)):
        print(tid)
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    project = load_project(args.config)
    for tid in project.registry.names():
        print(tid)
    return 0


def cmd_graph(args: argparse.Namespace) -> int:
    project = load_project(args.config)
    for task in project.registry:
        deps = " ".join(task.deps)
        print(f"{task.name}: {deps}".rstrip())
    return 0


def _target(args: argparse.Namespace, project: ProjectConfig) -> str:
    if args.target is not None:
        return args.target
    if project.default is not None:
        return project.default
    raise ConfigError("No target given and no 'default' task configured")


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _print_result(rr: RunResult) -> None:
    for outcome in rr.outcomes:
        match outcome.status:
            case Status.SUCCEEDED:
                print(f"OK {outcome.name}, {outcome.duration_s:.3f}s")
            case Status.FAILED:
                print(
                    f"FAIL {outcome.name}, {outcome.duration_s:.3f}s: {outcome.reason}"
                )
            case Status.SKIPPED:
                print(f"SKIP {outcome.name}")
