from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="taskline")

    parser.add_argument(
        "--config",
        default="taskline.toml",
        help="Path to config file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (repeatable)",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
    )

    # run
    run = subparsers.add_parser("run", help="Run a task and its dependencies")
    run.add_argument(
        "target",
        nargs="?",
        help="Target task id (defaults to the config's 'default')",
    )

    # plan
    plan = subparsers.add_parser("plan", help="Print the execution order of a task")
    plan.add_argument(
        "target",
        nargs="?",
        help="Target task id (defaults to the config's 'default')",
    )

    # list
    subparsers.add_parser("list", help="List tasks")

    # graph
    subparsers.add_parser("graph", help="Show dependency graph")

    return parser
