# tests/test_cli.py
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from taskline.cli import run_cli


def _py(code: str) -> dict:
    return {"command": sys.executable, "args": ["-c", code]}


def _write_json_config(path: Path, tasks: dict, default: str | None = None) -> None:
    raw: dict = {"tasks": tasks}
    if default is not None:
        raw["default"] = default
    path.write_text(json.dumps(raw), encoding="utf-8")


def _append(log: Path, tag: str) -> dict:
    return _py(f"open(r'{log}','a').write('{tag}\\n')")


def test_list_prints_one_task_per_line(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "taskline.json"
    _write_json_config(cfg, {"b": _py("pass"), "a": _py("pass")})

    code = run_cli(["--config", str(cfg), "list"])
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out == ["a", "b"]


def test_graph_prints_adjacency_list_in_declared_order(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "taskline.json"
    _write_json_config(
        cfg,
        {
            "c": {"deps": ["b", "a"]},
            "b": {**_py("pass"), "deps": ["a"]},
            "a": _py("pass"),
        },
    )

    code = run_cli(["--config", str(cfg), "graph"])
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out == ["a:", "b: a", "c: b a"]


def test_plan_prints_order_without_running(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "taskline.json"
    log = tmp_path / "log.txt"
    _write_json_config(
        cfg,
        {
            "a": _append(log, "a"),
            "b": {**_append(log, "b"), "deps": ["a"]},
            "all": {"deps": ["b", "a"]},
        },
    )

    code = run_cli(["--config", str(cfg), "plan", "all"])
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out == ["a", "b", "all"]
    assert not log.exists()


def test_run_target_executes_only_subgraph(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "taskline.json"
    log = tmp_path / "log.txt"
    _write_json_config(
        cfg,
        {
            "a": _append(log, "a"),
            "b": {**_append(log, "b"), "deps": ["a"]},
            "c": _append(log, "c"),
            "d": {**_append(log, "d"), "deps": ["b"]},
        },
    )

    code = run_cli(["--config", str(cfg), "run", "d"])
    out = capsys.readouterr().out

    assert code == 0
    assert log.read_text(encoding="utf-8").splitlines() == ["a", "b", "d"]
    assert "OK a" in out
    assert "OK d" in out


def test_run_uses_default_target(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "taskline.json"
    log = tmp_path / "log.txt"
    _write_json_config(
        cfg,
        {
            "a": _append(log, "a"),
            "unused": _append(log, "unused"),
            "all": {"deps": ["a"]},
        },
        default="all",
    )

    code = run_cli(["--config", str(cfg), "run"])
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert log.read_text(encoding="utf-8").splitlines() == ["a"]
    assert out[-1].startswith("OK all")


def test_run_failure_returns_1_and_reports_skips(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "taskline.json"
    _write_json_config(
        cfg,
        {
            "fail": _py("raise SystemExit(5)"),
            "after": _py("pass"),
            "all": {"deps": ["fail", "after"]},
        },
    )

    code = run_cli(["--config", str(cfg), "run", "all"])
    out = capsys.readouterr().out.splitlines()

    assert code == 1
    assert out[0].startswith("FAIL fail")
    assert "exited with status 5" in out[0]
    assert out[1:] == ["SKIP after", "SKIP all"]


def test_run_without_target_or_default_returns_2(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "taskline.json"
    _write_json_config(cfg, {"a": _py("pass")})

    code = run_cli(["--config", str(cfg), "run"])
    captured = capsys.readouterr()

    assert code == 2
    assert "default" in captured.err


def test_invalid_config_path_returns_2(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    missing = tmp_path / "missing.json"

    code = run_cli(["--config", str(missing), "list"])
    captured = capsys.readouterr()

    assert code == 2
    assert captured.err != ""


def test_unknown_target_returns_2(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "taskline.json"
    _write_json_config(cfg, {"a": _py("pass")})

    code = run_cli(["--config", str(cfg), "run", "nope"])
    captured = capsys.readouterr()

    assert code == 2
    assert "nope" in captured.err


def test_cycle_returns_2_without_running(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "taskline.json"
    log = tmp_path / "log.txt"
    _write_json_config(
        cfg,
        {
            "a": {**_append(log, "a"), "deps": ["b"]},
            "b": {**_append(log, "b"), "deps": ["a"]},
        },
    )

    code = run_cli(["--config", str(cfg), "run", "a"])
    captured = capsys.readouterr()

    assert code == 2
    assert "Cycle detected" in captured.err
    assert not log.exists()


def test_unreadable_config_returns_2(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "taskline.toml"
    cfg.write_bytes(b"\xff\xfe")

    code = run_cli(["--config", str(cfg), "list"])
    captured = capsys.readouterr()

    assert code == 2
    assert "cannot read" in captured.err
