import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Hashable, Mapping

import yaml

from taskline.registry import Action, DuplicateTaskError, Registry, Task

from .types import ConfigError, ProjectConfig, UnsupportedConfigFormatError

logger = logging.getLogger(__name__)


def load_project(path: str | Path) -> ProjectConfig:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise ConfigError(f"Config file not found: {pure_path}")

    if not pure_path.is_file():
        raise ConfigError(f"Config path is not a file: {pure_path}")

    fmt = _detect_format(pure_path)
    raw_file = _parse_file(pure_path, fmt)
    project = _build_project_config(raw_file)
    logger.debug("Loaded %d tasks from %s", len(project.registry), pure_path)
    return project


def _detect_format(path: Path) -> str:
    fmt = path.suffix
    match fmt:
        case ".yaml" | ".yml":
            return "yaml"
        case ".toml":
            return "toml"
        case ".json":
            return "json"
        case _:
            raise UnsupportedConfigFormatError(
                f"Non supported file extension: {fmt}\n Expected format: .yml/.yaml, .toml, .json"
            )


def _parse_file(path: Path, fmt: str) -> Mapping[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"{path}: cannot read") from exc

    match fmt:
        case "yaml":
            try:
                raw_file = yaml.load(text, Loader=_UniqueKeyLoader)
            except yaml.YAMLError as exc:
                raise ConfigError(f"{path}: invalid YAML") from exc
        case "toml":
            # tomllib rejects repeated keys on its own
            try:
                raw_file = tomllib.loads(text)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(f"{path}: invalid TOML") from exc
        case "json":
            try:
                raw_file = json.loads(text, object_pairs_hook=_json_mapping)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"{path}: invalid JSON") from exc
        case _:
            raise AssertionError("Unreachable")

    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{path}: top-level value is not an object: {type(raw_file).__name__}"
        )

    return raw_file


class _KeyedMapping(dict):
    """A dict that remembers keys given more than once in the source file."""

    def __init__(self) -> None:
        super().__init__()
        self.duplicates: list[Any] = []
        self._explicit: set[Any] = set()

    def add(self, key: Any, value: Any, *, explicit: bool = True) -> None:
        if explicit:
            if key in self._explicit:
                self.duplicates.append(key)
            self._explicit.add(key)
        self[key] = value


def _duplicate_keys(mapping: Mapping[Any, Any]) -> list[Any]:
    return getattr(mapping, "duplicates", [])


def _json_mapping(pairs: list[tuple[str, Any]]) -> _KeyedMapping:
    mapping = _KeyedMapping()
    for key, value in pairs:
        mapping.add(key, value)
    return mapping


class _UniqueKeyLoader(yaml.SafeLoader):
    pass


_MERGE_TAG = "tag:yaml.org,2002:merge"


def _construct_yaml_mapping(
    loader: _UniqueKeyLoader, node: yaml.MappingNode
) -> _KeyedMapping:
    explicit = sum(1 for key_node, _ in node.value if key_node.tag != _MERGE_TAG)
    # Moves `<<` merged pairs to the front of node.value
    loader.flatten_mapping(node)
    merged = len(node.value) - explicit

    mapping = _KeyedMapping()
    for index, (key_node, value_node) in enumerate(node.value):
        key = loader.construct_object(key_node, deep=True)
        if not isinstance(key, Hashable):
            raise yaml.constructor.ConstructorError(
                "while constructing a mapping",
                node.start_mark,
                "found unhashable key",
                key_node.start_mark,
            )
        value = loader.construct_object(value_node, deep=True)
        mapping.add(key, value, explicit=index >= merged)
    return mapping


_UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_yaml_mapping
)


def _build_project_config(raw: Mapping[str, Any]) -> ProjectConfig:
    duplicates = _duplicate_keys(raw)
    if duplicates:
        raise ConfigError(f"Duplicate top-level field: {duplicates[0]}")

    for key in raw.keys():
        if key not in {"tasks", "default"}:
            raise ConfigError(f"Unknown top-level field: {key}")

    if "tasks" not in raw:
        raise ConfigError("Missing 'tasks' field")

    if not isinstance(raw["tasks"], Mapping):
        raise ConfigError(f"'tasks' must be a mapping, got {type(raw['tasks']).__name__}")

    if len(raw["tasks"]) < 1:
        raise ConfigError("There must be at least one task in the config file")

    duplicates = _duplicate_keys(raw["tasks"])
    if duplicates:
        raise DuplicateTaskError(str(duplicates[0]).strip())

    registry = Registry()
    for task_id, fields in raw["tasks"].items():
        if not isinstance(task_id, str):
            raise ConfigError(f"Task id must be a string, got {type(task_id).__name__}")

        task_id_norm = task_id.strip()

        if len(task_id_norm) < 1:
            raise ConfigError("A task id can't be empty")

        if not isinstance(fields, Mapping):
            raise ConfigError(f"{task_id_norm} must be a mapping")

        # Raises DuplicateTaskError for ids equal after normalization
        registry.register(_build_task(task_id_norm, fields))

    registry.freeze()

    default = None
    if "default" in raw:
        if not isinstance(raw["default"], str) or len(raw["default"].strip()) < 1:
            raise ConfigError("'default' must be a non-empty task id")

        default = raw["default"].strip()

        if default not in registry:
            raise ConfigError(f"Default task '{default}' is not defined")

    return ProjectConfig(registry=registry, default=default)


def _build_task(task_id: str, fields: Mapping[str, Any]) -> Task:
    keys = {"command", "args", "deps", "message"}
    deps: list[str] = []
    seen: set[str] = set()
    action = None
    message = None

    for field in fields.keys():
        if field not in keys:
            raise ConfigError(f"{task_id}: Can't process: {field}")

    duplicates = _duplicate_keys(fields)
    if duplicates:
        raise ConfigError(f"{task_id}: Duplicate field: {duplicates[0]}")

    if "command" in fields:
        if not isinstance(fields["command"], str):
            raise ConfigError(f"{task_id}: The command should be a string")

        if len(fields["command"].strip()) < 1:
            raise ConfigError(f"{task_id}: Command missing")

        action = Action(fields["command"].strip(), _build_args(task_id, fields))

    elif "args" in fields:
        raise ConfigError(f"{task_id}: 'args' given without a 'command'")

    if "deps" in fields:
        if not isinstance(fields["deps"], list):
            raise ConfigError(f"{task_id}: Dependencies should be in a list.")

        for item in fields["deps"]:
            if not isinstance(item, str):
                raise ConfigError(
                    f"{task_id}: {item} should be a string in the dependency list"
                )

            dep = item.strip()

            if len(dep) < 1:
                raise ConfigError(f"{task_id}: A dependency is empty")

            # Allows to ignore duplicates dependency
            if dep in seen:
                continue

            deps.append(dep)
            seen.add(dep)

    if "message" in fields:
        if not isinstance(fields["message"], str) or len(fields["message"].strip()) < 1:
            raise ConfigError(f"{task_id}: The message should be a non-empty string")

        message = fields["message"].strip()

    return Task(task_id, action, tuple(deps), message)


def _build_args(task_id: str, fields: Mapping[str, Any]) -> tuple[str, ...]:
    if "args" not in fields:
        return ()

    if not isinstance(fields["args"], list):
        raise ConfigError(f"{task_id}: Arguments should be in a list.")

    for item in fields["args"]:
        if not isinstance(item, str):
            raise ConfigError(f"{task_id}: {item} should be a string in the argument list")

    return tuple(fields["args"])
