from dataclasses import dataclass

from taskline.registry import Registry


@dataclass(frozen=True)
class ProjectConfig:
    registry: Registry
    default: str | None = None


class ConfigError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnsupportedConfigFormatError(ConfigError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
