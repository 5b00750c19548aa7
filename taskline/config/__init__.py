from .loader import load_project
from .types import ConfigError, ProjectConfig, UnsupportedConfigFormatError

__all__ = ["load_project", "ProjectConfig", "ConfigError", "UnsupportedConfigFormatError"]
