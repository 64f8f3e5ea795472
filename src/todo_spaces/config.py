"""Configuration management for the Todo Spaces application."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
import yaml

from .space import DEFAULT_SPACE
from .todo import Priority

logger = logging.getLogger(__name__)

APP_DIR_NAME = "todo"
TODO_FILE_NAME = "todos.md"
CONFIG_FILE_NAME = "config.yaml"
TODO_FILE_ENV = "TODO_FILE"


def get_config_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Directory holding the todo file and config: $XDG_CONFIG_HOME/todo.

    Falls back to ~/.config/todo when XDG_CONFIG_HOME is unset or empty.
    """
    if environ is None:
        environ = os.environ
    base = environ.get("XDG_CONFIG_HOME") or os.path.join("~", ".config")
    return Path(os.path.expanduser(base)) / APP_DIR_NAME


@dataclass
class ConfigModel:
    """Configuration for Todo Spaces."""

    todo_file: str = ""
    default_space: str = DEFAULT_SPACE
    default_priority: Priority = Priority.MEDIUM
    editor: Optional[str] = None  # None: $VISUAL / $EDITOR
    no_color: bool = False

    def __post_init__(self):
        """Post-initialization setup."""
        if not self.todo_file:
            self.todo_file = str(get_config_dir() / TODO_FILE_NAME)
        self.todo_file = os.path.expanduser(self.todo_file)

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {
            "todo_file": self.todo_file,
            "default_space": self.default_space,
            "default_priority": self.default_priority.value,
            "editor": self.editor,
            "no_color": self.no_color,
        }
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML.

        Unknown keys are ignored and an unknown priority falls back to MEDIUM.
        """
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping")

        known = {"todo_file", "default_space", "default_priority", "editor", "no_color"}
        for key in set(data) - known:
            logger.warning(f"Ignoring unknown config key: {key}")
        data = {k: v for k, v in data.items() if k in known}

        if "default_priority" in data:
            try:
                data["default_priority"] = Priority.from_name(str(data["default_priority"]))
            except ValueError:
                logger.warning(f"Unknown default_priority {data['default_priority']!r}, using medium")
                data["default_priority"] = Priority.MEDIUM

        return cls(**data)

    def get_todo_path(self) -> Path:
        """Get the todo file path."""
        return Path(self.todo_file)


class Config:
    """Configuration manager for Todo Spaces."""

    _instance: Optional[ConfigModel] = None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Load configuration from file, or use defaults if there is none.

        An explicit config_path is always read; otherwise the cached
        configuration is returned when there is one.
        """
        if config_path is None and cls._instance is not None:
            return cls._instance

        if config_path is None:
            config_path = get_config_dir() / CONFIG_FILE_NAME

        config = None
        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    config = ConfigModel.from_yaml(f.read())
                logger.debug(f"Loaded configuration from {config_path}")
            except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {config_path}: {e}; using defaults")

        cls._instance = config if config is not None else ConfigModel()
        return cls._instance

    @classmethod
    def get(cls) -> ConfigModel:
        """Get the current configuration instance."""
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Forget the cached configuration (useful for testing)."""
        cls._instance = None


def get_config() -> ConfigModel:
    """Get the current configuration."""
    return Config.get()


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file."""
    return Config.load(config_path)


def resolve_todo_path(
    explicit: Optional[str] = None,
    config: Optional[ConfigModel] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """Pick the todo file: explicit path, then $TODO_FILE, then the config."""
    if explicit:
        return Path(os.path.expanduser(explicit))
    if environ is None:
        environ = os.environ
    from_env = environ.get(TODO_FILE_ENV)
    if from_env:
        return Path(os.path.expanduser(from_env))
    if config is None:
        config = get_config()
    return config.get_todo_path()
