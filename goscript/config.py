"""goscript configuration management using Pydantic."""

import os
import shutil
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, Field, ValidationError

from goscript.constants import (
    DEFAULT_COLUMNS,
    DEFAULT_CONFIG_FILE,
    DEFAULT_GO_CMD,
    DEFAULT_PLUGINS_SUBDIR,
    DEFAULT_SCRIPTS_DIR,
    ENV_COLUMNS,
    ENV_CORE_DIR,
    ENV_GO_CMD,
    ENV_IMPORTED_MODULES,
    ENV_PLUGINS_DIR,
    ENV_ROOTDIR,
    ENV_SCRIPTS_DIR,
)
from goscript.exceptions import ConfigurationError

BUNDLED_CORE_DIR = Path(__file__).parent / "data" / "core"


class ProjectConfig(BaseModel):
    """Locations of the project root and the three classes of search roots."""

    root_dir: str | None = None
    scripts_dir: str = DEFAULT_SCRIPTS_DIR
    core_dir: str | None = None
    plugins_dir: str | None = None
    plugins: list[str] = Field(
        default_factory=list,
        description="Explicit plugin order; empty means discover plugins_dir",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="warn", pattern="^(debug|info|warn|error)$")
    directory: str | None = None
    json_output: bool = True


class GoScriptConfig(BaseModel):
    """Complete goscript configuration."""

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(
        cls,
        config_path: str | Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> "GoScriptConfig":
        """Load configuration from YAML file, then apply environment overrides.

        Args:
            config_path: Path to config file. Defaults to .go-script.yaml
            env: Environment to read overrides from. Defaults to os.environ

        Returns:
            GoScriptConfig instance
        """
        config_path = Path(DEFAULT_CONFIG_FILE) if config_path is None else Path(config_path)

        data: dict[str, Any] = {}
        if config_path.exists():
            try:
                with open(config_path) as f:
                    data = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigurationError(f"Cannot read config file {config_path}", {"error": str(e)}) from e
            if not isinstance(data, dict):
                raise ConfigurationError(f"Config file {config_path} must contain a mapping")

        config = cls.from_dict(data)
        if config.project.root_dir is None and config_path.exists():
            config.project.root_dir = str(config_path.resolve().parent)
        return config.with_env(os.environ if env is None else env)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GoScriptConfig":
        """Create configuration from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            GoScriptConfig instance

        Raises:
            ConfigurationError: If the dictionary does not validate
        """
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError("Invalid configuration", {"errors": e.error_count()}) from e

    def save(self, config_path: str | Path | None = None) -> None:
        """Save configuration to YAML file.

        Args:
            config_path: Path to save config. Defaults to .go-script.yaml
        """
        config_path = Path(DEFAULT_CONFIG_FILE) if config_path is None else Path(config_path)

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()

    def with_env(self, env: Mapping[str, str]) -> "GoScriptConfig":
        """Return a copy with _GO_* environment overrides applied."""
        overrides = {
            "root_dir": env.get(ENV_ROOTDIR),
            "scripts_dir": env.get(ENV_SCRIPTS_DIR),
            "core_dir": env.get(ENV_CORE_DIR),
            "plugins_dir": env.get(ENV_PLUGINS_DIR),
        }
        update = {key: value for key, value in overrides.items() if value}
        if not update:
            return self
        return self.model_copy(update={"project": self.project.model_copy(update=update)})

    # -- Resolved locations --------------------------------------------------

    @property
    def root_path(self) -> Path:
        """Absolute project root directory."""
        root = self.project.root_dir
        return Path(root).expanduser().resolve() if root else Path.cwd().resolve()

    def _under_root(self, value: str) -> Path:
        path = Path(value).expanduser()
        return path if path.is_absolute() else self.root_path / path

    @property
    def scripts_path(self) -> Path:
        """Absolute project scripts directory."""
        return self._under_root(self.project.scripts_dir)

    @property
    def core_path(self) -> Path:
        """Absolute core framework directory."""
        if self.project.core_dir:
            return self._under_root(self.project.core_dir)
        return BUNDLED_CORE_DIR

    @property
    def plugins_path(self) -> Path:
        """Absolute plugins directory."""
        if self.project.plugins_dir:
            return self._under_root(self.project.plugins_dir)
        return self.scripts_path / DEFAULT_PLUGINS_SUBDIR


@dataclass
class InvocationContext:
    """Facts about the current invocation used by help text and listings."""

    go: str = DEFAULT_GO_CMD
    columns: int = DEFAULT_COLUMNS
    imported_modules: list[str] = field(default_factory=list)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "InvocationContext":
        """Build the context from _GO_CMD, COLUMNS and _GO_IMPORTED_MODULES.

        When COLUMNS is unset or invalid the real terminal width is used,
        falling back to DEFAULT_COLUMNS when stdout is not a terminal.
        """
        env = os.environ if env is None else env

        columns_value = env.get(ENV_COLUMNS, "")
        if columns_value.isdigit() and int(columns_value) > 0:
            columns = int(columns_value)
        else:
            columns = shutil.get_terminal_size((DEFAULT_COLUMNS, 24)).columns

        return cls(
            go=env.get(ENV_GO_CMD) or DEFAULT_GO_CMD,
            columns=columns,
            imported_modules=env.get(ENV_IMPORTED_MODULES, "").split(),
        )
