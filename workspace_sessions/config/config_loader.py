"""Hierarchical configuration loading for session management.

Settings are merged from several sources with well-defined precedence:

1. Explicit overrides (highest priority)
2. Environment variables
3. Project config (<project>/.workspace-sessions/config.json)
4. Global config (~/.workspace-sessions/config.json)
5. Defaults (lowest priority)
"""

import json
import os
from copy import deepcopy
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..session.errors import ConfigInvalidError
from ..sessions_logging import get_logger
from .models import DEFAULT_GLOBAL_DIR, SessionsConfig

logger = get_logger()

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class ConfigPaths:
    """Standard configuration file paths."""

    GLOBAL_DIR = DEFAULT_GLOBAL_DIR
    GLOBAL_CONFIG = GLOBAL_DIR / "config.json"

    PROJECT_DIR = ".workspace-sessions"
    PROJECT_CONFIG = "config.json"

    @classmethod
    def project_config(cls, project_path: Path) -> Path:
        """Get the project configuration file path.

        Args:
            project_path: Path to the project root.

        Returns:
            Path to the project config file (may not exist).
        """
        return project_path / cls.PROJECT_DIR / cls.PROJECT_CONFIG


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base, recursing into nested dicts."""
    result = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)
    return result


def _parse_bool(env_var: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigInvalidError(
        f"Environment variable {env_var} must be a boolean, got {value!r}",
        suggestion="Use one of: 1, 0, true, false, yes, no, on, off",
    )


class ConfigLoader:
    """Loads SessionsConfig with hierarchical precedence."""

    # Environment variable -> (config key, is boolean)
    ENV_MAPPINGS: dict[str, tuple[str, bool]] = {
        "WORKSPACE_SESSIONS_DIRECTORY": ("directory", False),
        "WORKSPACE_SESSIONS_FILE": ("local_file_name", False),
        "WORKSPACE_SESSIONS_AUTO_READ": ("auto_read", True),
        "WORKSPACE_SESSIONS_AUTO_WRITE": ("auto_write", True),
        "WORKSPACE_SESSIONS_DISABLE": ("disabled", True),
    }

    def __init__(
        self,
        project_path: Path | None = None,
        global_config_file: Path | None = None,
    ):
        self.project_path = Path(project_path) if project_path else Path.cwd()
        self.global_config_file = (
            Path(global_config_file)
            if global_config_file is not None
            else ConfigPaths.GLOBAL_CONFIG
        )

    @property
    def project_config_file(self) -> Path:
        return ConfigPaths.project_config(self.project_path)

    def load(self, **overrides: Any) -> SessionsConfig:
        """Load configuration from all sources.

        Args:
            **overrides: Explicit settings with the highest precedence

        Returns:
            Validated, immutable SessionsConfig

        Raises:
            ConfigInvalidError: If a config file is malformed or the merged
                settings fail validation
        """
        config_dict: dict[str, Any] = {}

        # 1. Global config
        global_settings = self._load_json_file(self.global_config_file)
        if global_settings:
            config_dict = _deep_merge(config_dict, global_settings)
            logger.debug(
                f"Loaded {len(global_settings)} settings from {self.global_config_file}"
            )

        # 2. Project config
        project_settings = self._load_json_file(self.project_config_file)
        if project_settings:
            config_dict = _deep_merge(config_dict, project_settings)
            logger.debug(
                f"Loaded {len(project_settings)} settings from {self.project_config_file}"
            )

        # 3. Environment variables
        env_settings = self._load_env()
        if env_settings:
            config_dict.update(env_settings)
            logger.debug(f"Applied {len(env_settings)} environment variables")

        # 4. Explicit overrides
        if overrides:
            config_dict = _deep_merge(config_dict, overrides)
            logger.debug(f"Applied {len(overrides)} explicit overrides")

        return build_config(config_dict)

    def _load_json_file(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigInvalidError(
                f"Invalid JSON in {path}: {e}", config_file=str(path)
            ) from e
        except OSError as e:
            raise ConfigInvalidError(
                f"Could not read {path}: {e}", config_file=str(path)
            ) from e
        if not isinstance(data, dict):
            raise ConfigInvalidError(
                f"Configuration in {path} must be a JSON object",
                config_file=str(path),
            )
        return data

    def _load_env(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        for env_var, (key, is_bool) in self.ENV_MAPPINGS.items():
            value = os.environ.get(env_var)
            if value is None:
                continue
            settings[key] = _parse_bool(env_var, value) if is_bool else value
        return settings


def build_config(settings: dict[str, Any]) -> SessionsConfig:
    """Validate a settings dict into a SessionsConfig.

    Partial ``force`` / ``verbose`` tables are merged over the defaults, so
    ``{"force": {"read": True}}`` keeps the default for write and delete.

    Raises:
        ConfigInvalidError: If validation fails
    """
    merged = _deep_merge(SessionsConfig().model_dump(), settings)
    try:
        return SessionsConfig(**merged)
    except ValidationError as e:
        raise ConfigInvalidError(f"Invalid session configuration: {e}") from e


def load_config(project_path: Path | None = None, **overrides: Any) -> SessionsConfig:
    """Load configuration for a project directory.

    Args:
        project_path: Project root (defaults to CWD)
        **overrides: Explicit configuration overrides

    Returns:
        Validated SessionsConfig
    """
    return ConfigLoader(project_path=project_path).load(**overrides)
