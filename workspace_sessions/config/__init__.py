"""Configuration package for session management.

Configuration Precedence (highest to lowest):
1. Explicit overrides
2. Environment variables
3. Project config (<project>/.workspace-sessions/config.json)
4. Global config (~/.workspace-sessions/config.json)
5. Defaults
"""

from .config_loader import ConfigLoader, ConfigPaths, build_config, load_config
from .models import ActionFlags, SessionsConfig

__all__ = [
    "ActionFlags",
    "ConfigLoader",
    "ConfigPaths",
    "SessionsConfig",
    "build_config",
    "load_config",
]
