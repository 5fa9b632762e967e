"""Configuration management for checkfile.

Settings come from built-in defaults, ``CHECKFILE__*`` environment variables
and command-line overrides, in increasing order of precedence.
"""

from __future__ import annotations

import os
from typing import Any, Mapping

from .exceptions import ConfigError
from .models import CheckFileConfig
from .resolver import extract_env_overrides, flatten_for_env, resolve_with_precedence


class ConfigManager:
    """Resolve the effective configuration, applying precedence rules."""

    def __init__(self, *, env: Mapping[str, str] | None = None) -> None:
        self._env = env if env is not None else os.environ

    def load(
        self,
        *,
        cli_overrides: Mapping[str, Any] | None = None,
        include_env: bool = True,
    ) -> CheckFileConfig:
        """Return the configuration after merging environment and CLI overrides.

        Args:
            cli_overrides: Dotted-key overrides supplied on the command line.
                ``None`` values are ignored so unset options keep lower-precedence values.
            include_env: Whether ``CHECKFILE__*`` environment variables apply.

        Raises:
            ConfigError: If any override fails validation.
        """
        env_data = extract_env_overrides(self._env) if include_env else None
        cli_data = None
        if cli_overrides:
            cli_data = {key: value for key, value in cli_overrides.items() if value is not None}

        return resolve_with_precedence(
            defaults=CheckFileConfig(),
            env_overrides=env_data or None,
            cli_overrides=cli_data or None,
        )


__all__ = [
    "CheckFileConfig",
    "ConfigError",
    "ConfigManager",
    "flatten_for_env",
    "resolve_with_precedence",
]
