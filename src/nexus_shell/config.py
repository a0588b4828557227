"""Terminal configuration.

A ``TerminalConfig`` carries the handful of knobs a session needs before
it starts: who the user is, what the machine is called, where the admin
REST collaborator lives and how long to wait for it, and an optional
seed for the package manager's invented metadata.

Configuration comes from three places, lowest priority first:

1. the defaults on the dataclass,
2. a JSON file named by ``NEXUS_CONFIG`` (``TerminalConfig.from_file``),
3. ``NEXUS_*`` environment variables (``TerminalConfig.from_env``).

``TerminalConfig.load`` applies all three in that order.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

DEFAULT_API_URL = "http://localhost:5000"
DEFAULT_TIMEOUT = 10.0


class ConfigError(ValueError):
    """Raised when a configuration source cannot be read or parsed."""


@dataclass(frozen=True)
class TerminalConfig:
    """Immutable settings for one terminal session."""

    user: str = "user"
    hostname: str = "nexusos"
    home: str = "/home/user"
    api_base_url: str = DEFAULT_API_URL
    request_timeout: float = DEFAULT_TIMEOUT
    seed: int | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TerminalConfig:
        """Build a config from a dict, rejecting keys it does not know."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"Unknown configuration option: {', '.join(unknown)}"
            raise ConfigError(msg)
        return cls(**dict(data))

    @classmethod
    def from_file(cls, path: str | Path) -> TerminalConfig:
        """Load configuration from a JSON file.

        Raises:
            ConfigError: If the file cannot be read or is not a JSON object.

        """
        try:
            data = json.loads(Path(path).read_text())
        except (OSError, json.JSONDecodeError) as e:
            msg = f"Cannot load config file: {e}"
            raise ConfigError(msg) from e
        if not isinstance(data, dict):
            msg = "Cannot load config file: expected a JSON object"
            raise ConfigError(msg)
        return cls.from_mapping(data)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        base: TerminalConfig | None = None,
    ) -> TerminalConfig:
        """Overlay ``NEXUS_*`` environment variables on *base*.

        Args:
            environ: Variables to read; defaults to ``os.environ``.
            base: Starting configuration; defaults to the built-in defaults.

        Raises:
            ConfigError: If a numeric variable does not parse.

        """
        env = os.environ if environ is None else environ
        config = base or cls()
        overrides: dict[str, Any] = {}

        if user := env.get("NEXUS_USER"):
            overrides["user"] = user
            overrides["home"] = f"/home/{user}"
        if hostname := env.get("NEXUS_HOSTNAME"):
            overrides["hostname"] = hostname
        if url := env.get("NEXUS_API_URL"):
            overrides["api_base_url"] = url
        try:
            if timeout := env.get("NEXUS_API_TIMEOUT"):
                overrides["request_timeout"] = float(timeout)
            if seed := env.get("NEXUS_SEED"):
                overrides["seed"] = int(seed)
        except ValueError as e:
            msg = f"Invalid numeric setting: {e}"
            raise ConfigError(msg) from e

        return replace(config, **overrides)

    @classmethod
    def load(cls, environ: Mapping[str, str] | None = None) -> TerminalConfig:
        """Load the full configuration: defaults, then a file, then variables.

        The file is named by ``NEXUS_CONFIG``; without it only the
        environment overlays the defaults.

        Raises:
            ConfigError: If the file or a variable cannot be parsed.

        """
        env = os.environ if environ is None else environ
        path = env.get("NEXUS_CONFIG")
        base = cls.from_file(path) if path else None
        return cls.from_env(env, base=base)
