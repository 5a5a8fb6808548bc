# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Socket configuration - merges defaults, config file, env and caller options."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from genro_toolbox import SmartOptions  # type: ignore[import-untyped]

from .config import ConfigError, load_config

__all__ = ["SocketConfig", "DEFAULTS", "FILE_KEYS"]

DEFAULTS = {"silent": False}

# camelCase file key -> KittenSocket keyword
FILE_KEYS = {
    "url": "url",
    "registerEndpoint": "register_endpoint",
    "messageBrokerPrefix": "message_broker_prefix",
    "applicationDestinationPrefix": "application_destination_prefix",
    "silent": "silent",
}


def _socket_opts_spec(
    url: str,
    register_endpoint: str,
    message_broker_prefix: str,
    application_destination_prefix: str,
    silent: bool,
) -> None:
    """Reference function for SmartOptions type extraction (no defaults)."""


class SocketConfig:
    """Connection settings for a KittenSocket.

    Precedence (later overrides earlier):
    1. Built-in DEFAULTS
    2. ``[socket]`` table of the config file, when given
    3. Environment variables: KITTEN_SOCKET_*
    4. Explicit constructor parameters
    """

    __slots__ = ("_opts", "config_file")

    def __init__(
        self,
        config_file: str | Path | None = None,
        url: str | None = None,
        register_endpoint: str | None = None,
        message_broker_prefix: str | None = None,
        application_destination_prefix: str | None = None,
        silent: bool | None = None,
    ) -> None:
        self.config_file = Path(config_file) if config_file is not None else None
        self._opts = self._build_config(
            dict(
                url=url,
                register_endpoint=register_endpoint,
                message_broker_prefix=message_broker_prefix,
                application_destination_prefix=application_destination_prefix,
                silent=silent,
            )
        )

    def _build_config(self, caller: dict[str, Any]) -> SmartOptions:
        env_opts = SmartOptions(_socket_opts_spec, env="KITTEN_SOCKET", argv=[])
        caller_opts = SmartOptions(caller, ignore_none=True)

        return (
            SmartOptions(DEFAULTS)
            + SmartOptions(self._file_options())
            + env_opts
            + caller_opts
        )

    def _file_options(self) -> dict[str, Any]:
        """Return the file's [socket] table with keys renamed to keywords."""
        if self.config_file is None:
            return {}
        section = load_config(self.config_file).get("socket") or {}
        if not isinstance(section, dict):
            raise ConfigError(f"[socket] in {self.config_file} must be a table")
        unknown = sorted(set(section) - set(FILE_KEYS))
        if unknown:
            raise ConfigError(f"Unknown [socket] keys in {self.config_file}: {', '.join(unknown)}")
        return {FILE_KEYS[key]: value for key, value in section.items()}

    def socket_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for KittenSocket (values not validated here)."""
        return {name: self._opts[name] for name in FILE_KEYS.values()}

    def __getitem__(self, name: str) -> Any:
        """Proxy bracket access to underlying opts."""
        return self._opts[name]
