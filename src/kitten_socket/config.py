# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Configuration file utilities for kitten-socket.

Connection settings live in the ``[socket]`` table of a TOML file. Keys use
the camelCase names the game server documents:

    [socket]
    url = "http://localhost:8080"
    registerEndpoint = "custom_register"
    messageBrokerPrefix = "custom_game_get"
    applicationDestinationPrefix = "custom_game_post"
    silent = false

Other tables are ignored, so the settings can share a file with other tools.
String values may reference environment variables:

    url = "${GAME_SERVER_URL:-http://localhost:8080}"

SocketConfig (socket_config.py) checks the ``[socket]`` keys and layers them
between built-in defaults and explicit keyword arguments.
"""

from __future__ import annotations

import os
import re
import sys
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

__all__ = ["load_config", "find_config_file", "ConfigError", "CONFIG_ENV_VAR"]

CONFIG_ENV_VAR = "KITTEN_SOCKET_CONFIG"

_ENV_REF = re.compile(r"\$\{([^}]+)\}")


class ConfigError(Exception):
    """Configuration file error."""


def load_config(path: str | Path) -> dict[str, Any]:
    """
    Load a TOML file and expand environment references in its strings.

    Raises:
        ConfigError: If the file is missing, is not valid TOML, or references
            an unset environment variable without a default.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        with open(path, "rb") as f:
            config = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Failed to parse TOML: {e}") from e

    return dict(_expand(config))


def _expand(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _expand(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand(item) for item in obj]
    if isinstance(obj, str):
        return _ENV_REF.sub(_env_value, obj)
    return obj


def _env_value(match: re.Match[str]) -> str:
    """Value for ${VAR} or ${VAR:-default}."""
    name, sep, default = match.group(1).partition(":-")
    value = os.environ.get(name)
    if value is not None:
        return value
    if sep:
        return default
    raise ConfigError(f"Required environment variable not set: {name}")


def find_config_file() -> Path | None:
    """
    Find the kitten-socket config file.

    Searches:
    1. KITTEN_SOCKET_CONFIG environment variable
    2. ./kitten-socket.toml
    3. ~/.config/kitten-socket/config.toml

    Only files named for kitten-socket are picked up; a generic config.toml
    must be passed explicitly.
    """
    env_config = os.environ.get(CONFIG_ENV_VAR)
    if env_config:
        path = Path(env_config)
        if path.exists():
            return path

    for path in (
        Path.cwd() / "kitten-socket.toml",
        Path.home() / ".config" / "kitten-socket" / "config.toml",
    ):
        if path.exists():
            return path

    return None
