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

"""kitten-socket - matchmaking and room client for STOMP game servers.

Main components:
    KittenSocket: Façade over one STOMP-over-WebSocket connection
    SocketConfig: Layered connection settings (defaults, TOML, env, kwargs)
    StompPyClient: StompClient implementation backed by stomp.py

Usage:
    from kitten_socket import KittenSocket

    socket = KittenSocket(
        "http://localhost:8080", "register", "game_get", "game_post",
        on_update=print,
        on_connect=lambda: socket.join_public_queue(),
    )

See examples/kitten-socket.toml for file-based configuration.
"""

__version__ = "0.1.0"

from .client import LISTENER_NAMES, SYSTEM_TOPICS, KittenSocket
from .codec import decode_body, encode_body
from .config import ConfigError, find_config_file, load_config
from .exceptions import CallbackError, ConfigurationError
from .socket_config import SocketConfig
from .transport import StompClient, StompPyClient

__all__ = [
    # Façade
    "KittenSocket",
    "SYSTEM_TOPICS",
    "LISTENER_NAMES",
    # Configuration
    "SocketConfig",
    "ConfigError",
    "load_config",
    "find_config_file",
    # Exceptions
    "ConfigurationError",
    "CallbackError",
    # Body codec
    "encode_body",
    "decode_body",
    # Transport
    "StompClient",
    "StompPyClient",
]
