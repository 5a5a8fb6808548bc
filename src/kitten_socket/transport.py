# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""STOMP client collaborator used by KittenSocket.

The façade talks to its transport only through the small ``StompClient``
protocol below. Framing, the WebSocket handshake, heartbeats and subscription
multiplexing all belong to the STOMP library; nothing here reimplements them.

``StompPyClient`` adapts stomp.py's listener-based API to the callback style
the façade expects::

    client = StompPyClient("ws://localhost:8080/register")
    client.set_debug(False)
    client.connect({}, on_success)          # on_success(frame) on CONNECTED
    sub_id = client.subscribe("/user/game/room_update", handler)
    client.send("/app/room_update", {}, '{"x":1}')

Incoming MESSAGE frames are routed to handlers by their ``subscription``
header. Handlers receive the stomp.py frame (``.headers``, ``.body``).
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Callable, Protocol
from urllib.parse import urlsplit

import stomp

__all__ = ["StompClient", "StompPyClient", "MessageHandler", "ConnectHandler"]

MessageHandler = Callable[[Any], None]
ConnectHandler = Callable[[Any], None]

STOMP_LOGGER = "stomp.py"

logger = logging.getLogger("kitten_socket.transport")


class StompClient(Protocol):
    """Operations KittenSocket needs from a STOMP-over-WebSocket client."""

    def connect(self, headers: dict[str, str], on_success: ConnectHandler) -> None: ...

    def subscribe(self, destination: str, handler: MessageHandler) -> str: ...

    def send(self, destination: str, headers: dict[str, str], body: str) -> None: ...

    def set_debug(self, enabled: bool) -> None: ...

    def disconnect(self) -> None: ...


class _Listener(stomp.ConnectionListener):
    """Forwards stomp.py events to the owning StompPyClient."""

    def __init__(self, owner: StompPyClient) -> None:
        self._owner = owner

    def on_connected(self, frame: Any) -> None:
        self._owner._handle_connected(frame)

    def on_message(self, frame: Any) -> None:
        self._owner._handle_message(frame)

    def on_error(self, frame: Any) -> None:
        logger.error(f"STOMP error frame: {frame.body}")

    def on_disconnected(self) -> None:
        logger.info("STOMP connection closed")


def _open_connection(url: str) -> Any:
    """Build a stomp.py WebSocket connection for a ws:// or wss:// url."""
    parts = urlsplit(url)
    secure = parts.scheme == "wss"
    port = parts.port or (443 if secure else 80)
    host_and_ports = [(parts.hostname, port)]
    conn = stomp.WSStompConnection(host_and_ports, ws_path=parts.path or "/")
    if secure:
        conn.set_ssl(for_hosts=host_and_ports)
    return conn


class StompPyClient:
    """StompClient backed by stomp.py's WebSocket connection.

    Args:
        url: Full ws:// or wss:// handshake url (endpoint included).
        connection: Pre-built stomp.py connection. Built from url when omitted.
    """

    __slots__ = ("url", "_conn", "_handlers", "_ids", "_on_success")

    def __init__(self, url: str, connection: Any = None) -> None:
        self.url = url
        self._conn = connection if connection is not None else _open_connection(url)
        self._handlers: dict[str, MessageHandler] = {}
        self._ids = itertools.count()
        self._on_success: ConnectHandler | None = None
        self._conn.set_listener("kitten_socket", _Listener(self))

    def connect(self, headers: dict[str, str], on_success: ConnectHandler) -> None:
        self._on_success = on_success
        logger.debug(f"Opening STOMP connection to {self.url}")
        self._conn.connect(headers=dict(headers), wait=False)

    def subscribe(self, destination: str, handler: MessageHandler) -> str:
        sub_id = f"sub-{next(self._ids)}"
        self._handlers[sub_id] = handler
        self._conn.subscribe(destination=destination, id=sub_id, ack="auto")
        return sub_id

    def send(self, destination: str, headers: dict[str, str], body: str) -> None:
        self._conn.send(destination=destination, body=body, headers=dict(headers))

    def set_debug(self, enabled: bool) -> None:
        """Show or hide stomp.py's own frame-level logging."""
        level = logging.DEBUG if enabled else logging.WARNING
        logging.getLogger(STOMP_LOGGER).setLevel(level)

    def disconnect(self) -> None:
        self._conn.disconnect()

    def _handle_connected(self, frame: Any) -> None:
        if self._on_success is not None:
            self._on_success(frame)

    def _handle_message(self, frame: Any) -> None:
        sub_id = frame.headers.get("subscription")
        handler = self._handlers.get(sub_id) if sub_id is not None else None
        if handler is None:
            logger.warning(f"Dropping frame for unknown subscription {sub_id!r}")
            return
        handler(frame)
