# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""KittenSocket - matchmaking and room client over STOMP/WebSocket.

Purpose
=======
``KittenSocket`` wraps one STOMP connection to the game server. It validates
its configuration, subscribes to the server's system topics as soon as the
handshake succeeds, and exposes chainable ``send`` / ``subscribe`` helpers
that build fully-qualified destinations.

Lifecycle::

    KittenSocket(...)            validate config (ConfigurationError on failure)
          │
    connect()  ──────────────>   client.connect({}, on_success)
          │                           │
          │                      on_success: 8 system subscriptions, in order
          │                                  connected = True
          │                                  on_connect()
          │
    send() / subscribe()  ───>   client.send / client.subscribe

The transition from unconnected to connected happens once per instance.
There is no reconnect and no teardown beyond ``close()``.

System topics
=============
Subscribed privately (under ``/user``) in this order:

==========================  ==========================
topic                       callback
==========================  ==========================
queue_not_found             on_queue_not_found
queue_created               on_queue_created
joined_queue                on_joined_queue
player_joined_queue         on_player_joined_queue
player_left_queue           on_player_left_queue
room_update                 on_update
player_joined_room          on_player_left_room (*)
player_left_room            on_player_left_room
==========================  ==========================

(*) The game server's reference client routes both room membership topics to
the same handler. ``on_player_joined_room`` overrides this when given.

Example::

    socket = KittenSocket(
        "http://localhost:8080",
        "custom_register",
        "custom_game_get",
        "custom_game_post",
        on_update=lambda data: print(data),
        on_connect=lambda: socket.join_public_queue(),
    )
"""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING, Any, Callable

from .codec import decode_body, encode_body
from .destinations import (
    application_destination,
    coerce_url,
    join_endpoint,
    subscription_destination,
    validate_segment,
)
from .exceptions import CallbackError

if TYPE_CHECKING:
    from .socket_config import SocketConfig
    from .transport import StompClient

__all__ = ["KittenSocket", "SYSTEM_TOPICS", "LISTENER_NAMES"]

Listener = Callable[[Any], None]
ClientFactory = Callable[[str], "StompClient"]

# topic -> attribute holding its callback
SYSTEM_TOPICS: tuple[tuple[str, str], ...] = (
    ("queue_not_found", "on_queue_not_found"),
    ("queue_created", "on_queue_created"),
    ("joined_queue", "on_joined_queue"),
    ("player_joined_queue", "on_player_joined_queue"),
    ("player_left_queue", "on_player_left_queue"),
    ("room_update", "on_update"),
    ("player_joined_room", "on_player_joined_room"),
    ("player_left_room", "on_player_left_room"),
)

# callback attribute -> name shown by the default listener
LISTENER_NAMES: dict[str, str] = {
    "on_update": "onUpdate",
    "on_queue_not_found": "onQueueNotFound",
    "on_queue_created": "onQueueCreated",
    "on_joined_queue": "onJoinedQueue",
    "on_player_joined_queue": "onPlayerJoinedQueue",
    "on_player_left_room": "onPlayerLeftRoom",
    "on_player_left_queue": "onPlayerLeftQueue",
}

logger = logging.getLogger("kitten_socket")


def _default_client_factory(url: str) -> StompClient:
    from .transport import StompPyClient

    return StompPyClient(url)


class KittenSocket:
    """Client façade for the game server's STOMP endpoints.

    Args:
        url: Server url. http(s):// is turned into ws(s)://.
        register_endpoint: STOMP endpoint name, e.g. "register".
        message_broker_prefix: Prefix of server->client topics.
        application_destination_prefix: Prefix of client->server paths.
        on_update ... on_player_left_queue: Per-topic callbacks, each taking
            the decoded message body. Missing ones log via the default listener.
        on_player_joined_room: Optional handler for player_joined_room. Falls
            back to on_player_left_room.
        on_connect: Called with no arguments once system topics are live.
        silent: Suppress the default listener's log output.
        client_factory: Builds the StompClient for the handshake url.
        auto_connect: Call connect() at the end of construction.

    Raises:
        ConfigurationError: On a malformed url or path segment. Raised before
            any connection attempt.
    """

    __slots__ = (
        "url",
        "register_endpoint",
        "message_broker_prefix",
        "application_destination_prefix",
        "silent",
        "on_connect",
        "on_update",
        "on_queue_not_found",
        "on_queue_created",
        "on_joined_queue",
        "on_player_joined_queue",
        "on_player_left_room",
        "on_player_left_queue",
        "on_player_joined_room",
        "client",
        "_client_factory",
        "_connected",
    )

    def __init__(
        self,
        url: str,
        register_endpoint: str,
        message_broker_prefix: str,
        application_destination_prefix: str,
        *,
        on_update: Listener | None = None,
        on_queue_not_found: Listener | None = None,
        on_queue_created: Listener | None = None,
        on_joined_queue: Listener | None = None,
        on_player_joined_queue: Listener | None = None,
        on_player_left_room: Listener | None = None,
        on_player_left_queue: Listener | None = None,
        on_player_joined_room: Listener | None = None,
        on_connect: Callable[[], Any] | None = None,
        silent: bool = False,
        client_factory: ClientFactory | None = None,
        auto_connect: bool = True,
    ) -> None:
        self.register_endpoint = validate_segment("register_endpoint", register_endpoint)
        self.message_broker_prefix = validate_segment(
            "message_broker_prefix", message_broker_prefix
        )
        self.application_destination_prefix = validate_segment(
            "application_destination_prefix", application_destination_prefix
        )
        self.url = coerce_url(url)
        self.silent = bool(silent)
        self.on_connect = on_connect

        self.on_update = on_update or self._default_listener("on_update")
        self.on_queue_not_found = on_queue_not_found or self._default_listener("on_queue_not_found")
        self.on_queue_created = on_queue_created or self._default_listener("on_queue_created")
        self.on_joined_queue = on_joined_queue or self._default_listener("on_joined_queue")
        self.on_player_joined_queue = on_player_joined_queue or self._default_listener(
            "on_player_joined_queue"
        )
        self.on_player_left_room = on_player_left_room or self._default_listener(
            "on_player_left_room"
        )
        self.on_player_left_queue = on_player_left_queue or self._default_listener(
            "on_player_left_queue"
        )
        self.on_player_joined_room = on_player_joined_room or self.on_player_left_room

        self.client: StompClient | None = None
        self._client_factory = client_factory or _default_client_factory
        self._connected = False

        if auto_connect:
            self.connect()

    @classmethod
    def from_config(cls, config: SocketConfig, **overrides: Any) -> KittenSocket:
        """Build a socket from a SocketConfig; keyword arguments win."""
        kwargs = config.socket_kwargs()
        kwargs.update(overrides)
        return cls(**kwargs)

    @property
    def endpoint_url(self) -> str:
        """Handshake url: ``<url>/<register_endpoint>``."""
        return join_endpoint(self.url, self.register_endpoint)

    @property
    def connected(self) -> bool:
        """True once the STOMP handshake has completed."""
        return self._connected

    def connect(self) -> KittenSocket:
        """Open the STOMP connection. System topics are subscribed on success."""
        if self.client is not None:
            raise RuntimeError("KittenSocket is already connected or connecting")
        self.client = self._client_factory(self.endpoint_url)
        self.client.set_debug(False)
        logger.debug(f"Connecting to {self.endpoint_url}")
        self.client.connect({}, self._on_connected)
        return self

    def close(self) -> None:
        """Disconnect the underlying client, if any."""
        if self.client is not None:
            self.client.disconnect()
        self._connected = False

    def subscribe(self, path: str, private: bool, callback: Listener) -> KittenSocket:
        """
        Subscribe to a broker topic.

        Args:
            path: Topic name under the message broker prefix.
            private: Subscribe to the per-connection (/user) destination.
            callback: Called with each decoded message body.

        Returns:
            self, for chaining

        Raises:
            CallbackError: If callback is not callable. Nothing is subscribed.
        """
        destination = subscription_destination(self.message_broker_prefix, path, private)
        if not callable(callback):
            raise CallbackError(destination)

        def handle(frame: Any) -> None:
            callback(decode_body(frame.body))

        self._require_client().subscribe(destination, handle)
        return self

    def send(self, path: str, data: Any = None) -> KittenSocket:
        """Send data (JSON-encoded, {} when None) to an application path."""
        destination = application_destination(self.application_destination_prefix, path)
        self._require_client().send(destination, {}, encode_body(data))
        return self

    def join_public_queue(self) -> KittenSocket:
        return self.send("join_public_queue")

    def send_update(self, data: Any) -> KittenSocket:
        return self.send("room_update", data)

    def join_private_room(self, queue_uuid: str) -> KittenSocket:
        return self.send("join_private_room", queue_uuid)

    def start_private_room(self) -> KittenSocket:
        return self.send("start_private_room")

    def _on_connected(self, frame: Any) -> None:
        for topic, attr in SYSTEM_TOPICS:
            self.subscribe(topic, True, getattr(self, attr))
        self._connected = True
        logger.info(f"Connected to {self.endpoint_url}")
        if self.on_connect is not None:
            self.on_connect()

    def _require_client(self) -> StompClient:
        if self.client is None:
            raise RuntimeError("KittenSocket is not connected; call connect() first")
        return self.client

    def _default_listener(self, attr: str) -> Listener:
        return partial(self._log_message, LISTENER_NAMES[attr])

    def _log_message(self, name: str, payload: Any) -> None:
        if not self.silent:
            logger.info(f"[{name}] {payload}")

    def __repr__(self) -> str:
        state = "connected" if self._connected else "unconnected"
        return f"KittenSocket(url={self.endpoint_url!r}, {state})"
