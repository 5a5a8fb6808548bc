# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Url coercion, path-segment validation and STOMP destination builders.

Path segments (register endpoint, broker prefix, application prefix) follow
one convention: they are bare names, never starting with ``/``. Every builder
joins them with a single ``/``::

    endpoint:      ws://localhost:8080/register
    subscription:  /user/game_get/room_update   (private)
                   /game_get/broadcast          (public)
    application:   /game_post/join_public_queue
"""

from __future__ import annotations

import re

from .exceptions import ConfigurationError

__all__ = [
    "USER_PREFIX",
    "coerce_url",
    "validate_segment",
    "join_endpoint",
    "subscription_destination",
    "application_destination",
]

USER_PREFIX = "/user"

_HTTP_RE = re.compile(r"^https?://")
_WS_RE = re.compile(r"^wss?://")


def coerce_url(url: object) -> str:
    """
    Return a ws:// or wss:// url for the given server url.

    ``http://`` becomes ``ws://`` and ``https://`` becomes ``wss://``; host,
    port and path are kept. A trailing slash is dropped.

    Raises:
        ConfigurationError: If url is not a string or has any other scheme.
    """
    if not isinstance(url, str):
        raise ConfigurationError("url is not a string", field="url", value=url)

    if _HTTP_RE.match(url):
        url = "ws" + url[4:]
    elif not _WS_RE.match(url):
        raise ConfigurationError(
            'Url must start with "ws://" (or "wss://" for secure connection).',
            field="url",
            value=url,
        )
    return url.rstrip("/")


def validate_segment(name: str, value: object) -> str:
    """
    Check a path segment and return it unchanged.

    Raises:
        ConfigurationError: If value is not a non-empty string or starts with "/".
    """
    if not isinstance(value, str):
        raise ConfigurationError(f"{name} is not a string", field=name, value=value)
    if not value:
        raise ConfigurationError(f"{name} can't be empty", field=name, value=value)
    if value.startswith("/"):
        raise ConfigurationError(f'{name} can\'t start with "/"', field=name, value=value)
    return value


def join_endpoint(url: str, register_endpoint: str) -> str:
    """Url the STOMP handshake is opened against."""
    return f"{url}/{register_endpoint}"


def subscription_destination(broker_prefix: str, path: str, private: bool) -> str:
    """Destination for a server->client topic, under /user when private."""
    user = USER_PREFIX if private else ""
    return f"{user}/{broker_prefix}/{path}"


def application_destination(app_prefix: str, path: str) -> str:
    """Destination for a client->server message."""
    return f"/{app_prefix}/{path}"
