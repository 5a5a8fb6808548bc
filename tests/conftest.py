# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Shared fixtures: a recording StompClient double."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Callable

import pytest


class FakeStompClient:
    """In-memory StompClient that records every call.

    ``connect()`` stores the success callback; call ``accept()`` to complete
    the handshake. ``deliver()`` pushes a body to every handler subscribed to
    a destination, and ``echo=True`` loops sends back to subscribers of the
    same destination name.
    """

    def __init__(self, url: str) -> None:
        self.url = url
        self.debug_enabled: bool | None = None
        self.connect_headers: dict[str, str] | None = None
        self.on_success: Callable[[Any], None] | None = None
        self.subscriptions: list[tuple[str, Callable[[Any], None]]] = []
        self.sent: list[tuple[str, dict[str, str], str]] = []
        self.events: list[str] = []
        self.disconnected = False

    def connect(self, headers: dict[str, str], on_success: Callable[[Any], None]) -> None:
        self.connect_headers = headers
        self.on_success = on_success
        self.events.append("connect")

    def accept(self) -> None:
        assert self.on_success is not None
        self.on_success(SimpleNamespace(command="CONNECTED", headers={}, body=""))

    def subscribe(self, destination: str, handler: Callable[[Any], None]) -> str:
        self.subscriptions.append((destination, handler))
        self.events.append(f"subscribe {destination}")
        return f"sub-{len(self.subscriptions) - 1}"

    def send(self, destination: str, headers: dict[str, str], body: str) -> None:
        self.sent.append((destination, headers, body))
        self.events.append(f"send {destination}")

    def set_debug(self, enabled: bool) -> None:
        self.debug_enabled = enabled

    def disconnect(self) -> None:
        self.disconnected = True

    @property
    def destinations(self) -> list[str]:
        return [destination for destination, _ in self.subscriptions]

    def deliver(self, destination: str, body: str | bytes) -> None:
        frame = SimpleNamespace(headers={"destination": destination}, body=body)
        for subscribed, handler in self.subscriptions:
            if subscribed == destination:
                handler(frame)


class ClientRecorder:
    """client_factory that remembers the clients it built."""

    def __init__(self) -> None:
        self.clients: list[FakeStompClient] = []

    def __call__(self, url: str) -> FakeStompClient:
        client = FakeStompClient(url)
        self.clients.append(client)
        return client

    @property
    def last(self) -> FakeStompClient:
        return self.clients[-1]


@pytest.fixture
def recorder() -> ClientRecorder:
    return ClientRecorder()


@pytest.fixture
def socket_kwargs(recorder: ClientRecorder) -> dict[str, Any]:
    return {
        "url": "http://localhost:8080",
        "register_endpoint": "register",
        "message_broker_prefix": "game_get",
        "application_destination_prefix": "game_post",
        "client_factory": recorder,
    }
