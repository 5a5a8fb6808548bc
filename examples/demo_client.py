"""Demo client: joins the public queue and chats on a broadcast topic.

Run against a local game server:

    python examples/demo_client.py
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from kitten_socket import KittenSocket

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(message)s")
logger = logging.getLogger("demo")

update_counter = 0


def on_update(data: Any) -> None:
    global update_counter
    update_counter += 1
    # room updates arrive many times per second
    if update_counter % 100 == 1:
        logger.info(f"Update number {update_counter}: {data}")


def on_broadcasted_message(message: Any) -> None:
    logger.info(f"Broadcasted message received: {message}")


def on_connect(socket: KittenSocket) -> None:
    # Subscribe and send only once connected; most methods return the socket
    (
        socket.join_public_queue()
        .subscribe("broadcasted_message", False, on_broadcasted_message)
        .subscribe("private_message", True, lambda message: None)
    )
    socket.send(
        "broadcast_message",
        "This is message sent from client to server, then from server to all clients",
    )


def main() -> None:
    socket = KittenSocket(
        "http://localhost:8080",
        "custom_register",
        "custom_game_get",
        "custom_game_post",
        on_update=on_update,
        on_connect=lambda: on_connect(socket),
        auto_connect=False,
    )
    socket.connect()
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        socket.close()


if __name__ == "__main__":
    main()
