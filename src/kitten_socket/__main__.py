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
kitten-socket CLI entry point.

Usage:
    kitten-socket --url http://localhost:8080 --register-endpoint register \\
        --broker-prefix game_get --app-prefix game_post --join-public-queue
    kitten-socket --config kitten-socket.toml --subscribe broadcasted_message

Connects, installs the system subscriptions, optionally joins the public
queue and subscribes to extra public topics, then logs every event until
interrupted.
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from typing import Any, Callable

from .client import KittenSocket
from .config import ConfigError, find_config_file
from .exceptions import ConfigurationError
from .socket_config import SocketConfig

logger = logging.getLogger("kitten_socket")


def build_parser() -> argparse.ArgumentParser:
    from . import __version__

    parser = argparse.ArgumentParser(
        prog="kitten-socket",
        description="Connect to a game server and log matchmaking/room events",
    )
    parser.add_argument("--config", help="TOML config file (default: search standard locations)")
    parser.add_argument("--url", help="Server url (http(s):// or ws(s)://)")
    parser.add_argument("--register-endpoint", help="STOMP endpoint name")
    parser.add_argument("--broker-prefix", help="Message broker prefix")
    parser.add_argument("--app-prefix", help="Application destination prefix")
    parser.add_argument(
        "--join-public-queue", action="store_true", help="Join the public queue once connected"
    )
    parser.add_argument(
        "--subscribe",
        action="append",
        default=[],
        metavar="TOPIC",
        help="Extra public topic to log (repeatable)",
    )
    parser.add_argument("--silent", action="store_true", default=None, help="Hide system events")
    parser.add_argument("--version", "-v", action="version", version=f"kitten-socket {__version__}")
    return parser


def build_socket(
    args: argparse.Namespace,
    client_factory: Callable[[str], Any] | None = None,
) -> KittenSocket:
    """Build (and connect) a KittenSocket from parsed arguments."""
    config_file = args.config or find_config_file()
    config = SocketConfig(
        config_file=config_file,
        url=args.url,
        register_endpoint=args.register_endpoint,
        message_broker_prefix=args.broker_prefix,
        application_destination_prefix=args.app_prefix,
        silent=args.silent,
    )

    socket: KittenSocket

    def on_connect() -> None:
        if args.join_public_queue:
            socket.join_public_queue()
        for topic in args.subscribe:
            socket.subscribe(topic, False, _topic_logger(topic))

    socket = KittenSocket.from_config(
        config,
        on_connect=on_connect,
        client_factory=client_factory,
        auto_connect=False,
    )
    return socket.connect()


def _topic_logger(topic: str) -> Callable[[Any], None]:
    def log(payload: Any) -> None:
        logger.info(f"[{topic}] {payload}")

    return log


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(message)s")

    try:
        socket = build_socket(args)
    except (ConfigError, ConfigurationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"kitten-socket connecting to {socket.endpoint_url}", flush=True)
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        print("\nShutdown.")
    finally:
        socket.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
