# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Process-wide KittenSocket handle.

Game clients usually keep one connection for the whole process. This module
holds it behind an explicit lifecycle instead of a bare module global::

    from kitten_socket import instance

    instance.init(url="http://localhost:8080", register_endpoint="register", ...)
    instance.get_instance().join_public_queue()
    instance.reset()   # disconnects and forgets the socket

Code that needs several connections, or tests, should build KittenSocket
objects directly and pass them around.
"""

from __future__ import annotations

import logging
from typing import Any

from .client import KittenSocket

__all__ = ["init", "get_instance", "is_initialized", "reset"]

logger = logging.getLogger("kitten_socket")

_instance: KittenSocket | None = None


def init(**kwargs: Any) -> KittenSocket:
    """Create the process-wide socket. Arguments go to KittenSocket."""
    global _instance
    if _instance is not None:
        raise RuntimeError("KittenSocket instance already initialized; call reset() first")
    _instance = KittenSocket(**kwargs)
    return _instance


def get_instance() -> KittenSocket:
    """Return the process-wide socket."""
    if _instance is None:
        raise RuntimeError("KittenSocket instance not initialized; call init() first")
    return _instance


def is_initialized() -> bool:
    return _instance is not None


def reset() -> None:
    """Disconnect and drop the process-wide socket, if any."""
    global _instance
    socket, _instance = _instance, None
    if socket is not None:
        logger.debug(f"Resetting {socket!r}")
        socket.close()
