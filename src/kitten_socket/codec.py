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

"""
Message body encoding for STOMP frames.

Bodies travel as UTF-8 JSON text. The game server emits either JSON
documents or opaque strings on the same topics, so decoding is permissive:
a body that does not parse as JSON is handed back as the raw text.

Format:
    send("room_update", {"x": 1})  ->  body '{"x":1}'
    send("join_public_queue")      ->  body '{}'
    body '{"a":1}'                 ->  {"a": 1}
    body 'queue full'              ->  "queue full"

This module provides:
- encode_body(): Serialize an outbound payload
- decode_body(): Parse an inbound body, falling back to raw text
"""

from __future__ import annotations

from typing import Any

import orjson

__all__ = ["encode_body", "decode_body"]


def encode_body(data: Any = None) -> str:
    """
    Serialize a payload to JSON text.

    Args:
        data: JSON-serializable payload. None is sent as an empty object.

    Returns:
        JSON text

    Raises:
        TypeError: If data is not JSON-serializable
    """
    if data is None:
        data = {}
    return orjson.dumps(data).decode("utf-8")


def decode_body(body: str | bytes | None) -> Any:
    """
    Parse a message body.

    Args:
        body: Raw frame body (str or UTF-8 bytes)

    Returns:
        The decoded JSON value, or the body text itself when it is not JSON.
        An empty or missing body yields "".
    """
    if body is None:
        return ""
    try:
        return orjson.loads(body)
    except orjson.JSONDecodeError:
        if isinstance(body, bytes):
            return body.decode("utf-8", errors="replace")
        return body
