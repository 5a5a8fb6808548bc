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
Exception classes raised by the kitten-socket façade.

Module Structure
----------------
Two exception classes, each inheriting from the builtin that best describes
the failure so callers can catch either the specific or the generic type:

1. ConfigurationError (ValueError) - malformed url or path segment
2. CallbackError (TypeError) - non-callable handler given to subscribe()

Design Decisions
----------------
- No common base: catch both with ``except (ConfigurationError, CallbackError)``.
- Messages are plain descriptive strings prefixed with ``KittenSocket.``
- Transport failures are never wrapped; whatever the STOMP library raises
  reaches the caller untouched.

ConfigurationError
------------------
Raised while building a KittenSocket. No partially initialized object is
ever returned.

Attributes:
    field (str | None): Name of the offending configuration field.
    value (Any): The rejected value.

Example:
    >>> raise ConfigurationError("register_endpoint is not a string", field="register_endpoint")

CallbackError
-------------
Raised by ``KittenSocket.subscribe()`` when the handler is not callable.
Nothing is registered on the transport when this is raised.

Attributes:
    destination (str): Fully-qualified destination of the failed subscription.

Example:
    >>> raise CallbackError("/user/game/room_update")
"""

from __future__ import annotations

from typing import Any

__all__ = ["ConfigurationError", "CallbackError"]


class ConfigurationError(ValueError):
    """
    Invalid connection configuration.

    Attributes:
        field: Configuration field that failed validation (if known)
        value: The rejected value
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        self.field = field
        self.value = value
        super().__init__(f"KittenSocket. {message}")

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return f"ConfigurationError(field={self.field!r}, message={str(self)!r})"


class CallbackError(TypeError):
    """
    Subscription callback is not callable.

    Attributes:
        destination: Destination the subscription was requested for
    """

    def __init__(self, destination: str) -> None:
        self.destination = destination
        super().__init__(f"Callback for subscription {destination} is not a function.")

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return f"CallbackError(destination={self.destination!r})"
