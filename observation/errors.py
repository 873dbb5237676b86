"""Error taxonomy for the observation core."""

from __future__ import annotations

from typing import Any


class ObservationError(Exception):
    """Base class for observation errors."""


class PayloadTypeError(ObservationError, TypeError):
    """Raised when a dispatched payload does not match its channel."""

    def __init__(self, channel: Any, payload: Any) -> None:
        expected = getattr(channel.payload_type, "__name__", str(channel.payload_type))
        super().__init__(
            f"Channel '{channel.name}' expects {expected}, got {type(payload).__name__}."
        )
        self.channel = channel
        self.payload = payload


class CallbackError(ObservationError):
    """One observer callback that raised during dispatch."""

    def __init__(self, channel: Any, entry_id: int, exc: BaseException) -> None:
        super().__init__(f"Observer {entry_id} on '{channel.name}' failed: {exc!r}")
        self.channel = channel
        self.entry_id = entry_id
        self.__cause__ = exc


class DispatchError(ObservationError):
    """Raised after a full dispatch pass in which callbacks failed."""

    def __init__(self, channel: Any, failures: list[CallbackError]) -> None:
        super().__init__(f"{len(failures)} observer(s) failed on '{channel.name}'.")
        self.channel = channel
        self.failures = failures
