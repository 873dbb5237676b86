"""Statically declared event channels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

P = TypeVar("P")


@dataclass(frozen=True)
class Channel(Generic[P]):
    """Identifies one kind of event and the payload type it carries.

    Channels are declared once as module-level constants, e.g.
    ``STARTED = Channel("started", Track)``. ``payload_type=None`` marks a
    channel without payload; observers then receive ``None``.
    """

    name: str
    payload_type: type[P] | None = None

    def accepts(self, payload: Any) -> bool:
        if self.payload_type is None:
            return payload is None
        return isinstance(payload, self.payload_type)

    def __str__(self) -> str:
        return self.name
