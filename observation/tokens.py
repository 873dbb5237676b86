"""Cancellation tokens returned by ``EventRegistry.subscribe``."""

from __future__ import annotations

import weakref
from typing import TYPE_CHECKING, Any

from observation.channels import Channel

if TYPE_CHECKING:
    from observation.registry import EventRegistry


class CancellationToken:
    """Opaque handle that removes one subscription, at most once.

    Holds only a weak back-reference to its registry, the channel and the
    entry id. Cancelling twice, or after the entry was pruned, does nothing.
    """

    __slots__ = ("_registry_ref", "_channel", "_entry_id", "_cancelled", "__weakref__")

    def __init__(self, registry: EventRegistry, channel: Channel[Any], entry_id: int) -> None:
        self._registry_ref = weakref.ref(registry)
        self._channel = channel
        self._entry_id = entry_id
        self._cancelled = False

    @property
    def channel(self) -> Channel[Any]:
        return self._channel

    @property
    def entry_id(self) -> int:
        return self._entry_id

    @property
    def cancelled(self) -> bool:
        """True once ``cancel`` was called on this token."""
        return self._cancelled

    @property
    def active(self) -> bool:
        """True while the subscription is still registered."""
        if self._cancelled:
            return False
        registry = self._registry_ref()
        if registry is None:
            return False
        return registry.is_registered(self._channel, self._entry_id)

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        registry = self._registry_ref()
        if registry is not None:
            registry._remove_entry(self._channel, self._entry_id)

    def __enter__(self) -> CancellationToken:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "pending"
        return f"CancellationToken(channel={self._channel.name!r}, id={self._entry_id}, {state})"
