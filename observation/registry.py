"""Lifecycle-bound observer registry with cancellation tokens.

Observers subscribe to statically declared :class:`Channel` objects and get a
:class:`CancellationToken` back. Owner-bound subscriptions hold only a
non-owning reference to their owner; once the owner is gone the entry is
pruned the next time its channel is dispatched. Dispatch is synchronous and
runs in registration order. The registry lock is reentrant and stays held
while each callback runs, so callbacks on the dispatching thread may
subscribe, cancel or dispatch again, while a cancel from another thread
waits until the running callback returns.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from threading import RLock
from typing import TYPE_CHECKING, Any

from observation.channels import Channel
from observation.errors import CallbackError, DispatchError, PayloadTypeError
from observation.owner_refs import OwnerRef, make_owner_ref
from observation.tokens import CancellationToken

if TYPE_CHECKING:
    from observation.policy_runtime import RegistrySettings

logger = logging.getLogger("po.registry")

CALLBACK_ERROR_POLICIES = ("log", "collect", "raise")


@dataclass(eq=False)
class ObserverEntry:
    """One registered interest on a channel."""

    id: int
    callback: Callable[..., Any]
    owner_ref: OwnerRef | None = None
    active: bool = True

    @property
    def owner_bound(self) -> bool:
        return self.owner_ref is not None


@dataclass
class DispatchReport:
    """Outcome of a single dispatch pass."""

    channel: Channel[Any]
    invoked: int = 0
    pruned: int = 0
    failures: list[CallbackError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class EventRegistry:
    """Per-channel ordered observer entries with lazy pruning of dead owners."""

    def __init__(self, callback_errors: str = "log") -> None:
        if callback_errors not in CALLBACK_ERROR_POLICIES:
            raise ValueError(
                f"callback_errors must be one of {', '.join(CALLBACK_ERROR_POLICIES)}."
            )
        self.callback_errors = callback_errors
        # Dicts keep registration order and give O(1) removal by entry id.
        self._entries: dict[Channel[Any], dict[int, ObserverEntry]] = {}
        self._ids = itertools.count(1)
        self._lock = RLock()

    @classmethod
    def from_settings(cls, settings: RegistrySettings) -> EventRegistry:
        """Build a registry from validated runtime settings."""
        return cls(callback_errors=settings.callback_errors)

    # ── Registration ─────────────────────────────────────────────────

    def subscribe(
        self,
        channel: Channel[Any],
        callback: Callable[..., Any],
        *,
        owner: Any | None = None,
        is_alive: Callable[[], bool] | None = None,
    ) -> CancellationToken:
        """Register ``callback`` on ``channel`` and return its token.

        Without ``owner`` the callback receives ``(payload)``. With ``owner``
        the registry keeps only a non-owning reference and the callback
        receives ``(owner, payload)``; the entry goes inert once the owner is
        destroyed. ``is_alive`` is an extra liveness hook; it is required for
        owners that cannot be weakly referenced, the only ones held strongly.
        """
        if not callable(callback):
            raise TypeError("callback must be callable")
        if owner is None and is_alive is not None:
            raise ValueError("is_alive requires an owner")
        owner_ref = make_owner_ref(owner, is_alive) if owner is not None else None

        with self._lock:
            entry = ObserverEntry(id=next(self._ids), callback=callback, owner_ref=owner_ref)
            self._entries.setdefault(channel, {})[entry.id] = entry
        logger.debug(
            "Subscribed %s to '%s' as entry %d%s",
            getattr(callback, "__qualname__", repr(callback)),
            channel.name,
            entry.id,
            " (owner-bound)" if owner_ref is not None else "",
        )
        return CancellationToken(self, channel, entry.id)

    def observe(self, channel: Channel[Any], method: Callable[..., Any]) -> CancellationToken:
        """Subscribe a bound method without keeping its instance alive.

        ``obj.on_event`` becomes an owner-bound entry on ``obj`` whose
        callback is the plain function, so it is invoked as
        ``on_event(obj, payload)``.
        """
        owner = getattr(method, "__self__", None)
        func = getattr(method, "__func__", None)
        if owner is None or func is None:
            raise TypeError("observe() expects a bound method")
        return self.subscribe(channel, func, owner=owner)

    def cancel(self, token: CancellationToken) -> None:
        """Remove the entry behind ``token``; repeated calls are no-ops."""
        token.cancel()

    def unsubscribe_all(self, owner: Any) -> int:
        """Eagerly remove every entry bound to ``owner`` on every channel."""
        removed = 0
        with self._lock:
            for channel in list(self._entries):
                entries = self._entries[channel]
                for entry_id, entry in list(entries.items()):
                    if entry.owner_ref is not None and entry.owner_ref.refers_to(owner):
                        entry.active = False
                        del entries[entry_id]
                        removed += 1
                if not entries:
                    del self._entries[channel]
        if removed:
            logger.debug("Removed %d entries for owner %r", removed, owner)
        return removed

    def clear(self) -> None:
        """Remove all entries for all channels."""
        with self._lock:
            for entries in self._entries.values():
                for entry in entries.values():
                    entry.active = False
            self._entries.clear()

    # ── Queries ──────────────────────────────────────────────────────

    def subscriber_count(self, channel: Channel[Any]) -> int:
        """Number of stored entries, including dead owners not yet pruned."""
        with self._lock:
            return len(self._entries.get(channel, {}))

    def channels(self) -> list[Channel[Any]]:
        with self._lock:
            return list(self._entries)

    def is_registered(self, channel: Channel[Any], entry_id: int) -> bool:
        with self._lock:
            return entry_id in self._entries.get(channel, {})

    def __len__(self) -> int:
        with self._lock:
            return sum(len(entries) for entries in self._entries.values())

    # ── Dispatch ─────────────────────────────────────────────────────

    def dispatch(self, channel: Channel[Any], payload: Any = None) -> DispatchReport:
        """Deliver ``payload`` to every live entry on ``channel``.

        Entries are visited in registration order from a snapshot taken at
        the start of the pass: entries added during the pass wait for the
        next dispatch, entries removed before they are reached are skipped.
        A failing callback never stops delivery to the remaining entries.
        """
        if not channel.accepts(payload):
            raise PayloadTypeError(channel, payload)

        with self._lock:
            snapshot = list(self._entries.get(channel, {}).values())
        report = DispatchReport(channel=channel)

        for entry in snapshot:
            # Held across the call: another thread's cancel() returns only
            # once the entry can no longer run. Same-thread re-entry is fine.
            with self._lock:
                if not entry.active:
                    continue
                try:
                    if entry.owner_ref is None:
                        args: tuple[Any, ...] = (payload,)
                    else:
                        owner = entry.owner_ref.resolve()
                        if owner is None:
                            if self._prune(channel, entry):
                                report.pruned += 1
                            continue
                        args = (owner, payload)
                    report.invoked += 1
                    entry.callback(*args)
                except Exception as exc:
                    report.failures.append(self._callback_failed(channel, entry, exc))

        logger.debug(
            "Dispatched '%s' to %d observers (%d pruned, %d failed)",
            channel.name,
            report.invoked,
            report.pruned,
            len(report.failures),
        )
        if report.failures and self.callback_errors == "raise":
            raise DispatchError(channel, report.failures)
        return report

    def _remove_entry(self, channel: Channel[Any], entry_id: int) -> bool:
        with self._lock:
            entries = self._entries.get(channel)
            if not entries or entry_id not in entries:
                return False
            entries.pop(entry_id).active = False
            if not entries:
                del self._entries[channel]
        logger.debug("Cancelled entry %d on '%s'", entry_id, channel.name)
        return True

    def _prune(self, channel: Channel[Any], entry: ObserverEntry) -> bool:
        with self._lock:
            if not entry.active:
                return False
            entry.active = False
            entries = self._entries.get(channel, {})
            entries.pop(entry.id, None)
            if not entries:
                self._entries.pop(channel, None)
        logger.debug("Pruned entry %d on '%s': owner no longer alive", entry.id, channel.name)
        return True

    def _callback_failed(
        self, channel: Channel[Any], entry: ObserverEntry, exc: Exception
    ) -> CallbackError:
        error = CallbackError(channel, entry.id, exc)
        if self.callback_errors == "log":
            logger.error(
                "Unhandled exception in observer %d for '%s'",
                entry.id,
                channel.name,
                exc_info=exc,
            )
        else:
            logger.debug("Observer %d for '%s' failed: %r", entry.id, channel.name, exc)
        return error
