"""Non-owning owner references with a liveness query."""

from __future__ import annotations

import weakref
from collections.abc import Callable
from typing import Any


class OwnerRef:
    """Base interface: ``resolve()`` returns the owner or ``None`` once it is gone."""

    def resolve(self) -> Any | None:
        raise NotImplementedError

    def refers_to(self, owner: Any) -> bool:
        resolved = self.resolve()
        return resolved is not None and resolved is owner


class WeakOwnerRef(OwnerRef):
    """Owner reference backed by :func:`weakref.ref`.

    An optional ``is_alive`` hook can retire the owner before it is
    collected; once it returns ``False`` the reference never resolves again.
    """

    def __init__(self, owner: Any, is_alive: Callable[[], bool] | None = None) -> None:
        self._ref: weakref.ref[Any] | None = weakref.ref(owner)
        self._is_alive = is_alive

    def resolve(self) -> Any | None:
        if self._ref is None:
            return None
        owner = self._ref()
        if owner is None:
            return None
        if self._is_alive is not None and not self._is_alive():
            self._ref = None
            return None
        return owner


class PredicateOwnerRef(OwnerRef):
    """Owner reference for objects that cannot be weakly referenced.

    The host supplies ``is_alive``; once it returns ``False`` the reference
    drops the owner and never resolves again.
    """

    def __init__(self, owner: Any, is_alive: Callable[[], bool]) -> None:
        self._owner: Any | None = owner
        self._is_alive = is_alive

    def resolve(self) -> Any | None:
        if self._owner is None:
            return None
        if not self._is_alive():
            self._owner = None
            return None
        return self._owner


def make_owner_ref(owner: Any, is_alive: Callable[[], bool] | None = None) -> OwnerRef:
    """Build the appropriate reference for ``owner``.

    Weak references are always preferred; the strong ``PredicateOwnerRef`` is
    only used for owners that cannot be weakly referenced. Raises
    ``TypeError`` for such owners when no ``is_alive`` hook was given.
    """
    try:
        return WeakOwnerRef(owner, is_alive)
    except TypeError as exc:
        if is_alive is not None:
            return PredicateOwnerRef(owner, is_alive)
        raise TypeError(
            f"{type(owner).__name__} objects cannot be weakly referenced; pass is_alive=."
        ) from exc
