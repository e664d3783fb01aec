"""Observable ordered map with batched change notification.

:class:`BMap` wraps an insertion-ordered ``dict`` and notifies listeners
when entries are added, updated or deleted. Batch operations
(:meth:`BMap.b_set`, :meth:`BMap.b_delete`, :meth:`BMap.clear`) emit at
most one notification per event kind, and every notification carries a
freshly built ``BMap`` holding exactly the affected entries.

Example:
    >>> people = BMap([("id1", {"name": "Acme"})])
    >>> added = []
    >>> people.on("add", added.append).b_set([("id2", "Acme #2"), ("id3", "Acme #3")])
    BMap({'id1': {'name': 'Acme'}, 'id2': 'Acme #2', 'id3': 'Acme #3'})
    >>> added[0].keys()
    ['id2', 'id3']
"""

import logging
from collections.abc import Mapping
from functools import cmp_to_key
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    NamedTuple,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

from bmap.config import BMapConfig, ReentrancyPolicy
from bmap.exceptions import IllegalArgumentException, IllegalStateException
from bmap.listener import BMapEventType, BMapListener, ListenerRegistry
from bmap.logging import get_logger

_logger = get_logger("map")

K = TypeVar("K")
V = TypeVar("V")
K2 = TypeVar("K2")
V2 = TypeVar("V2")


class Entry(NamedTuple):
    """A key/value pair. Unpacks and compares like a plain 2-tuple."""

    key: Any
    value: Any


EntrySource = Union[Mapping, Iterable[Tuple[Any, Any]]]


def _iter_pairs(source: Optional[EntrySource]) -> Iterator[Tuple[Any, Any]]:
    if source is None:
        return iter(())
    if isinstance(source, Mapping):
        return iter(list(source.items()))
    return iter(source)


class BMap(Generic[K, V]):
    """Observable key-value container.

    Entries keep insertion order. Every public mutator funnels through
    :meth:`_set` and :meth:`_delete`, which change the store without
    notifying; the public method then dispatches the grouped notification.

    Seeding through the constructor, :meth:`sort` and the result assembly
    of :meth:`merge` never emit events.

    Listeners run synchronously, in registration order, before the
    triggering method returns. Whether a listener may mutate the map that
    is notifying it is governed by :attr:`BMapConfig.reentrancy`.

    Args:
        entries: Optional ordered pairs or mapping to seed the map with.
        config: Optional configuration, shared with derived containers.

    Example:
        >>> bmap = BMap([(1, 2), (3, 4)])
        >>> bmap.map_entries(lambda k, v, source: (k * 10, {"v": v})).to_data_array()
        [Entry(key=10, value={'v': 2}), Entry(key=30, value={'v': 4})]
    """

    def __init__(
        self,
        entries: Optional[EntrySource] = None,
        config: Optional[BMapConfig] = None,
    ):
        self._config = config or BMapConfig()
        self._store: Dict[K, V] = {}
        self._listeners = ListenerRegistry()
        self._dispatch_depth = 0
        for key, value in _iter_pairs(entries):
            self._set(key, value)

    @property
    def config(self) -> BMapConfig:
        return self._config

    @property
    def size(self) -> int:
        """Get the number of entries."""
        return len(self._store)

    def on(self, event: Union[BMapEventType, str], listener: BMapListener) -> "BMap[K, V]":
        """Register a listener for ``add``, ``update`` or ``delete``.

        Args:
            event: The event kind, as :class:`BMapEventType` or its name.
            listener: Callable receiving a ``BMap`` of the affected entries.

        Returns:
            This map, for chaining.

        Raises:
            IllegalArgumentException: If the event kind is unknown or the
                listener is not callable.
        """
        self._listeners.add(event, listener)
        return self

    def off(self, event: Union[BMapEventType, str], listener: BMapListener) -> bool:
        """Remove a listener registered with :meth:`on`.

        Returns:
            True if the listener was registered and is now removed.
        """
        return self._listeners.remove(event, listener)

    def has_listeners(self, event: Optional[Union[BMapEventType, str]] = None) -> bool:
        return self._listeners.has_listeners(event)

    def _notify(self, event_type: BMapEventType, entries: List[Tuple[K, V]]) -> None:
        if not self._listeners.has_listeners(event_type):
            return
        payload = self._derive(entries)
        if self._config.log_dispatch and _logger.isEnabledFor(logging.DEBUG):
            _logger.debug(
                "Dispatching %s event with %d entries to %d listener(s)",
                event_type.value,
                len(entries),
                len(self._listeners.listeners(event_type)),
            )
        self._dispatch_depth += 1
        try:
            self._listeners.fire(event_type, payload)
        finally:
            self._dispatch_depth -= 1

    def _check_mutable(self) -> None:
        if self._dispatch_depth and self._config.reentrancy is ReentrancyPolicy.FORBID:
            raise IllegalStateException(
                "Cannot mutate a map from inside one of its own listeners"
            )

    def _set(self, key: K, value: V) -> bool:
        """Write a value and return whether the key is new. Never notifies."""
        is_new_key = key not in self._store
        self._store[key] = value
        return is_new_key

    def _delete(self, key: K) -> Optional[Entry]:
        """Remove a key and return the removed entry, if any. Never notifies."""
        if key in self._store:
            return Entry(key, self._store.pop(key))
        return None

    def _clear_silently(self) -> None:
        self._store.clear()

    def _repopulate(self, entries: Iterable[Tuple[K, V]]) -> None:
        self._clear_silently()
        for key, value in entries:
            self._store[key] = value

    def _derive(self, entries: Optional[EntrySource] = None) -> "BMap":
        return BMap(entries, config=self._config)

    def _entries(self) -> List[Entry]:
        return [Entry(key, value) for key, value in self._store.items()]

    def set(self, key: K, value: V) -> "BMap[K, V]":
        """Set a value, firing ``add`` for a new key or ``update`` otherwise.

        Returns:
            This map, for chaining.
        """
        self._check_mutable()
        is_new_key = self._set(key, value)
        event_type = BMapEventType.ADD if is_new_key else BMapEventType.UPDATE
        self._notify(event_type, [(key, value)])
        return self

    def b_set(self, entries: EntrySource) -> "BMap[K, V]":
        """Set many entries, firing at most one ``add`` and one ``update``.

        Pairs are applied in order, so a later duplicate key overrides an
        earlier one. Each notification carries its group in input order.
        Every pair is unpacked before the first write, so a malformed pair
        leaves the map untouched.

        Args:
            entries: Ordered pairs or a mapping.

        Returns:
            This map, for chaining.
        """
        self._check_mutable()
        new_entries: List[Tuple[K, V]] = []
        updated_entries: List[Tuple[K, V]] = []
        pairs = [(key, value) for key, value in _iter_pairs(entries)]
        for key, value in pairs:
            if self._set(key, value):
                new_entries.append((key, value))
            else:
                updated_entries.append((key, value))

        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug(
                "Batch set: %d added, %d updated", len(new_entries), len(updated_entries)
            )
        if new_entries:
            self._notify(BMapEventType.ADD, new_entries)
        if updated_entries:
            self._notify(BMapEventType.UPDATE, updated_entries)
        return self

    def delete(self, key: K) -> bool:
        """Delete a key, firing ``delete`` if it was present.

        Returns:
            True if the key existed and was removed, False otherwise.
        """
        self._check_mutable()
        entry = self._delete(key)
        if entry is None:
            return False
        self._notify(BMapEventType.DELETE, [entry])
        return True

    def b_delete(self, keys: Iterable[K]) -> List[bool]:
        """Delete many keys, firing at most one ``delete`` event.

        Absent keys are skipped and excluded from the notification.

        Returns:
            One boolean per input key, in input order, telling whether
            that key was removed.
        """
        self._check_mutable()
        deleted_entries: List[Entry] = []
        result: List[bool] = []
        for key in keys:
            entry = self._delete(key)
            if entry is not None:
                deleted_entries.append(entry)
            result.append(entry is not None)

        if deleted_entries:
            self._notify(BMapEventType.DELETE, deleted_entries)
        return result

    def clear(self) -> None:
        """Remove every entry, firing one ``delete`` with all of them."""
        self._check_mutable()
        entries = self._entries()
        self._clear_silently()
        if entries:
            self._notify(BMapEventType.DELETE, entries)

    def sort(
        self,
        compare: Optional[Callable[[Entry, Entry], int]] = None,
        *,
        key: Optional[Callable[[Entry], Any]] = None,
        reverse: bool = False,
    ) -> "BMap[K, V]":
        """Reorder the entries in place without firing any event.

        The sort is stable: entries that compare equal keep their relative
        order. With neither ``compare`` nor ``key`` entries are ordered by
        key.

        Args:
            compare: Comparator over two :class:`Entry` objects returning a
                negative, zero or positive number.
            key: Sort key function over an :class:`Entry`.
            reverse: Sort in descending order.

        Returns:
            This map.

        Raises:
            IllegalArgumentException: If both ``compare`` and ``key`` are given.
        """
        if compare is not None and key is not None:
            raise IllegalArgumentException("Pass either compare or key to sort(), not both")
        self._check_mutable()

        if compare is not None:
            sort_key = cmp_to_key(compare)
        elif key is not None:
            sort_key = key
        else:
            sort_key = _entry_key

        ordered = sorted(self._entries(), key=sort_key, reverse=reverse)
        self._repopulate(ordered)
        _logger.debug("Sorted %d entries", len(ordered))
        return self

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        return self._store.get(key, default)

    def has(self, key: K) -> bool:
        return key in self._store

    def b_get(self, keys: Iterable[K]) -> "BMap[K, V]":
        """Get the entries for the given keys that exist.

        Args:
            keys: Keys to look up. Absent keys are skipped.

        Returns:
            A new map holding the found entries, in the order of ``keys``.
        """
        result = self._derive()
        for key in keys:
            if key in self._store:
                result._set(key, self._store[key])
        return result

    def keys(self) -> List[K]:
        return list(self._store.keys())

    def values(self) -> List[V]:
        return list(self._store.values())

    def items(self) -> List[Entry]:
        return self._entries()

    entries = items

    def copy(self) -> "BMap[K, V]":
        """Return an independent copy with no listeners."""
        return self._derive(self._entries())

    def to_data_array(self) -> List[Entry]:
        """Render the entries, in iteration order, for serialization."""
        return self._entries()

    def filter(self, predicate: Callable[[K, V], bool]) -> "BMap[K, V]":
        """Return a new map with the entries for which ``predicate`` holds."""
        return self._derive(
            [(key, value) for key, value in self._entries() if predicate(key, value)]
        )

    def find(self, predicate: Callable[[K, V], bool]) -> Optional[Entry]:
        """Return the first entry matching ``predicate``, or None."""
        for entry in self._entries():
            if predicate(entry.key, entry.value):
                return entry
        return None

    def some(self, predicate: Callable[[K, V], bool]) -> bool:
        return self.find(predicate) is not None

    def every(self, predicate: Callable[[K, V], bool]) -> bool:
        for key, value in self._entries():
            if not predicate(key, value):
                return False
        return True

    def map_entries(
        self, transform: Callable[[K, V, "BMap[K, V]"], Tuple[K2, V2]]
    ) -> "BMap[K2, V2]":
        """Build a new map from transformed entries.

        ``transform`` is called as ``transform(key, value, source)`` in
        iteration order. Duplicate output keys keep the last value.
        """
        result = self._derive()
        for key, value in self._entries():
            new_key, new_value = transform(key, value, self)
            result._set(new_key, new_value)
        return result

    def map_values(self, transform: Callable[[K, V, "BMap[K, V]"], V2]) -> "BMap[K, V2]":
        return self.map_entries(lambda key, value, source: (key, transform(key, value, source)))

    def map_keys(self, transform: Callable[[K, V, "BMap[K, V]"], K2]) -> "BMap[K2, V]":
        return self.map_entries(lambda key, value, source: (transform(key, value, source), value))

    def merge(
        self,
        other: Mapping,
        resolve: Callable[[K, V, V], V],
    ) -> "BMap[K, V]":
        """Merge another mapping into a copy of this map.

        Keys only present in ``other`` take the incoming value without
        consulting ``resolve``. Keys present in both get
        ``resolve(key, existing, incoming)``. The result is assembled
        before anyone can subscribe to it, so a merge never notifies.

        Args:
            other: The incoming mapping (a ``dict`` or another ``BMap``).
            resolve: Conflict resolver.

        Returns:
            A new map; neither this map nor ``other`` is modified.
        """
        merged = self.copy()
        conflicts = 0
        for key, incoming in _iter_pairs(other):
            if key in merged._store:
                merged._set(key, resolve(key, merged._store[key], incoming))
                conflicts += 1
            else:
                merged._set(key, incoming)
        _logger.debug("Merged %d entries, %d conflict(s) resolved", len(merged), conflicts)
        return merged

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __iter__(self) -> Iterator[K]:
        return iter(list(self._store))

    def __getitem__(self, key: K) -> V:
        return self._store[key]

    def __setitem__(self, key: K, value: V) -> None:
        self.set(key, value)

    def __delitem__(self, key: K) -> None:
        if not self.delete(key):
            raise KeyError(key)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BMap):
            return list(self._store.items()) == list(other._store.items())
        if isinstance(other, Mapping):
            return self._store == dict(other.items())
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        entries = ", ".join(f"{key!r}: {value!r}" for key, value in self._store.items())
        return f"BMap({{{entries}}})"


def _entry_key(entry: Entry) -> Any:
    return entry.key


Mapping.register(BMap)
