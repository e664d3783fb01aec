"""Unit tests for listener infrastructure."""

import pytest
from unittest.mock import MagicMock

from bmap.listener import BMapEventType, ListenerRegistry
from bmap.exceptions import IllegalArgumentException


class TestBMapEventType:
    def test_all_types_exist(self):
        assert BMapEventType.ADD.value == "add"
        assert BMapEventType.UPDATE.value == "update"
        assert BMapEventType.DELETE.value == "delete"

    def test_parse_member(self):
        assert BMapEventType.parse(BMapEventType.DELETE) is BMapEventType.DELETE

    def test_parse_string(self):
        assert BMapEventType.parse("update") is BMapEventType.UPDATE
        assert BMapEventType.parse("Delete") is BMapEventType.DELETE

    def test_parse_unknown(self):
        with pytest.raises(IllegalArgumentException) as exc_info:
            BMapEventType.parse("evict")
        assert "Unknown event type" in str(exc_info.value)


class TestListenerRegistry:
    def test_empty(self):
        registry = ListenerRegistry()
        assert len(registry) == 0
        assert registry.has_listeners() is False
        assert registry.listeners("add") == []

    def test_add_and_fire(self):
        registry = ListenerRegistry()
        listener = MagicMock()
        registry.add("add", listener)

        count = registry.fire(BMapEventType.ADD, "payload")

        assert count == 1
        listener.assert_called_once_with("payload")

    def test_fire_other_kind(self):
        registry = ListenerRegistry()
        listener = MagicMock()
        registry.add(BMapEventType.ADD, listener)

        assert registry.fire(BMapEventType.DELETE, "payload") == 0
        listener.assert_not_called()

    def test_registration_order(self):
        registry = ListenerRegistry()
        calls = []
        registry.add("delete", lambda payload: calls.append("first"))
        registry.add("delete", lambda payload: calls.append("second"))

        registry.fire(BMapEventType.DELETE, None)

        assert calls == ["first", "second"]

    def test_same_listener_twice(self):
        registry = ListenerRegistry()
        listener = MagicMock()
        registry.add("add", listener)
        registry.add("add", listener)

        registry.fire(BMapEventType.ADD, None)

        assert listener.call_count == 2
        assert len(registry) == 2

    def test_remove(self):
        registry = ListenerRegistry()
        listener = MagicMock()
        registry.add("add", listener)

        assert registry.remove("add", listener) is True
        assert registry.remove("add", listener) is False
        assert registry.has_listeners("add") is False

    def test_remove_only_first_registration(self):
        registry = ListenerRegistry()
        listener = MagicMock()
        registry.add("add", listener)
        registry.add("add", listener)

        registry.remove("add", listener)

        assert len(registry.listeners("add")) == 1

    def test_remove_unregistered(self):
        registry = ListenerRegistry()
        registry.add("add", MagicMock())
        assert registry.remove("add", MagicMock()) is False

    def test_rejects_non_callable(self):
        registry = ListenerRegistry()
        with pytest.raises(IllegalArgumentException) as exc_info:
            registry.add("add", 42)
        assert "callable" in str(exc_info.value)

    def test_rejects_unknown_event(self):
        registry = ListenerRegistry()
        with pytest.raises(IllegalArgumentException):
            registry.add("changed", MagicMock())

    def test_fire_uses_snapshot(self):
        registry = ListenerRegistry()
        late = MagicMock()
        registry.add("add", lambda payload: registry.add("add", late))

        registry.fire(BMapEventType.ADD, None)
        late.assert_not_called()

        registry.fire(BMapEventType.ADD, None)
        late.assert_called_once()

    def test_listener_error_stops_dispatch(self):
        registry = ListenerRegistry()
        after = MagicMock()
        registry.add("add", MagicMock(side_effect=RuntimeError("boom")))
        registry.add("add", after)

        with pytest.raises(RuntimeError):
            registry.fire(BMapEventType.ADD, None)
        after.assert_not_called()

    def test_listeners_returns_copy(self):
        registry = ListenerRegistry()
        registry.add("add", MagicMock())
        registry.listeners("add").clear()
        assert len(registry.listeners("add")) == 1

    def test_clear(self):
        registry = ListenerRegistry()
        registry.add("add", MagicMock())
        registry.add("delete", MagicMock())
        registry.clear()
        assert len(registry) == 0

    def test_repr(self):
        registry = ListenerRegistry()
        registry.add("add", MagicMock())
        assert repr(registry) == "ListenerRegistry(add=1)"
