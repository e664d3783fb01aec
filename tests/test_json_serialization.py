"""Unit tests for bmap.serialization.json module."""

import json

import pytest

from bmap import BMap
from bmap.config import BMapConfig, SerializationConfig
from bmap.exceptions import BMapSerializationException
from bmap.serialization.json import (
    BMapJsonEncoder,
    to_json,
    from_json,
    from_data_array,
)


class TestToJson:
    """Tests for to_json."""

    def test_serializes_mixed_keys(self):
        bmap = BMap()
        bmap.set(1, 2)
        bmap.set("test", "test2")

        assert to_json(bmap) == '[[1,2],["test","test2"]]'

    def test_serializes_records(self):
        bmap = BMap([("id1", {"name": "Acme"}), ("id2", {"name": "Acme #2"})])

        assert to_json(bmap) == '[["id1",{"name":"Acme"}],["id2",{"name":"Acme #2"}]]'

    def test_serializes_empty(self):
        assert to_json(BMap()) == "[]"

    def test_follows_iteration_order(self):
        bmap = BMap([(3, "c"), (1, "a")])
        assert to_json(bmap) == '[[3,"c"],[1,"a"]]'
        bmap.sort()
        assert to_json(bmap) == '[[1,"a"],[3,"c"]]'

    def test_nested_bmap(self):
        bmap = BMap([("inner", BMap([(1, True)]))])
        assert to_json(bmap) == '[["inner",[[1,true]]]]'

    def test_does_not_mutate_or_notify(self, listener):
        bmap = BMap([(2, "b"), (1, "a")])
        bmap.on("add", listener).on("update", listener).on("delete", listener)

        first = to_json(bmap)
        second = to_json(bmap)

        assert first == second
        assert bmap.keys() == [2, 1]
        listener.assert_not_called()

    def test_pretty_output(self, pretty_config):
        bmap = BMap([(1, 2)], config=pretty_config)
        assert to_json(bmap) == "[\n  [\n    1,\n    2\n  ]\n]"

    def test_explicit_config_overrides_map_config(self, pretty_config):
        bmap = BMap([(1, 2)])
        assert to_json(bmap, pretty_config) != to_json(bmap)

    def test_non_ascii_kept_by_default(self):
        assert to_json(BMap([("k", "é")])) == '[["k","é"]]'

    def test_ensure_ascii(self):
        config = BMapConfig(serialization=SerializationConfig(ensure_ascii=True))
        assert to_json(BMap([("k", "é")], config=config)) == '[["k","\\u00e9"]]'

    def test_unserializable_value_raises(self):
        bmap = BMap([("k", object())])
        with pytest.raises(BMapSerializationException) as exc_info:
            to_json(bmap)
        assert "Failed to serialize" in str(exc_info.value)
        assert isinstance(exc_info.value.cause, TypeError)


class TestBMapJsonEncoder:
    """Tests for BMapJsonEncoder."""

    def test_encodes_bmap_inside_other_structures(self):
        document = {"people": BMap([("id1", "Acme")])}
        assert json.dumps(document, cls=BMapJsonEncoder) == '{"people": [["id1", "Acme"]]}'

    def test_falls_back_for_other_types(self):
        with pytest.raises(TypeError):
            json.dumps({"value": object()}, cls=BMapJsonEncoder)


class TestFromJson:
    """Tests for from_json and from_data_array."""

    def test_round_trip(self):
        encoded = to_json(BMap([(1, 2), ("test", "test2")]))
        decoded = from_json(encoded)

        assert decoded.to_data_array() == [(1, 2), ("test", "test2")]
        assert to_json(decoded) == encoded

    def test_decodes_in_order(self):
        decoded = from_json('[["b",1],["a",2]]')
        assert decoded.keys() == ["b", "a"]

    def test_list_keys_become_tuples(self):
        decoded = from_json('[[[1,[2,3]],"v"]]')
        assert decoded.get((1, (2, 3))) == "v"

    def test_list_keys_rejected_without_tuple_keys(self):
        config = BMapConfig(serialization=SerializationConfig(tuple_keys=False))
        with pytest.raises(BMapSerializationException) as exc_info:
            from_json('[[[1,2],"v"]]', config)
        assert "unhashable key" in str(exc_info.value)

    def test_object_keys_rejected(self):
        with pytest.raises(BMapSerializationException):
            from_json('[[{"a":1},"v"]]')

    def test_invalid_json(self):
        with pytest.raises(BMapSerializationException) as exc_info:
            from_json("[[1,2]")
        assert "Failed to parse JSON" in str(exc_info.value)

    def test_not_an_array(self):
        with pytest.raises(BMapSerializationException) as exc_info:
            from_json('{"a":1}')
        assert "Expected an array" in str(exc_info.value)

    def test_malformed_pair(self):
        with pytest.raises(BMapSerializationException) as exc_info:
            from_json("[[1,2,3]]")
        assert "Entry 0" in str(exc_info.value)

    def test_decoded_map_uses_config(self, pretty_config):
        decoded = from_json("[[1,2]]", pretty_config)
        assert decoded.config is pretty_config

    def test_from_data_array_accepts_tuples(self):
        decoded = from_data_array([(1, "a"), (2, "b")])
        assert decoded.to_data_array() == [(1, "a"), (2, "b")]
