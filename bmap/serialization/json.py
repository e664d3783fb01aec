"""JSON serialization support for BMap.

A map is rendered as its entry-array view: a JSON array of two-element
``[key, value]`` arrays in iteration order. Unlike a JSON object this keeps
non-string keys and insertion order intact.

Example:
    Basic usage::

        from bmap import BMap
        from bmap.serialization.json import to_json, from_json

        bmap = BMap([(1, 2), ("test", "test2")])
        text = to_json(bmap)        # '[[1,2],["test","test2"]]'
        restored = from_json(text)  # BMap({1: 2, 'test': 'test2'})

    With the standard library encoder::

        import json
        json.dumps({"people": people}, cls=BMapJsonEncoder)
"""

import json as json_module
from typing import Any, List, Optional

from bmap.config import BMapConfig
from bmap.exceptions import BMapSerializationException
from bmap.logging import get_logger
from bmap.map import BMap

_logger = get_logger("serialization")


class BMapJsonEncoder(json_module.JSONEncoder):
    """JSON encoder that renders any BMap, however nested, as its entry array."""

    def default(self, o: Any) -> Any:
        if isinstance(o, BMap):
            return [[key, value] for key, value in o.to_data_array()]
        return super().default(o)


def to_json(bmap: BMap, config: Optional[BMapConfig] = None) -> str:
    """Encode a map as a JSON array of ``[key, value]`` pairs.

    Args:
        bmap: The map to encode. It is not modified.
        config: Configuration to take serialization options from. Defaults
            to the map's own configuration.

    Returns:
        The JSON text.

    Raises:
        BMapSerializationException: If a key or value cannot be encoded.

    Example:
        >>> to_json(BMap([(1, 2), ("test", "test2")]))
        '[[1,2],["test","test2"]]'
    """
    serialization = (config or bmap.config).serialization
    try:
        return json_module.dumps(
            bmap,
            cls=BMapJsonEncoder,
            separators=serialization.separators,
            indent=serialization.indent,
            ensure_ascii=serialization.ensure_ascii,
        )
    except (TypeError, ValueError) as e:
        raise BMapSerializationException(f"Failed to serialize to JSON: {e}", cause=e)


def from_json(text: str, config: Optional[BMapConfig] = None) -> BMap:
    """Decode a JSON array of ``[key, value]`` pairs into a new map.

    Seeding the new map fires no events.

    Args:
        text: JSON text produced by :func:`to_json` or any compatible writer.
        config: Configuration for the new map.

    Returns:
        A new BMap.

    Raises:
        BMapSerializationException: If the text is not valid JSON or not
            an array of pairs with hashable keys.
    """
    try:
        data = json_module.loads(text)
    except (json_module.JSONDecodeError, TypeError) as e:
        raise BMapSerializationException(f"Failed to parse JSON: {e}", cause=e)
    return from_data_array(data, config)


def from_data_array(data: Any, config: Optional[BMapConfig] = None) -> BMap:
    """Build a map from an already decoded entry array."""
    config = config or BMapConfig()
    if not isinstance(data, list):
        raise BMapSerializationException(
            f"Expected an array of [key, value] pairs, got {type(data).__name__}"
        )

    pairs: List[tuple] = []
    for index, pair in enumerate(data):
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise BMapSerializationException(
                f"Entry {index} is not a [key, value] pair: {pair!r}"
            )
        key, value = pair
        if config.serialization.tuple_keys:
            key = _freeze(key)
        try:
            hash(key)
        except TypeError as e:
            raise BMapSerializationException(f"Entry {index} has an unhashable key: {key!r}", cause=e)
        pairs.append((key, value))

    _logger.debug("Decoded %d entries", len(pairs))
    return BMap(pairs, config=config)


def _freeze(key: Any) -> Any:
    if isinstance(key, list):
        return tuple(_freeze(item) for item in key)
    return key
