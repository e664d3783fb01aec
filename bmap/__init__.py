"""BMap: an observable ordered map with batched change notification."""

from bmap.map import BMap, Entry
from bmap.listener import BMapEventType, BMapListener, ListenerRegistry
from bmap.config import BMapConfig, SerializationConfig, ReentrancyPolicy
from bmap.exceptions import (
    BMapException,
    IllegalStateException,
    IllegalArgumentException,
    ConfigurationException,
    BMapSerializationException,
)
from bmap.serialization.json import BMapJsonEncoder, to_json, from_json
from bmap.logging import configure_logging, get_logger, set_level

__all__ = [
    # Core
    "BMap",
    "Entry",
    # Listeners
    "BMapEventType",
    "BMapListener",
    "ListenerRegistry",
    # Configuration
    "BMapConfig",
    "SerializationConfig",
    "ReentrancyPolicy",
    # Exceptions
    "BMapException",
    "IllegalStateException",
    "IllegalArgumentException",
    "ConfigurationException",
    "BMapSerializationException",
    # Serialization
    "BMapJsonEncoder",
    "to_json",
    "from_json",
    # Logging
    "configure_logging",
    "get_logger",
    "set_level",
]

__version__ = "0.1.0"
