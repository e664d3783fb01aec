"""BMap serialization package."""

from bmap.serialization.json import (
    BMapJsonEncoder,
    to_json,
    from_json,
    from_data_array,
)

__all__ = [
    "BMapJsonEncoder",
    "to_json",
    "from_json",
    "from_data_array",
]
