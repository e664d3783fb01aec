"""Basic BMap Operations Example.

This example demonstrates fundamental BMap operations: single and batched
mutation, change listeners, batch reads and JSON serialization.

Usage:
    python basic_map.py
"""

import logging

from bmap import BMap, configure_logging, to_json, from_json


def on_added(entries: BMap) -> None:
    print(f"  [ADDED] {entries.to_data_array()}")


def on_updated(entries: BMap) -> None:
    print(f"  [UPDATED] {entries.to_data_array()}")


def on_deleted(entries: BMap) -> None:
    print(f"  [DELETED] {entries.to_data_array()}")


def main():
    configure_logging(level=logging.INFO)

    users = BMap([("user:1", {"name": "Alice", "age": 30})])
    users.on("add", on_added).on("update", on_updated).on("delete", on_deleted)

    print("--- SET operations ---")
    users.set("user:2", {"name": "Bob", "age": 25})
    users.set("user:1", {"name": "Alice", "age": 31})

    print("\n--- BATCH SET operation (one add, one update) ---")
    users.b_set([
        ("user:3", {"name": "Charlie", "age": 35}),
        ("user:4", {"name": "Diana", "age": 28}),
        ("user:2", {"name": "Bob", "age": 26}),
    ])

    print("\n--- GET operations ---")
    print(f"Retrieved user:1 = {users.get('user:1')}")
    print(f"Key 'user:999' exists: {users.has('user:999')}")
    print(f"Map size: {users.size}")

    print("\n--- BATCH GET operation ---")
    subset = users.b_get(["user:4", "user:999", "user:1"])
    for key, value in subset.items():
        print(f"  {key}: {value}")

    print("\n--- BATCH DELETE operation ---")
    removed = users.b_delete(["user:3", "user:999"])
    print(f"Removed flags: {removed}")

    print("\n--- JSON round trip ---")
    text = to_json(users)
    print(f"Encoded: {text}")
    print(f"Decoded equals original: {from_json(text) == users}")

    print("\n--- CLEAR operation ---")
    users.clear()
    print(f"Map cleared, new size: {users.size}")


if __name__ == "__main__":
    main()
