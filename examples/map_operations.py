"""BMap Query, Transform, Sort and Merge Example.

This example demonstrates the read-only query helpers, the transform
helpers that build new maps, silent in-place sorting and merging with a
conflict resolver.

Usage:
    python map_operations.py
"""

from bmap import BMap, BMapConfig, ReentrancyPolicy, IllegalStateException


def main():
    scores = BMap([("alice", 72), ("bob", 91), ("carol", 85), ("dave", 91)])

    print("--- QUERY operations ---")
    print(f"Passed: {scores.filter(lambda name, score: score >= 80).keys()}")
    print(f"First 91: {scores.find(lambda name, score: score == 91)}")
    print(f"Anyone below 50: {scores.some(lambda name, score: score < 50)}")
    print(f"Everyone above 70: {scores.every(lambda name, score: score > 70)}")

    print("\n--- TRANSFORM operations ---")
    percentages = scores.map_values(lambda name, score, source: f"{score}%")
    print(f"map_values: {percentages.to_data_array()}")
    upper = scores.map_keys(lambda name, score, source: name.upper())
    print(f"map_keys:   {upper.keys()}")

    print("\n--- SORT operation (fires no events) ---")
    scores.on("add", lambda entries: print("  unexpected add"))
    scores.on("delete", lambda entries: print("  unexpected delete"))
    scores.sort(lambda a, b: b.value - a.value)
    print(f"Sorted by score, ties stable: {scores.keys()}")

    print("\n--- MERGE operation ---")
    latest = {"alice": 80, "erin": 66}
    merged = scores.merge(latest, lambda name, existing, incoming: max(existing, incoming))
    print(f"Merged: {merged.to_data_array()}")
    print(f"Receiver unchanged: {scores.get('alice')}")

    print("\n--- REENTRANCY policy ---")
    guarded = BMap(config=BMapConfig(reentrancy=ReentrancyPolicy.FORBID))
    guarded.on("add", lambda entries: guarded.set("echo", True))
    try:
        guarded.set("first", 1)
    except IllegalStateException as e:
        print(f"Rejected nested mutation: {e}")


if __name__ == "__main__":
    main()
