"""
Test data generators for navigation benchmarks.

Creates JSON documents shaped for the access patterns being measured:
- wide arrays of mixed elements (single-hop lookup, iteration)
- deep object chains (nested descent, one decode and encode per hop)
- record collections (lookup by name inside an array of objects)
"""

import random
import string
from typing import Any

import orjson

# Constants for random data generation
_INT_TYPE = 1
_FLOAT_TYPE = 2
_STRING_TYPE = 3
_BOOL_TYPE = 4
_NULL_TYPE = 5

DEEP_CHAIN_DEPTH = 12


def generate_document(data_type: str) -> bytes:
    """Generates a JSON document of the given shape as bytes."""
    generators = {
        "mixed_array": _generate_mixed_array,
        "deep_chain": _generate_deep_chain,
        "records": _generate_records,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return orjson.dumps(generators[data_type]())


def deep_chain_path() -> list[str]:
    """Names to follow from the root of a deep_chain document to its leaf."""
    return ["child"] * DEEP_CHAIN_DEPTH


def _generate_mixed_array() -> list[Any]:
    """A 500-element array of mixed scalars and small objects."""
    array: list[Any] = []

    for i in range(500):
        choice = random.randint(1, 6)
        if choice == _INT_TYPE:
            array.append(random.randint(-1000, 1000))
        elif choice == _FLOAT_TYPE:
            array.append(round(random.uniform(-100.0, 100.0), 3))
        elif choice == _STRING_TYPE:
            array.append(_random_string(random.randint(5, 30)))
        elif choice == _BOOL_TYPE:
            array.append(random.choice([True, False]))
        elif choice == _NULL_TYPE:
            array.append(None)
        else:
            array.append(
                {
                    "index": i,
                    "value": _random_string(10),
                    "score": round(random.uniform(0, 100), 2),
                }
            )

    return array


def _generate_deep_chain() -> dict[str, Any]:
    """Objects nested DEEP_CHAIN_DEPTH levels through a "child" member."""

    def create_level(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"leaf": True, "payload": _random_string(20)}

        return {
            "level": depth,
            "padding": [_random_string(15) for _ in range(10)],
            "child": create_level(depth - 1),
        }

    return create_level(DEEP_CHAIN_DEPTH)


def _generate_records() -> dict[str, Any]:
    """A user collection with 200 records under "users"."""
    return {
        "count": 200,
        "users": [
            {
                "id": f"user_{i:05d}",
                "name": _random_string(12),
                "active": random.choice([True, False]),
                "balance": round(random.uniform(0, 10000), 2),
                "tags": [_random_string(5) for _ in range(3)],
            }
            for i in range(200)
        ],
    }


def _random_string(length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(random.choices(string.ascii_letters, k=length))
