"""
Pytest configuration and shared fixtures for jsonnav tests.

Provides immutable document fixtures and a backend-parametrized codec
configuration so parser behavior is checked against every JSON library
the package can sit on.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import pytest

import jsonnav
from jsonnav._profile import profiling_enabled


@dataclass(frozen=True)
class LookupCase:
    """
    Immutable container for one typed lookup and its expected outcome.

    Either ``expected`` holds the value the lookup returns, or ``error``
    names the exception it raises.
    """

    description: str
    key: Any
    spec: Any
    expected: Any = None
    error: type[Exception] | None = None


MIXED_ARRAY = b'[0,1,{"2":true}]'

PROFILE_OBJECT = (
    b'{"name":"Alice","age":36,"score":9.5,"active":true,"nickname":null,'
    b'"tags":["a","b"],"address":{"city":"Paris","zip":"75001"}}'
)


@pytest.fixture(params=list(jsonnav.Backend), ids=lambda b: b.value)
def config(request: pytest.FixtureRequest) -> jsonnav.CodecConfig:
    """Codec configuration for each available backend."""
    return jsonnav.CodecConfig(backend=request.param)


@pytest.fixture
def mixed_array() -> bytes:
    """An array holding two integers and a one-member object."""
    return MIXED_ARRAY


@pytest.fixture
def profile_object() -> bytes:
    """An object with one member of every JSON kind."""
    return PROFILE_OBJECT


@pytest.fixture
def mixed_array_cases() -> list[LookupCase]:
    """
    Typed lookups against ``MIXED_ARRAY`` covering hits, kind mismatches
    and bad indices.
    """
    return [
        LookupCase("first integer", 0, int, 0),
        LookupCase("second integer as number kind", 1, jsonnav.Kind.NUMBER, 1),
        LookupCase("integer as float", 1, float, 1.0),
        LookupCase("object", 2, dict, {"2": True}),
        LookupCase("typed object", 2, dict[str, bool], {"2": True}),
        LookupCase("object as anything", 2, Any, {"2": True}),
        LookupCase("union picks object", 2, int | dict, {"2": True}),
        LookupCase(
            "object as bool", 2, bool, error=jsonnav.InvalidTypeError
        ),
        LookupCase(
            "integer as string", 0, str, error=jsonnav.InvalidTypeError
        ),
        LookupCase(
            "object with wrong member type",
            2,
            dict[str, int],
            error=jsonnav.InvalidTypeError,
        ),
        LookupCase("past the end", 5, int, error=jsonnav.InvalidKeyError),
        LookupCase("exactly the length", 3, int, error=jsonnav.InvalidKeyError),
        LookupCase("negative", -1, int, error=jsonnav.InvalidKeyError),
        LookupCase("name on an array", "0", int, error=jsonnav.InvalidKeyError),
        LookupCase("bool index", True, int, error=jsonnav.InvalidKeyError),
    ]


@pytest.fixture
def malformed_documents() -> list[bytes]:
    """Byte strings no backend accepts as JSON."""
    return [
        b"",
        b"   ",
        b"[1,2",
        b'{"a":}',
        b'{"a" 1}',
        b"[1 2]",
        b"nope",
        b"[1] trailing",
        b"\xef\xbb\xbf[1]",
        b"[NaN]",
        b"[Infinity]",
        b"[-Infinity]",
        b"[01]",
        b"[1,-007]",
        b'["\\ud800"]',
    ]


@pytest.fixture
def profiling() -> Iterator[None]:
    """Records hot-path statistics for the duration of a test."""
    was_enabled = profiling_enabled()
    jsonnav.set_profiling(True)
    jsonnav.clear_hot_path_stats()
    yield
    jsonnav.set_profiling(was_enabled)
    jsonnav.clear_hot_path_stats()
