"""
Byte-level JSON codec behind every parser.

Wraps orjson, ujson and the standard library json module behind one
decode/encode pair. Every backend accepts and produces the same strict
JSON: NaN and Infinity, leading zeros, lone surrogates and non-string
object keys are refused by all three. Backend exceptions never escape:
they are re-raised as InvalidDataError so callers only ever see the
navigation error taxonomy.
"""

import codecs
import json
import math
import os
import re
from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from logging import getLogger
from typing import Any

import orjson
import ujson  # type: ignore[import-untyped]

from jsonnav._errors import InvalidDataError
from jsonnav._profile import ProfileContext
from jsonnav._values import JsonValue
from jsonnav._values import Kind
from jsonnav._values import kind_of

logger = getLogger(__name__)

BACKEND_ENV_VAR = "JSONNAV_BACKEND"

# Everything a backend may raise for bad input, in either direction
_CODEC_ERRORS = (ValueError, TypeError, OverflowError, RecursionError)

# Skips over string literals so only bare numbers are checked
_LEADING_ZERO = re.compile(
    rb'"(?:[^"\\]|\\.)*"|(?<![0-9.eE+-])-?0[0-9]', re.DOTALL
)
_SURROGATE = re.compile(r"[\ud800-\udfff]")


class Backend(Enum):
    """JSON libraries that can sit underneath the parsers."""

    ORJSON = "orjson"
    UJSON = "ujson"
    STDLIB = "json"


def default_backend() -> Backend:
    """Reads the backend from JSONNAV_BACKEND, falling back to orjson."""
    name = os.environ.get(BACKEND_ENV_VAR)
    if not name:
        return Backend.ORJSON
    try:
        backend = Backend(name)
    except ValueError:
        logger.warning(
            "Unknown %s value %r, using %s",
            BACKEND_ENV_VAR,
            name,
            Backend.ORJSON.value,
        )
        return Backend.ORJSON
    logger.debug("Using %s backend from %s", backend.value, BACKEND_ENV_VAR)
    return backend


@dataclass(frozen=True)
class CodecConfig:
    """
    Configures how documents are decoded and sub-documents re-encoded.

    Immutable so parsers can share one instance and hand it down to every
    sub-parser they create.
    """

    backend: Backend = field(default_factory=default_backend)
    sort_keys: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.backend, str):
            # Raises ValueError for unknown names
            object.__setattr__(self, "backend", Backend(self.backend))
        if not isinstance(self.backend, Backend):
            raise TypeError("backend must be a Backend or its name")
        if not isinstance(self.sort_keys, bool):
            raise TypeError("sort_keys must be a boolean")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _check_decoded(value: Any) -> None:
    """Rejects values orjson refuses but the other decoders let through."""
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"{value} is not valid JSON")
    elif isinstance(value, str):
        if _SURROGATE.search(value):
            raise ValueError("lone surrogate in string")
    elif isinstance(value, list):
        for item in value:
            _check_decoded(item)
    elif isinstance(value, dict):
        for name, member in value.items():
            _check_decoded(name)
            _check_decoded(member)


def _check_encodable(value: Any) -> None:
    """
    Rejects what only some encoders refuse.

    ujson and json coerce non-string keys to strings and orjson writes NaN
    as null, so both are checked up front for every backend.
    """
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Out of range float values are not JSON: {value}")
    elif isinstance(value, dict):
        for name, member in value.items():
            if not isinstance(name, str):
                raise TypeError(
                    f"Dict key must be str, not {type(name).__name__}"
                )
            _check_encodable(member)
    elif isinstance(value, list | tuple):
        for item in value:
            _check_encodable(item)


def _ujson_loads(data: bytes) -> Any:
    for match in _LEADING_ZERO.finditer(data):
        if not match.group().startswith(b"\""):
            raise ValueError(f"Leading zero in number at byte {match.start()}")
    value = ujson.loads(data)
    _check_decoded(value)
    return value


def _stdlib_loads(data: bytes) -> Any:
    value = json.loads(data, parse_constant=_reject_constant)
    _check_decoded(value)
    return value


def _orjson_dumps(value: Any, config: CodecConfig) -> bytes:
    option = orjson.OPT_SORT_KEYS if config.sort_keys else 0
    return orjson.dumps(value, option=option)


def _ujson_dumps(value: Any, config: CodecConfig) -> bytes:
    text = ujson.dumps(
        value,
        ensure_ascii=False,
        escape_forward_slashes=False,
        sort_keys=config.sort_keys,
        allow_nan=False,
    )
    return text.encode("utf-8")


def _stdlib_dumps(value: Any, config: CodecConfig) -> bytes:
    text = json.dumps(
        value,
        ensure_ascii=False,
        separators=(",", ":"),
        sort_keys=config.sort_keys,
        allow_nan=False,
    )
    return text.encode("utf-8")


_DECODERS: dict[Backend, Callable[[bytes], Any]] = {
    Backend.ORJSON: orjson.loads,
    Backend.UJSON: _ujson_loads,
    Backend.STDLIB: _stdlib_loads,
}

_ENCODERS: dict[Backend, Callable[[Any, CodecConfig], bytes]] = {
    Backend.ORJSON: _orjson_dumps,
    Backend.UJSON: _ujson_dumps,
    Backend.STDLIB: _stdlib_dumps,
}


def decode(data: bytes, config: CodecConfig) -> JsonValue:
    """Parses UTF-8 JSON bytes into plain Python data."""
    # Reject the BOM ourselves: json.loads would silently strip it
    if data.startswith(codecs.BOM_UTF8):
        raise InvalidDataError(
            "JSON input should not contain BOM (Byte Order Mark)"
        )

    with ProfileContext("decode", len(data)):
        try:
            return _DECODERS[config.backend](data)  # type: ignore[no-any-return]
        except _CODEC_ERRORS as e:
            raise InvalidDataError(f"Malformed JSON document: {e}") from e


def decode_container(data: bytes, kind: Kind, config: CodecConfig) -> Any:
    """Decodes bytes and checks the top-level value is the given container."""
    document = decode(data, config)
    actual = kind_of(document)
    if actual is not kind:
        raise InvalidDataError(
            f"Expected a top-level JSON {kind.value}, found {actual.value}"
        )
    return document


def encode(value: Any, config: CodecConfig) -> bytes:
    """Serializes a value to compact UTF-8 JSON bytes."""
    with ProfileContext("encode") as ctx:
        try:
            _check_encodable(value)
            data = _ENCODERS[config.backend](value, config)
        except _CODEC_ERRORS as e:
            raise InvalidDataError(f"Value is not JSON serializable: {e}") from e
        ctx.nbytes = len(data)
        return data
