"""
Value model for decoded JSON documents.

A decoded document is plain Python data; ``Kind`` is the discriminator over
it. ``cast`` is the only way typed accessors pull a value out of a tree: it
checks the dynamic kind against the caller's requested type and either
returns the value (converted where numbers bridge between int and float) or
raises ``InvalidTypeError``.
"""

from enum import Enum
from types import UnionType
from typing import Any
from typing import TypeAlias
from typing import Union
from typing import get_args
from typing import get_origin

from jsonnav._errors import InvalidTypeError

# Type aliases for domain concepts - recursive definition
JsonValue = (
    str | int | float | bool | None | dict[str, "JsonValue"] | list["JsonValue"]
)
JsonArray = list[JsonValue]
JsonObject = dict[str, JsonValue]

# Anything accepted where a caller names the type it expects back
TypeSpec: TypeAlias = Any

_NONE_TYPE = type(None)
_MISMATCH: Any = object()


class Kind(Enum):
    """
    Dynamic kind of a decoded JSON value.

    Numbers are a single kind regardless of whether the decoder produced an
    int or a float.
    """

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def kind_of(value: Any) -> Kind:  # noqa: PLR0911
    """Classifies a decoded value, raising TypeError for non-JSON objects."""
    if value is None:
        return Kind.NULL
    elif isinstance(value, bool):
        return Kind.BOOL
    elif isinstance(value, int | float):
        return Kind.NUMBER
    elif isinstance(value, str):
        return Kind.STRING
    elif isinstance(value, list | tuple):
        return Kind.ARRAY
    elif isinstance(value, dict):
        return Kind.OBJECT
    else:
        msg = f"Object of type {type(value).__name__} is not a JSON value"
        raise TypeError(msg)


def container_kind(spec: TypeSpec) -> Kind:
    """Normalizes a container request (Kind, list or dict) to a Kind."""
    if spec is Kind.ARRAY or spec is list:
        return Kind.ARRAY
    if spec is Kind.OBJECT or spec is dict:
        return Kind.OBJECT
    raise TypeError(f"Expected an array or object kind, got {spec!r}")


def describe(spec: TypeSpec) -> str:
    """Returns a short human-readable name for a type request."""
    if isinstance(spec, Kind):
        return spec.value
    if spec is None or spec is _NONE_TYPE:
        return "null"
    if get_origin(spec) is not None or spec is Any:
        return repr(spec)
    return getattr(spec, "__name__", repr(spec))


def _to_bool(value: Any) -> Any:
    return value if isinstance(value, bool) else _MISMATCH


def _to_int(value: Any) -> Any:
    if isinstance(value, bool):
        return _MISMATCH
    if isinstance(value, int):
        return value
    # Integral floats bridge to int, fractional ones do not
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return _MISMATCH


def _to_float(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return _MISMATCH
    try:
        return float(value)
    except OverflowError:
        return _MISMATCH


def _to_str(value: Any) -> Any:
    return value if isinstance(value, str) else _MISMATCH


def _to_list(value: Any) -> Any:
    return value if isinstance(value, list | tuple) else _MISMATCH


def _to_dict(value: Any) -> Any:
    return value if isinstance(value, dict) else _MISMATCH


_SCALAR_CONVERTERS = {
    bool: _to_bool,
    int: _to_int,
    float: _to_float,
    str: _to_str,
    list: _to_list,
    dict: _to_dict,
}


def _convert_list(value: Any, spec: TypeSpec) -> Any:
    args = get_args(spec)
    if len(args) > 1:
        raise TypeError(f"list takes a single element type, got {spec!r}")
    item_spec = args[0] if args else Any
    if not isinstance(value, list | tuple):
        return _MISMATCH

    items = []
    for item in value:
        converted = _convert(item, item_spec)
        if converted is _MISMATCH:
            return _MISMATCH
        items.append(converted)
    return items


def _convert_dict(value: Any, spec: TypeSpec) -> Any:
    args = get_args(spec)
    if args and len(args) != 2:  # noqa: PLR2004
        raise TypeError(f"dict takes a key and a value type, got {spec!r}")
    key_spec, value_spec = args if args else (str, Any)
    if key_spec is not str:
        raise TypeError(f"JSON object keys are always str, not {key_spec!r}")
    if not isinstance(value, dict):
        return _MISMATCH

    members = {}
    for name, member in value.items():
        converted = _convert(member, value_spec)
        if converted is _MISMATCH:
            return _MISMATCH
        members[name] = converted
    return members


def _convert(value: Any, spec: TypeSpec) -> Any:  # noqa: PLR0911
    """Returns the value converted to spec, or _MISMATCH."""
    if isinstance(spec, Kind):
        return value if kind_of(value) is spec else _MISMATCH
    if spec is None or spec is _NONE_TYPE:
        return None if value is None else _MISMATCH
    if spec is Any or spec is object:
        return value

    origin = get_origin(spec)
    if origin is Union or origin is UnionType:
        for member_spec in get_args(spec):
            converted = _convert(value, member_spec)
            if converted is not _MISMATCH:
                return converted
        return _MISMATCH
    elif origin is list:
        return _convert_list(value, spec)
    elif origin is dict:
        return _convert_dict(value, spec)
    elif origin is not None:
        raise TypeError(f"Unsupported type request: {spec!r}")

    converter = _SCALAR_CONVERTERS.get(spec)
    if converter is None:
        raise TypeError(f"Unsupported type request: {spec!r}")
    return converter(value)


def cast(value: Any, spec: TypeSpec, key: Any = None) -> Any:
    """
    Checked downcast of a decoded value to the requested type.

    Accepts a Kind, a JSON scalar or container type (None, bool, int, float,
    str, list, dict), object or Any, parameterized list[T] / dict[str, T],
    and unions of those. Raises InvalidTypeError on mismatch and TypeError
    when spec is not something a JSON value can ever be.
    """
    converted = _convert(value, spec)
    if converted is _MISMATCH:
        actual = kind_of(value)
        where = f" at {key}" if key is not None else ""
        raise InvalidTypeError(
            f"Expected {describe(spec)}{where}, found {actual.value}",
            key=key,
            expected=spec,
            actual=actual,
        )
    return converted


def matches(value: Any, spec: TypeSpec) -> bool:
    """Returns True when cast(value, spec) would succeed."""
    return _convert(value, spec) is not _MISMATCH
