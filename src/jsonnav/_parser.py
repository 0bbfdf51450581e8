"""
Array- and object-rooted parsers over raw JSON bytes.

A parser owns an immutable byte buffer and decodes it again on every call;
nothing is cached between calls. Nested documents are handed out as freshly
re-encoded bytes wrapped in a new parser, so top-level and nested access go
through exactly the same code. That costs a decode and an encode per hop
and is accepted in exchange for a single, stateless code path.

Two access tiers sit on top of the buffer:

- strict accessors (``get_value``, ``get_subdocument_bytes``, ``parse``,
  ``iterate``) raise the precise ``JSONError`` subclass;
- lenient accessors (``array_at``, ``object_at``, ``value_at``) return
  None on any of those failures.
"""

from abc import ABC
from abc import abstractmethod
from collections.abc import Callable
from collections.abc import Iterator
from dataclasses import dataclass
from dataclasses import field
from logging import getLogger
from typing import Any
from typing import Protocol
from typing import runtime_checkable

from jsonnav._codec import CodecConfig
from jsonnav._codec import decode_container
from jsonnav._codec import encode
from jsonnav._errors import InvalidKeyError
from jsonnav._errors import JSONError
from jsonnav._keys import Index
from jsonnav._keys import Name
from jsonnav._keys import index_of
from jsonnav._keys import name_of
from jsonnav._proxy import Proxy
from jsonnav._values import JsonArray
from jsonnav._values import JsonObject
from jsonnav._values import JsonValue
from jsonnav._values import Kind
from jsonnav._values import TypeSpec
from jsonnav._values import cast
from jsonnav._values import container_kind

logger = getLogger(__name__)

ProxyCallback = Callable[[Proxy], Any]


@runtime_checkable
class JSONParser(Protocol):
    """Capability shared by the array- and object-rooted parsers."""

    data: bytes
    config: CodecConfig

    def get_value(self, key: Any, spec: TypeSpec) -> Any: ...

    def get_subdocument_bytes(self, key: Any, kind: TypeSpec) -> bytes: ...

    def parse(self) -> JsonArray | JsonObject: ...

    def iterate(self, callback: ProxyCallback) -> None: ...

    def __iter__(self) -> Iterator[Proxy]: ...

    def array_at(self, key: Any) -> "ArrayParser | None": ...

    def object_at(self, key: Any) -> "ObjectParser | None": ...

    def value_at(self, key: Any, spec: TypeSpec) -> Any: ...


class NavigationMixin(ABC):
    """
    Lenient lookups and callback iteration built from the strict primitives.

    Shared by parsers and providers; subclasses supply ``config``,
    ``get_value``, ``get_subdocument_bytes`` and ``__iter__``.
    """

    config: CodecConfig

    @abstractmethod
    def get_value(self, key: Any, spec: TypeSpec) -> Any: ...

    @abstractmethod
    def get_subdocument_bytes(self, key: Any, kind: TypeSpec) -> bytes: ...

    @abstractmethod
    def __iter__(self) -> Iterator[Proxy]: ...

    def array_at(self, key: Any) -> "ArrayParser | None":
        """Returns a parser for the array at key, or None."""
        try:
            data = self.get_subdocument_bytes(key, Kind.ARRAY)
        except JSONError as e:
            logger.debug("No array at %r: %s", key, e)
            return None
        return ArrayParser(data, config=self.config)

    def object_at(self, key: Any) -> "ObjectParser | None":
        """Returns a parser for the object at key, or None."""
        try:
            data = self.get_subdocument_bytes(key, Kind.OBJECT)
        except JSONError as e:
            logger.debug("No object at %r: %s", key, e)
            return None
        return ObjectParser(data, config=self.config)

    def value_at(self, key: Any, spec: TypeSpec) -> Any:
        """Returns the value at key as spec, or None."""
        try:
            return self.get_value(key, spec)
        except JSONError as e:
            logger.debug("No value at %r: %s", key, e)
            return None

    def iterate(self, callback: ProxyCallback) -> None:
        """
        Calls callback with a Proxy for each element, in order.

        Any exception raised by the callback propagates at once and the
        remaining elements are skipped.
        """
        for proxy in self:
            callback(proxy)


def check_buffer(parser: Any) -> None:
    """Normalizes the buffer to bytes and fills in the default config."""
    if isinstance(parser.data, bytearray | memoryview):
        object.__setattr__(parser, "data", bytes(parser.data))
    elif not isinstance(parser.data, bytes):
        raise TypeError(
            "the JSON document must be bytes, "
            f"not {type(parser.data).__name__}"
        )
    if parser.config is None:
        object.__setattr__(parser, "config", CodecConfig())
    elif not isinstance(parser.config, CodecConfig):
        raise TypeError("config must be a CodecConfig")


@dataclass(frozen=True)
class ArrayParser(NavigationMixin):
    """
    Parser for a document whose top-level value is a JSON array.

    Keys are integer indices (or Index). Out-of-range indices, negative ones
    included, raise InvalidKeyError.
    """

    data: bytes
    config: CodecConfig = field(
        default_factory=CodecConfig, kw_only=True, compare=False
    )

    def __post_init__(self) -> None:
        check_buffer(self)

    def parse(self) -> JsonArray:
        """Decodes the whole document, which must be an array."""
        return decode_container(self.data, Kind.ARRAY, self.config)  # type: ignore[no-any-return]

    def _element(self, key: Any) -> tuple[Index, JsonValue]:
        array = self.parse()
        index = index_of(key)
        if not 0 <= index < len(array):
            raise InvalidKeyError(
                f"Index {index} out of range for array of length {len(array)}",
                key=key,
            )
        return Index(index), array[index]

    def get_value(self, key: Any, spec: TypeSpec) -> Any:
        """Returns the element at key checked against spec."""
        position, element = self._element(key)
        return cast(element, spec, key=position)

    def get_subdocument_bytes(self, key: Any, kind: TypeSpec) -> bytes:
        """Returns the re-encoded array or object found at key."""
        expected = container_kind(kind)
        position, element = self._element(key)
        cast(element, expected, key=position)
        return encode(element, self.config)

    def __iter__(self) -> Iterator[Proxy]:
        # Decode eagerly so a bad buffer fails at iter(), not at first next()
        array = self.parse()
        config = self.config
        return (
            Proxy(Index(i), element, config=config)
            for i, element in enumerate(array)
        )


@dataclass(frozen=True)
class ObjectParser(NavigationMixin):
    """
    Parser for a document whose top-level value is a JSON object.

    Keys are member names (or Name). Iteration follows the member order of
    the source text; later duplicates of a name replace earlier ones.
    """

    data: bytes
    config: CodecConfig = field(
        default_factory=CodecConfig, kw_only=True, compare=False
    )

    def __post_init__(self) -> None:
        check_buffer(self)

    def parse(self) -> JsonObject:
        """Decodes the whole document, which must be an object."""
        return decode_container(self.data, Kind.OBJECT, self.config)  # type: ignore[no-any-return]

    def _member(self, key: Any) -> tuple[Name, JsonValue]:
        obj = self.parse()
        name = name_of(key)
        if name not in obj:
            raise InvalidKeyError(f"No member named {name!r}", key=key)
        return Name(name), obj[name]

    def get_value(self, key: Any, spec: TypeSpec) -> Any:
        """Returns the member named key checked against spec."""
        position, member = self._member(key)
        return cast(member, spec, key=position)

    def get_subdocument_bytes(self, key: Any, kind: TypeSpec) -> bytes:
        """Returns the re-encoded array or object found at key."""
        expected = container_kind(kind)
        position, member = self._member(key)
        cast(member, expected, key=position)
        return encode(member, self.config)

    def __iter__(self) -> Iterator[Proxy]:
        obj = self.parse()
        config = self.config
        return (
            Proxy(Name(name), member, config=config)
            for name, member in obj.items()
        )
