"""
Providers: the parser surface for byte buffers and in-memory collections.

A provider owns a payload and produces a parser for it on demand. In-memory
collections are serialized again on every ``parser()`` call, so a provider
always reflects the current contents of the collection it wraps.
"""

from abc import abstractmethod
from collections.abc import Iterator
from collections.abc import Mapping
from collections.abc import Sequence
from collections.abc import Set
from dataclasses import dataclass
from dataclasses import field
from logging import getLogger
from typing import Any

from jsonnav._codec import CodecConfig
from jsonnav._codec import encode
from jsonnav._errors import FailedIterationError
from jsonnav._errors import InvalidDataError
from jsonnav._parser import ArrayParser
from jsonnav._parser import NavigationMixin
from jsonnav._parser import ObjectParser
from jsonnav._parser import check_buffer
from jsonnav._proxy import Proxy
from jsonnav._values import JsonArray
from jsonnav._values import JsonObject
from jsonnav._values import TypeSpec

logger = getLogger(__name__)


def _check_config(provider: Any) -> None:
    if provider.config is None:
        object.__setattr__(provider, "config", CodecConfig())
    elif not isinstance(provider.config, CodecConfig):
        raise TypeError("config must be a CodecConfig")


class ProviderMixin(NavigationMixin):
    """
    Strict and lenient access routed through ``parser()``.

    Strict accessors let a parser construction failure surface as
    InvalidDataError; lenient ones turn it into None; iteration reports it
    as FailedIterationError.
    """

    @abstractmethod
    def parser(self) -> ArrayParser | ObjectParser: ...

    def get_value(self, key: Any, spec: TypeSpec) -> Any:
        return self.parser().get_value(key, spec)

    def get_subdocument_bytes(self, key: Any, kind: TypeSpec) -> bytes:
        return self.parser().get_subdocument_bytes(key, kind)

    def parse(self) -> JsonArray | JsonObject:
        return self.parser().parse()

    def __iter__(self) -> Iterator[Proxy]:
        try:
            parser = self.parser()
        except InvalidDataError as e:
            raise FailedIterationError(
                f"Cannot iterate {type(self).__name__}: {e.msg}"
            ) from e
        return iter(parser)

    def _serialize(self, payload: Any) -> bytes:
        try:
            return encode(payload, self.config)
        except InvalidDataError as e:
            logger.debug(
                "Cannot serialize %s payload: %s", type(self).__name__, e
            )
            raise


@dataclass(frozen=True)
class ArrayData(ProviderMixin):
    """Raw bytes expected to hold a JSON array."""

    data: bytes
    config: CodecConfig = field(
        default_factory=CodecConfig, kw_only=True, compare=False
    )

    def __post_init__(self) -> None:
        check_buffer(self)

    def parser(self) -> ArrayParser:
        return ArrayParser(self.data, config=self.config)


@dataclass(frozen=True)
class ObjectData(ProviderMixin):
    """Raw bytes expected to hold a JSON object."""

    data: bytes
    config: CodecConfig = field(
        default_factory=CodecConfig, kw_only=True, compare=False
    )

    def __post_init__(self) -> None:
        check_buffer(self)

    def parser(self) -> ObjectParser:
        return ObjectParser(self.data, config=self.config)


@dataclass(frozen=True)
class ArrayProvider(ProviderMixin):
    """An in-memory sequence presented as a JSON array."""

    items: Sequence[Any]
    config: CodecConfig = field(
        default_factory=CodecConfig, kw_only=True, compare=False
    )

    def __post_init__(self) -> None:
        if isinstance(self.items, str | bytes | bytearray) or not isinstance(
            self.items, Sequence
        ):
            raise TypeError(
                f"items must be a sequence, not {type(self.items).__name__}"
            )
        _check_config(self)

    def parser(self) -> ArrayParser:
        """Serializes the sequence and wraps it in an ArrayParser."""
        return ArrayParser(self._serialize(list(self.items)), config=self.config)


@dataclass(frozen=True)
class ObjectProvider(ProviderMixin):
    """An in-memory mapping with string keys presented as a JSON object."""

    items: Mapping[str, Any]
    config: CodecConfig = field(
        default_factory=CodecConfig, kw_only=True, compare=False
    )

    def __post_init__(self) -> None:
        if not isinstance(self.items, Mapping):
            raise TypeError(
                f"items must be a mapping, not {type(self.items).__name__}"
            )
        _check_config(self)

    def parser(self) -> ObjectParser:
        """Serializes the mapping and wraps it in an ObjectParser."""
        payload = dict(self.items)
        for name in payload:
            if not isinstance(name, str):
                raise InvalidDataError(
                    f"keys must be strings, not {type(name).__name__}"
                )
        return ObjectParser(self._serialize(payload), config=self.config)


@dataclass(frozen=True)
class SetProvider(ProviderMixin):
    """
    An in-memory set presented as a JSON array.

    Element order is the set's own iteration order, which is unspecified
    and may differ between calls.
    """

    items: Set[Any]
    config: CodecConfig = field(
        default_factory=CodecConfig, kw_only=True, compare=False
    )

    def __post_init__(self) -> None:
        if not isinstance(self.items, Set):
            raise TypeError(
                f"items must be a set, not {type(self.items).__name__}"
            )
        _check_config(self)

    def parser(self) -> ArrayParser:
        """Serializes the set as an array and wraps it in an ArrayParser."""
        return ArrayParser(self._serialize(list(self.items)), config=self.config)


def provider_for(
    obj: Any, *, config: CodecConfig | None = None
) -> ArrayProvider | ObjectProvider | SetProvider:
    """
    Picks the provider matching an in-memory collection.

    Raw bytes are ambiguous between array and object; wrap them in
    ArrayData or ObjectData explicitly.
    """
    config = config if config is not None else CodecConfig()
    if isinstance(obj, Mapping):
        return ObjectProvider(obj, config=config)
    elif isinstance(obj, Set):
        return SetProvider(obj, config=config)
    elif isinstance(obj, Sequence) and not isinstance(
        obj, str | bytes | bytearray
    ):
        return ArrayProvider(obj, config=config)
    else:
        msg = f"No JSON provider for objects of type {type(obj).__name__}"
        raise TypeError(msg)
