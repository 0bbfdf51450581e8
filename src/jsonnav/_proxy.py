"""Per-element handle produced while iterating a parser or provider."""

from dataclasses import dataclass
from dataclasses import field
from typing import TYPE_CHECKING
from typing import Any

from jsonnav._codec import CodecConfig
from jsonnav._codec import encode
from jsonnav._errors import InvalidTypeError
from jsonnav._keys import Key
from jsonnav._values import JsonValue
from jsonnav._values import Kind
from jsonnav._values import TypeSpec
from jsonnav._values import cast
from jsonnav._values import kind_of

if TYPE_CHECKING:
    from jsonnav._parser import ArrayParser
    from jsonnav._parser import ObjectParser


@dataclass(frozen=True)
class Proxy:
    """
    A key and the decoded element stored under it.

    The element comes from the tree decoded for this iteration only, so
    typed extraction needs no further decoding. Mismatches yield None
    rather than raising.
    """

    key: Key
    value: JsonValue
    config: CodecConfig = field(
        default_factory=CodecConfig, kw_only=True, compare=False, repr=False
    )

    @property
    def kind(self) -> Kind:
        return kind_of(self.value)

    def get(self, spec: TypeSpec) -> Any:
        """Returns the element as spec, or None on mismatch."""
        try:
            return cast(self.value, spec, key=self.key)
        except InvalidTypeError:
            return None

    def get_with_key(self, spec: TypeSpec) -> tuple[Key, Any]:
        """Same as get, paired with the key."""
        return self.key, self.get(spec)

    def as_array_parser(self) -> "ArrayParser | None":
        """Re-encodes an array element into a fresh parser."""
        from jsonnav._parser import ArrayParser

        if self.kind is not Kind.ARRAY:
            return None
        return ArrayParser(encode(self.value, self.config), config=self.config)

    def as_object_parser(self) -> "ObjectParser | None":
        """Re-encodes an object element into a fresh parser."""
        from jsonnav._parser import ObjectParser

        if self.kind is not Kind.OBJECT:
            return None
        return ObjectParser(encode(self.value, self.config), config=self.config)
