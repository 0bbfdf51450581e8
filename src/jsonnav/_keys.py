"""Lookup keys: integer indices for arrays, string names for objects."""

from dataclasses import dataclass
from typing import Any
from typing import TypeAlias

from jsonnav._errors import InvalidKeyError


@dataclass(frozen=True)
class Index:
    """Position of an element inside a JSON array."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError("index must be an integer")

    def __str__(self) -> str:
        return f"[{self.value}]"


@dataclass(frozen=True)
class Name:
    """Member name inside a JSON object."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError("name must be a string")

    def __str__(self) -> str:
        return f"[{self.value!r}]"


Key: TypeAlias = Index | Name


def index_of(key: Any) -> int:
    """Normalizes an int or Index to a plain int."""
    if isinstance(key, Index):
        return key.value
    if isinstance(key, int) and not isinstance(key, bool):
        return key
    raise InvalidKeyError(
        f"Array elements are addressed by integer index, not {key!r}",
        key=key,
    )


def name_of(key: Any) -> str:
    """Normalizes a str or Name to a plain str."""
    if isinstance(key, Name):
        return key.value
    if isinstance(key, str):
        return key
    raise InvalidKeyError(
        f"Object members are addressed by string name, not {key!r}",
        key=key,
    )
