"""
Failure signals shared by parsers, proxies and providers.

Each error also derives from the closest built-in exception so generic
handlers (``except ValueError`` and friends) keep working.
"""

from typing import TYPE_CHECKING
from typing import Any

if TYPE_CHECKING:
    from jsonnav._values import Kind


class JSONError(Exception):
    """Base class for every navigation failure."""

    def __init__(self, msg: str) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")

        self.msg = msg
        super().__init__(msg)


class InvalidDataError(JSONError, ValueError):
    """
    Raised when bytes are not well-formed JSON or have the wrong top-level shape.

    Also covers in-memory collections that cannot be serialized.
    """


class InvalidKeyError(JSONError, LookupError):
    """
    Raised when an index is out of range or a name is absent.

    A key of the wrong variant for the parser (a name given to an array
    parser, say) is reported the same way.
    """

    def __init__(self, msg: str, key: Any = None) -> None:
        super().__init__(msg)
        self.key = key


class InvalidTypeError(JSONError, TypeError):
    """Raised when a value exists but its kind differs from the requested type."""

    def __init__(
        self,
        msg: str,
        key: Any = None,
        expected: Any = None,
        actual: "Kind | None" = None,
    ) -> None:
        super().__init__(msg)
        self.key = key
        self.expected = expected
        self.actual = actual


class FailedIterationError(JSONError, RuntimeError):
    """Raised when a provider cannot produce a parser to iterate over."""
