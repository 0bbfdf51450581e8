"""
Typed navigation over untyped JSON documents.

Wraps raw JSON bytes (or in-memory collections) in array- or object-rooted
parsers that answer typed lookups, hand out nested documents as new parsers,
and iterate elements as (key, value) proxies, all without a schema.
"""

from jsonnav._codec import Backend
from jsonnav._codec import CodecConfig
from jsonnav._codec import decode
from jsonnav._codec import decode_container
from jsonnav._codec import encode
from jsonnav._errors import FailedIterationError
from jsonnav._errors import InvalidDataError
from jsonnav._errors import InvalidKeyError
from jsonnav._errors import InvalidTypeError
from jsonnav._errors import JSONError
from jsonnav._keys import Index
from jsonnav._keys import Key
from jsonnav._keys import Name
from jsonnav._parser import ArrayParser
from jsonnav._parser import JSONParser
from jsonnav._parser import ObjectParser
from jsonnav._profile import HotPathStats
from jsonnav._profile import clear_hot_path_stats
from jsonnav._profile import get_hot_path_stats
from jsonnav._profile import profiling_enabled
from jsonnav._profile import set_profiling
from jsonnav._provider import ArrayData
from jsonnav._provider import ArrayProvider
from jsonnav._provider import ObjectData
from jsonnav._provider import ObjectProvider
from jsonnav._provider import SetProvider
from jsonnav._provider import provider_for
from jsonnav._proxy import Proxy
from jsonnav._values import JsonValue
from jsonnav._values import Kind
from jsonnav._values import cast
from jsonnav._values import kind_of
from jsonnav._values import matches

__version__ = "0.1.0"

__all__ = [
    "ArrayData",
    "ArrayParser",
    "ArrayProvider",
    "Backend",
    "CodecConfig",
    "FailedIterationError",
    "HotPathStats",
    "Index",
    "InvalidDataError",
    "InvalidKeyError",
    "InvalidTypeError",
    "JSONError",
    "JSONParser",
    "JsonValue",
    "Key",
    "Kind",
    "Name",
    "ObjectData",
    "ObjectParser",
    "ObjectProvider",
    "Proxy",
    "SetProvider",
    "cast",
    "clear_hot_path_stats",
    "decode",
    "decode_container",
    "encode",
    "get_hot_path_stats",
    "kind_of",
    "matches",
    "profiling_enabled",
    "provider_for",
    "set_profiling",
]
