"""
Provider tests.

Validates byte-backed and in-memory providers expose the parser surface,
serialize on demand, and report unserializable payloads.
"""

from collections import OrderedDict
from types import MappingProxyType
from typing import Any

import pytest

import jsonnav
from jsonnav._parser import NavigationMixin
from jsonnav._provider import ProviderMixin


def test_set_provider_iteration(config: jsonnav.CodecConfig) -> None:
    """
    Validates a set iterates once per element, in no particular order.
    """
    provider = jsonnav.SetProvider({0, 1, (2, 3)}, config=config)
    proxies: list[jsonnav.Proxy] = []

    provider.iterate(proxies.append)

    assert len(proxies) == 3
    assert sorted(p.key.value for p in proxies) == [0, 1, 2]
    integers = [p.get(int) for p in proxies if p.get(int) is not None]
    assert sorted(integers) == [0, 1]
    containers = [p for p in proxies if p.get(int) is None]
    assert len(containers) == 1
    assert containers[0].get(list[int]) == [2, 3]


def test_array_provider(config: jsonnav.CodecConfig) -> None:
    """
    Validates an in-memory list navigates like its JSON encoding.
    """
    provider = jsonnav.ArrayProvider([0, 1, {"2": True}], config=config)

    assert provider.get_value(0, int) == 0
    assert provider.value_at(2, bool) is None
    member = provider.object_at(2)
    assert member is not None
    assert member.get_value("2", bool) is True
    assert provider.parse() == [0, 1, {"2": True}]
    assert provider.get_subdocument_bytes(2, dict) == b'{"2":true}'

    with pytest.raises(jsonnav.InvalidKeyError):
        provider.get_value(3, int)


def test_tuple_and_nested_tuples() -> None:
    """
    Validates tuples serialize as arrays at any depth.
    """
    provider = jsonnav.ArrayProvider((1, (2, 3)))

    inner = provider.array_at(1)
    assert inner is not None
    assert inner.get_value(0, int) == 2


def test_object_provider(config: jsonnav.CodecConfig) -> None:
    """
    Validates an in-memory mapping navigates like its JSON encoding.
    """
    provider = jsonnav.ObjectProvider(
        {"name": "x", "sizes": [1, 2], "meta": {"ok": True}}, config=config
    )

    assert provider.get_value("name", str) == "x"
    sizes = provider.array_at("sizes")
    assert sizes is not None
    assert sizes.get_value(1, int) == 2
    assert provider.value_at("missing", str) is None
    assert isinstance(provider.parser(), jsonnav.ObjectParser)

    names = []
    provider.iterate(lambda proxy: names.append(proxy.key))
    assert sorted(n.value for n in names) == ["meta", "name", "sizes"]


@pytest.mark.parametrize(
    "mapping",
    [OrderedDict(a=1), MappingProxyType({"a": 1})],
    ids=["ordered_dict", "mapping_proxy"],
)
def test_object_provider_accepts_mappings(mapping: Any) -> None:
    """
    Validates any Mapping is accepted, not only dict.
    """
    assert jsonnav.ObjectProvider(mapping).get_value("a", int) == 1


def test_reserializes_on_each_call() -> None:
    """
    Validates providers reflect later changes to the wrapped collection.
    """
    items = [1]
    provider = jsonnav.ArrayProvider(items)
    assert provider.value_at(1, int) is None

    items.append(2)

    assert provider.get_value(1, int) == 2


def test_unserializable_payload(config: jsonnav.CodecConfig) -> None:
    """
    Validates each tier reports a payload that cannot be serialized its own way.
    """
    provider = jsonnav.ArrayProvider([1, object()], config=config)

    with pytest.raises(jsonnav.InvalidDataError):
        provider.parser()
    with pytest.raises(jsonnav.InvalidDataError):
        provider.get_value(0, int)
    assert provider.value_at(0, int) is None
    assert provider.array_at(0) is None

    with pytest.raises(jsonnav.FailedIterationError) as exc_info:
        provider.iterate(lambda proxy: None)
    assert isinstance(exc_info.value.__cause__, jsonnav.InvalidDataError)

    with pytest.raises(jsonnav.FailedIterationError):
        iter(provider)


def test_non_string_keys(config: jsonnav.CodecConfig) -> None:
    """
    Validates mappings with non-string keys cannot become JSON objects.
    """
    provider = jsonnav.ObjectProvider({1: "a"}, config=config)

    with pytest.raises(jsonnav.InvalidDataError, match="keys must be strings"):
        provider.parser()
    with pytest.raises(jsonnav.FailedIterationError):
        provider.iterate(lambda proxy: None)


def test_byte_providers() -> None:
    """
    Validates byte-backed providers wrap their buffer without decoding it.
    """
    array = jsonnav.ArrayData(b'[1,{"a":2}]')
    obj = jsonnav.ObjectData(bytearray(b'{"a":[1]}'))

    assert array.parser() == jsonnav.ArrayParser(b'[1,{"a":2}]')
    assert obj.parser() == jsonnav.ObjectParser(b'{"a":[1]}')
    assert array.value_at(0, int) == 1
    assert obj.array_at("a") is not None

    # Construction never decodes, so bad bytes only fail on access
    broken = jsonnav.ArrayData(b"{oops")
    assert isinstance(broken.parser(), jsonnav.ArrayParser)
    assert broken.value_at(0, int) is None
    with pytest.raises(jsonnav.InvalidDataError):
        broken.iterate(lambda proxy: None)

    with pytest.raises(TypeError):
        jsonnav.ArrayData("[1]")  # type: ignore[arg-type]


def test_provider_iteration_stops_on_callback_error() -> None:
    """
    Validates callback failures propagate out of provider iteration.
    """
    seen = []

    def callback(proxy: jsonnav.Proxy) -> None:
        seen.append(proxy.key)
        raise KeyError("boom")

    with pytest.raises(KeyError):
        jsonnav.ArrayProvider([1, 2, 3]).iterate(callback)

    assert seen == [jsonnav.Index(0)]


@pytest.mark.parametrize(
    "obj,provider_type",
    [
        ({"a": 1}, jsonnav.ObjectProvider),
        ({1, 2}, jsonnav.SetProvider),
        (frozenset({1}), jsonnav.SetProvider),
        ([1], jsonnav.ArrayProvider),
        ((1,), jsonnav.ArrayProvider),
    ],
)
def test_provider_for(obj: Any, provider_type: type) -> None:
    """
    Validates provider_for picks the provider matching the collection.
    """
    provider = jsonnav.provider_for(obj)

    assert isinstance(provider, provider_type)
    assert len(list(provider)) == len(obj)


@pytest.mark.parametrize("obj", ["text", b"[1]", 5, None])
def test_provider_for_rejects(obj: Any) -> None:
    """
    Validates scalars, strings and raw bytes have no in-memory provider.
    """
    with pytest.raises(TypeError, match="No JSON provider"):
        jsonnav.provider_for(obj)


def test_provider_for_passes_config() -> None:
    """
    Validates the chosen provider carries the given config.
    """
    config = jsonnav.CodecConfig(backend="json")

    provider = jsonnav.provider_for([1], config=config)

    assert provider.config is config
    assert provider.parser().config is config


@pytest.mark.parametrize(
    "factory,payload",
    [
        (jsonnav.ArrayProvider, "abc"),
        (jsonnav.ArrayProvider, {"a": 1}),
        (jsonnav.ObjectProvider, [("a", 1)]),
        (jsonnav.SetProvider, [1, 2]),
    ],
)
def test_payload_type_checked(factory: Any, payload: Any) -> None:
    """
    Validates providers refuse payloads of the wrong collection type.
    """
    with pytest.raises(TypeError):
        factory(payload)


@pytest.mark.parametrize("key", [1, True, None])
def test_nested_non_string_keys(key: Any, config: jsonnav.CodecConfig) -> None:
    """
    Validates a non-string key below the top level fails the same way on
    every backend instead of being written out as a string.
    """
    provider = jsonnav.ArrayProvider([{key: "a"}], config=config)

    with pytest.raises(jsonnav.InvalidDataError):
        provider.parser()
    assert provider.object_at(0) is None
    with pytest.raises(jsonnav.FailedIterationError):
        provider.iterate(lambda proxy: None)

    nested = jsonnav.ObjectProvider({"inner": {key: "a"}}, config=config)
    with pytest.raises(jsonnav.InvalidDataError):
        nested.get_value("inner", dict)


def test_non_finite_payload(config: jsonnav.CodecConfig) -> None:
    """
    Validates NaN in a payload fails on every backend rather than becoming null.
    """
    provider = jsonnav.SetProvider({1.0, float("nan")}, config=config)

    with pytest.raises(jsonnav.InvalidDataError):
        provider.parser()
    assert provider.value_at(0, float) is None


def test_abstract_bases_cannot_be_instantiated() -> None:
    """
    Validates the shared bases require their subclasses to supply a parser.
    """
    with pytest.raises(TypeError):
        ProviderMixin()  # type: ignore[abstract]
    with pytest.raises(TypeError):
        NavigationMixin()  # type: ignore[abstract]

    class Incomplete(ProviderMixin):
        pass

    with pytest.raises(TypeError):
        Incomplete()  # type: ignore[abstract]
