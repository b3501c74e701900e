"""Unit tests for core/codec.py"""

import json
import re
import sys

import pytest

from webx.core.codec import (
    create_url, decode, encode, ensure_blueprint, expand, minify, parse_url, payload_metrics,
)
from webx.core.compression import PREFIX, compress
from webx.core.errors import CorruptPayload, MalformedInput, SchemaViolation
from webx.core.models import Blueprint
from webx.core.utils.base62 import bytes_to_text, text_to_bytes
from webx.core.utils.hashing import content_hash


def _wrap(text: str) -> str:
    """Base62-encode arbitrary payload text, bypassing the codec."""
    return bytes_to_text(text.encode("utf-8"))


# --- encode / decode ---

@pytest.mark.parametrize("compress", [False, True])
def test_roundtrip(welcome, rich, compress):
    """decode(encode(d)) == d field-for-field, with and without compression."""
    for doc in (welcome, rich):
        assert decode(encode(doc, compress=compress)) == doc


def test_roundtrip_preserves_block_order(rich):
    decoded = decode(encode(rich))
    assert [b.type for b in decoded.content] == [b.type for b in rich.content]


def test_compression_is_transparent(rich):
    assert decode(encode(rich, compress=True)) == decode(encode(rich, compress=False))


@pytest.mark.parametrize("compress", [False, True])
def test_output_alphabet(rich, compress):
    assert re.fullmatch(r"[0-9A-Za-z]+", encode(rich, compress=compress))


def test_encode_is_deterministic(rich):
    assert encode(rich) == encode(rich)
    assert encode(rich, compress=True) == encode(rich, compress=True)


def test_encode_accepts_wire_mapping(welcome):
    assert encode(welcome.to_wire()) == encode(welcome)


def test_compressed_payload_carries_prefix(welcome):
    assert text_to_bytes(encode(welcome, compress=True)).decode("utf-8").startswith(PREFIX)


def test_minimal_example():
    doc = {"title": "Hi", "layout": "minimal", "meta": {"version": "1.0", "created": 0},
           "data": [{"type": "heading", "value": "Hi"}]}
    decoded = decode(encode(doc))
    assert decoded == Blueprint.model_validate(doc)
    assert decoded.to_wire() == doc
    redated = {**doc, "meta": {"version": "1.0", "created": 1234567890}}
    assert content_hash(decoded) == content_hash(Blueprint.model_validate(redated))
    assert re.fullmatch(r"[0-9A-F]{8}", content_hash(decoded).value)


def test_minimal_example_known_encoding():
    """The container format and base62 rendering match links produced by existing clients."""
    doc = {"title": "Hi", "layout": "minimal", "meta": {"version": "1.0", "created": 0},
           "data": [{"type": "heading", "value": "Hi"}]}
    blueprint = ensure_blueprint(doc)
    assert minify(blueprint) == ('{"d":{"t":"Hi","l":{"$":"0"},"d":[{"y":{"$":"1"},"v":"Hi"}],"m":{"vr":"1.0","c":0}},'
                                 '"s":{"0":"minimal","1":"heading"}}')
    assert encode(doc) == (
        "4XAApJj0f4FsLczhjLDNVORzy34hJDJde7NoIS29CO8DvQVvjk1qgSSAeMeMM10B7JrHhnIjyrxlUPCvURwiMiwiAYynMgK0ob6WsF"
        "tZjwPtWHudYAWIxGGYxZaKjOxYeoZPxNO8jlkWVFNYeQHJ7umgQ4hi8Cb"
    )


def test_decode_strips_whitespace(welcome):
    assert decode(f"  {encode(welcome)}\n") == welcome


def test_minify_container_shape(rich):
    """Aliased keys under "d", token dictionary under "s", repeated strings referenced."""
    container = json.loads(minify(rich))
    assert set(container) == {"d", "s"}
    payload, dictionary = container["d"], container["s"]
    assert "t" in payload and "title" not in payload
    token = next(t for t, s in dictionary.items() if s == "Finance Team")
    assert payload["d"][0]["v"] == {"$": token}
    assert payload["d"][3]["v"] == {"$": token}


def test_expand_inverts_minify(rich):
    assert expand(minify(rich)) == rich.to_wire()


def test_container_without_dictionary_decodes():
    """Containers written without a dictionary still decode."""
    container = {"d": {"t": "Old link", "l": "article", "d": [{"y": "paragraph", "v": "Hello"}],
                       "m": {"vr": "1.0", "c": 5}}}
    bp = decode(_wrap(json.dumps(container)))
    assert bp.title == "Old link"
    assert bp.content[0].value == "Hello"


# --- failures ---

def test_encode_schema_violation():
    with pytest.raises(SchemaViolation) as exc:
        encode({"title": "x", "layout": "poster", "data": [], "meta": {"version": "1", "created": 0}})
    assert exc.value.errors


def test_encode_rejects_non_json_props(welcome_wire):
    welcome_wire["data"][0]["props"] = {"when": object()}
    with pytest.raises(SchemaViolation):
        encode(ensure_blueprint(welcome_wire))


@pytest.mark.parametrize("payload", ["abc!", "a-b", "with space", "ünï"])
def test_decode_malformed_characters(payload):
    with pytest.raises(MalformedInput):
        decode(payload)


def test_decode_invalid_utf8():
    with pytest.raises(MalformedInput):
        decode(bytes_to_text(b"\xff\xfe\xfd"))


@pytest.mark.parametrize("text", [
    "not json at all",
    "[1, 2, 3]",
    '{"x": 1}',
    '{"s": {}}',
    '{"d": {}, "s": ["not", "a", "map"]}',
    '{"d": {}, "s": {"0": 5}}',
    '{"d": {"t": {"$": "9"}}, "s": {"0": "hello world"}}',
])
def test_decode_corrupt_payload(text):
    """Valid base62 that does not unpack to the {d, s} container raises CorruptPayload."""
    with pytest.raises(CorruptPayload):
        decode(_wrap(text))


_HEAD = '{"d":{"t":"x","l":"article","m":{"vr":"1.0","c":'
_DEPTH = sys.getrecursionlimit() + 50


@pytest.mark.parametrize("text", [
    _HEAD + "9" * 5000 + '},"d":[]},"s":{}}',
    _HEAD + '0},"d":[{"y":"json","p":{"k":' + "[" * _DEPTH + "]" * _DEPTH + '}}]},"s":{}}',
], ids=["huge-int", "deep-nesting"])
def test_decode_hostile_payload(text):
    """Oversized integers and deep nesting surface as CorruptPayload, not raw interpreter errors."""
    with pytest.raises(CorruptPayload):
        decode(_wrap(text))


def test_encode_deeply_nested_props(welcome_wire):
    nested = []
    for _ in range(_DEPTH):
        nested = [nested]
    welcome_wire["data"][0]["props"] = {"k": nested}
    with pytest.raises(SchemaViolation):
        encode(welcome_wire)


def test_decode_empty_payload():
    with pytest.raises(CorruptPayload):
        decode("0")


def test_decode_bad_compressed_data():
    with pytest.raises(CorruptPayload):
        decode(_wrap(PREFIX + "@@@@"))


@pytest.mark.parametrize("payload", [
    {"t": "x", "l": "poster", "d": [], "m": {"vr": "1", "c": 0}},
    {"t": "x", "l": "article", "d": [{"y": "marquee"}], "m": {"vr": "1", "c": 0}},
    {"t": "x", "l": "article", "d": []},
    {"t": 12, "l": "article", "d": [], "m": {"vr": "1", "c": 0}},
])
def test_decode_schema_violation(payload):
    """A well-formed container holding an invalid blueprint raises SchemaViolation."""
    with pytest.raises(SchemaViolation):
        decode(_wrap(json.dumps({"d": payload, "s": {}})))


def test_decode_schema_violation_inside_compressed():
    text = compress(json.dumps({"d": {"t": "x"}, "s": {}}))
    with pytest.raises(SchemaViolation):
        decode(_wrap(text))


# --- URLs ---

def test_create_url_shape(welcome):
    url = create_url(welcome)
    assert url == f"webx://page?data={encode(welcome)}"


@pytest.mark.parametrize("compress", [False, True])
def test_parse_url_roundtrip(welcome, compress):
    assert parse_url(create_url(welcome, compress=compress)) == welcome


def test_parse_url_accepts_bare_payload(welcome):
    assert parse_url(encode(welcome)) == welcome


def test_parse_url_custom_scheme(welcome):
    assert parse_url(create_url(welcome, scheme="webxs"), scheme="webxs") == welcome


def test_parse_url_without_data_param():
    with pytest.raises(MalformedInput):
        parse_url("webx://page?other=1")


# --- metrics ---

def test_payload_metrics(rich):
    m = payload_metrics(rich)
    assert m.original_size == len(json.dumps(rich.to_wire(), separators=(",", ":"), ensure_ascii=False).encode("utf-8"))
    assert m.base64_compressed_size >= m.compressed_size
    assert m.savings == m.original_size - m.base64_compressed_size
    assert m.advanced_savings == m.original_size - m.optimized_size
    assert m.compression_ratio == round((1 - m.base64_compressed_size / m.original_size) * 100, 1)
