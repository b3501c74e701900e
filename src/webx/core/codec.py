"""Blueprint codec: encode documents to URL-safe base62 strings and back

Pipeline (encode):  validate -> alias keys -> dictionary substitution
                    -> {"d", "s"} JSON -> optional gzip ("z:") -> base62
decode runs the inverse and validates the rebuilt document.
"""

import base64
import gzip
import json
import logging
from typing import Any, Mapping, Union
from urllib.parse import parse_qs, urlsplit

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from webx.core.aliases import alias, unalias
from webx.core.compression import maybe_compress, maybe_decompress
from webx.core.dictionary import build_dictionary, restore, substitute
from webx.core.errors import CorruptPayload, MalformedInput, SchemaViolation, WebXError
from webx.core.models import Blueprint
from webx.core.utils.base62 import bytes_to_text, text_to_bytes


logger = logging.getLogger(__name__)

PAYLOAD_KEY = "d"
DICTIONARY_KEY = "s"
URL_SCHEME = "webx"
URL_PARAM = "data"

BlueprintLike = Union[Blueprint, Mapping[str, Any]]


def _dumps(obj: Any) -> str:
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def ensure_blueprint(doc: BlueprintLike) -> Blueprint:
    """Return doc as a schema-checked Blueprint. Raises SchemaViolation."""
    try:
        wire = doc.to_wire() if isinstance(doc, Blueprint) else doc
        return Blueprint.model_validate(wire)
    except ValidationError as e:
        raise SchemaViolation(f"Invalid blueprint: {e.error_count()} error(s)", e.errors(include_url=False)) from e
    except (PydanticSerializationError, ValueError, RecursionError) as e:
        raise SchemaViolation(f"Blueprint is not JSON-serializable: {e}") from e


def minify(blueprint: Blueprint) -> str:
    """Return the {"d", "s"} container JSON for an already-validated blueprint."""
    try:
        wire = blueprint.to_wire()
        dictionary = build_dictionary(wire)
        container = {PAYLOAD_KEY: substitute(alias(wire), dictionary), DICTIONARY_KEY: dictionary}
        return _dumps(container)
    except (ValueError, RecursionError) as e:
        raise SchemaViolation(f"Blueprint is not JSON-serializable: {e}") from e


def expand(text: str) -> dict[str, Any]:
    """Parse container JSON and rebuild the unaliased wire dict. Raises CorruptPayload."""
    try:
        container = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise CorruptPayload(f"Payload is not valid JSON: {e}") from e

    if not isinstance(container, dict) or PAYLOAD_KEY not in container:
        raise CorruptPayload(f"Payload is missing the '{PAYLOAD_KEY}' field")
    dictionary = container.get(DICTIONARY_KEY) or {}
    if not isinstance(dictionary, dict) or not all(isinstance(v, str) for v in dictionary.values()):
        raise CorruptPayload(f"Payload field '{DICTIONARY_KEY}' must map tokens to strings")

    try:
        return unalias(restore(container[PAYLOAD_KEY], dictionary))
    except RecursionError as e:
        raise CorruptPayload("Payload is nested too deeply") from e


def encode(doc: BlueprintLike, compress: bool = False) -> str:
    """Encode a blueprint into a [0-9A-Za-z] string.

    Raises SchemaViolation if doc does not match the blueprint schema.
    """
    blueprint = ensure_blueprint(doc)
    text = maybe_compress(minify(blueprint), compress)
    encoded = bytes_to_text(text.encode("utf-8"))
    logger.debug("Encoded '%s': %d chars (compress=%s)", blueprint.title, len(encoded), compress)
    return encoded


def _decode(payload: str) -> Blueprint:
    raw = text_to_bytes(payload.strip())
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedInput(f"Decoded bytes are not valid UTF-8: {e}") from e
    wire = expand(maybe_decompress(text))
    try:
        return Blueprint.model_validate(wire)
    except ValidationError as e:
        raise SchemaViolation(f"Decoded blueprint is invalid: {e.error_count()} error(s)", e.errors(include_url=False)) from e


def decode(payload: str) -> Blueprint:
    """Decode an encoded string back into a Blueprint.

    Raises MalformedInput, CorruptPayload or SchemaViolation; never returns partial data.
    """
    try:
        return _decode(payload)
    except WebXError as e:
        logger.warning("Failed to decode WebX payload: %s", e)
        raise


def create_url(doc: BlueprintLike, compress: bool = False, scheme: str = URL_SCHEME) -> str:
    """Return a full link of the form webx://page?data=<encoded>."""
    return f"{scheme}://page?{URL_PARAM}={encode(doc, compress=compress)}"


def parse_url(url: str, scheme: str = URL_SCHEME) -> Blueprint:
    """Decode a webx:// link, or a bare encoded string."""
    url = url.strip()
    if not url.startswith(f"{scheme}://"):
        return decode(url)
    values = parse_qs(urlsplit(url).query).get(URL_PARAM)
    if not values:
        raise MalformedInput(f"URL has no '{URL_PARAM}' parameter")
    return decode(values[0])


class PayloadMetrics(BaseModel):
    """Size comparison of plain gzip against the full minify + gzip + base62 pipeline (bytes)."""
    original_size: int
    compressed_size: int
    base64_compressed_size: int
    optimized_size: int
    compression_ratio: float
    advanced_ratio: float
    savings: int
    advanced_savings: int


def payload_metrics(doc: BlueprintLike) -> PayloadMetrics:
    blueprint = ensure_blueprint(doc)
    original = _dumps(blueprint.to_wire()).encode("utf-8")
    compressed = gzip.compress(original, mtime=0)
    b64 = base64.b64encode(compressed)
    optimized = bytes_to_text(gzip.compress(minify(blueprint).encode("utf-8"), mtime=0))

    size = len(original)
    return PayloadMetrics(
        original_size=size,
        compressed_size=len(compressed),
        base64_compressed_size=len(b64),
        optimized_size=len(optimized),
        compression_ratio=round((1 - len(b64) / size) * 100, 1),
        advanced_ratio=round((1 - len(optimized) / size) * 100, 1),
        savings=size - len(b64),
        advanced_savings=size - len(optimized),
    )
