"""WebX: compact, URL-safe encoding of page blueprints"""

from webx.core.codec import create_url, decode, encode, parse_url
from webx.core.errors import CorruptPayload, MalformedInput, SchemaViolation, WebXError
from webx.core.models import Blueprint, ContentBlock
from webx.core.utils.hashing import content_hash

__all__ = [
    "Blueprint", "ContentBlock",
    "encode", "decode", "create_url", "parse_url", "content_hash",
    "WebXError", "SchemaViolation", "MalformedInput", "CorruptPayload",
]
