"""Optional gzip layer around the minified JSON payload"""

import base64
import binascii
import gzip
import logging
import zlib

from webx.core.errors import CorruptPayload


logger = logging.getLogger(__name__)

PREFIX = "z:"


def compress(text: str) -> str:
    """Gzip text and return PREFIX + base64 of the compressed bytes."""
    packed = gzip.compress(text.encode("utf-8"), mtime=0)
    return PREFIX + base64.b64encode(packed).decode("ascii")


def decompress(text: str) -> str:
    """Inverse of compress(); text must carry PREFIX."""
    try:
        packed = base64.b64decode(text[len(PREFIX):], validate=True)
        return gzip.decompress(packed).decode("utf-8")
    except (binascii.Error, OSError, EOFError, zlib.error, UnicodeDecodeError) as e:
        raise CorruptPayload(f"Compressed payload could not be inflated: {e}") from e


def is_compressed(text: str) -> bool:
    return text.startswith(PREFIX)


def maybe_compress(text: str, enabled: bool) -> str:
    """Compress when enabled, otherwise return text unchanged."""
    if not enabled:
        return text
    out = compress(text)
    logger.debug("Compressed payload %d -> %d chars", len(text), len(out))
    return out


def maybe_decompress(text: str) -> str:
    """Decompress when text carries the compression prefix, otherwise return it unchanged."""
    return decompress(text) if is_compressed(text) else text
