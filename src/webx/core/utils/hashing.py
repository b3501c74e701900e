"""djb2 content hashing for blueprint identity"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from webx.core.models import Blueprint


logger = logging.getLogger(__name__)

HASH_UNAVAILABLE = "UNKNOWN"


@dataclass(frozen=True)
class ContentHash:
    """8-digit uppercase hex hash, or value=None when the document could not be serialized."""
    value: Optional[str]

    @property
    def available(self) -> bool:
        return self.value is not None

    def __str__(self) -> str:
        return self.value if self.value is not None else HASH_UNAVAILABLE


def djb2(data: bytes) -> int:
    """32-bit djb2: h = h * 33 + byte, seeded at 5381."""
    h = 5381
    for b in data:
        h = (h * 33 + b) & 0xFFFFFFFF
    return h


def canonical_content(doc: Union[Blueprint, Mapping[str, Any]]) -> str:
    """Compact JSON of the hashed subset {title, layout, data}; meta and access are excluded."""
    wire = doc.to_wire() if isinstance(doc, Blueprint) else doc
    subset = {"title": wire["title"], "layout": wire["layout"], "data": wire["data"]}
    return json.dumps(subset, separators=(",", ":"), ensure_ascii=False)


def content_hash(doc: Union[Blueprint, Mapping[str, Any]]) -> ContentHash:
    """Hash the render-relevant fields of doc. Never raises; check .available."""
    try:
        content = canonical_content(doc)
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Content hash unavailable: %s", e)
        return ContentHash(None)
    return ContentHash(f"{djb2(content.encode('utf-8')):08X}")
