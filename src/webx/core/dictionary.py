"""Frequency-ranked string dictionary: replace repeated literals with short references

A reference is the one-key map {"$": token}. Literal map keys starting with "$"
are written with an extra "$" so no content map can take the reference shape.
"""

import logging
from collections import Counter
from typing import Any

from webx.core.errors import CorruptPayload


logger = logging.getLogger(__name__)

MARKER = "$"
MIN_STRING_LENGTH = 4       # candidates must be strictly longer
MAX_DICTIONARY_SIZE = 50
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(n: int) -> str:
    """Render a non-negative int in lowercase base 36."""
    if n == 0:
        return "0"
    digits = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def count_strings(obj: Any, counts: Counter | None = None) -> Counter:
    """Count string values longer than MIN_STRING_LENGTH, recursing into lists and map values."""
    if counts is None:
        counts = Counter()
    if isinstance(obj, str):
        if len(obj) > MIN_STRING_LENGTH:
            counts[obj] += 1
    elif isinstance(obj, list):
        for item in obj:
            count_strings(item, counts)
    elif isinstance(obj, dict):
        for value in obj.values():
            count_strings(value, counts)
    return counts


def build_dictionary(obj: Any, max_size: int = MAX_DICTIONARY_SIZE) -> dict[str, str]:
    """Map base-36 rank tokens to the most frequent strings; ties keep first-seen order."""
    ranked = count_strings(obj).most_common(max_size)
    dictionary = {to_base36(i): s for i, (s, _) in enumerate(ranked)}
    logger.debug("Built string dictionary with %d entries", len(dictionary))
    return dictionary


def _escape_key(key: str) -> str:
    return MARKER + key if key.startswith(MARKER) else key


def _unescape_key(key: str) -> str:
    return key[len(MARKER):] if key.startswith(MARKER * 2) else key


def _substitute(obj: Any, reverse: dict[str, str]) -> Any:
    if isinstance(obj, str):
        token = reverse.get(obj)
        return {MARKER: token} if token is not None else obj
    if isinstance(obj, list):
        return [_substitute(item, reverse) for item in obj]
    if isinstance(obj, dict):
        return {_escape_key(k): _substitute(v, reverse) for k, v in obj.items()}
    return obj


def substitute(obj: Any, dictionary: dict[str, str]) -> Any:
    """Replace every string exactly equal to a dictionary entry with its reference."""
    return _substitute(obj, {s: token for token, s in dictionary.items()})


def _is_reference(obj: dict) -> bool:
    return len(obj) == 1 and isinstance(obj.get(MARKER), str)


def restore(obj: Any, dictionary: dict[str, str]) -> Any:
    """Inverse of substitute(). Raises CorruptPayload on a reference to an unknown token."""
    if isinstance(obj, list):
        return [restore(item, dictionary) for item in obj]
    if isinstance(obj, dict):
        if _is_reference(obj):
            token = obj[MARKER]
            if token not in dictionary:
                raise CorruptPayload(f"Reference to unknown dictionary token {token!r}")
            return dictionary[token]
        return {_unescape_key(k): restore(v, dictionary) for k, v in obj.items()}
    return obj
