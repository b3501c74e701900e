"""Base62 conversion between byte strings and URL-safe digit strings

The byte sequence is read as one big-endian unsigned integer, so leading zero
bytes are dropped: b"\\x00\\x01" and b"\\x01" share an encoding. Codec payloads
are UTF-8 JSON and never begin with NUL; do not use this for arbitrary binary.
"""

from webx.core.errors import MalformedInput


ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
BASE = len(ALPHABET)
_DIGITS = {ch: i for i, ch in enumerate(ALPHABET)}


def bytes_to_text(data: bytes) -> str:
    """Encode bytes as a base62 string, most significant digit first."""
    num = int.from_bytes(data, "big")
    if num == 0:
        return ALPHABET[0]
    digits = []
    while num:
        num, rem = divmod(num, BASE)
        digits.append(ALPHABET[rem])
    return "".join(reversed(digits))


def text_to_bytes(text: str) -> bytes:
    """Decode a base62 string back to big-endian bytes. Raises MalformedInput on foreign characters."""
    num = 0
    for pos, ch in enumerate(text):
        digit = _DIGITS.get(ch)
        if digit is None:
            raise MalformedInput(f"Invalid base62 character {ch!r} at position {pos}")
        num = num * BASE + digit
    return num.to_bytes((num.bit_length() + 7) // 8, "big")
