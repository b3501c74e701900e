"""Codec error taxonomy"""


class WebXError(Exception):
    """Base class for all blueprint codec failures."""


class SchemaViolation(WebXError):
    """A document does not match the blueprint schema."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        super().__init__(message)
        self.errors = errors or []


class MalformedInput(WebXError):
    """An encoded string has characters outside the base62 alphabet or is not UTF-8."""


class CorruptPayload(WebXError):
    """Decoded text is not a valid {d, s} container or fails to decompress."""
