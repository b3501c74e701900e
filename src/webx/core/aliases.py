"""Short aliases for blueprint field names, applied recursively to JSON trees

Keys outside KEY_MAP pass through unchanged unless they collide with an alias
token (a prop named "u" would otherwise decode as "url"). Colliding keys, and
keys already starting with ESCAPE, get one ESCAPE prefix that unalias() strips.
"""

from types import MappingProxyType
from typing import Any, Callable, Mapping


ESCAPE = "~"

KEY_MAP: Mapping[str, str] = MappingProxyType({
    "title":         "t",
    "layout":        "l",
    "meta":          "m",
    "data":          "d",
    "type":          "y",
    "value":         "v",
    "props":         "p",
    "version":       "vr",
    "author":        "a",
    "created":       "c",
    "category":      "cat",
    "featured":      "f",
    "downloads":     "dl",
    "prompt":        "pr",
    "auto_generate": "ag",
    "ai":            "ai",
    "src":           "s",
    "alt":           "alt",
    "variant":       "var",
    "rows":          "r",
    "columns":       "col",
    "severity":      "sev",
    "url":           "u",
    "width":         "w",
    "height":        "h",
})

REVERSE_KEY_MAP: Mapping[str, str] = MappingProxyType({v: k for k, v in KEY_MAP.items()})

if len(REVERSE_KEY_MAP) != len(KEY_MAP):
    raise RuntimeError("KEY_MAP is not injective: two field names share an alias")


def _alias_key(key: str) -> str:
    if key in KEY_MAP:
        return KEY_MAP[key]
    if key in REVERSE_KEY_MAP or key.startswith(ESCAPE):
        return ESCAPE + key
    return key


def _unalias_key(key: str) -> str:
    if key.startswith(ESCAPE):
        return key[len(ESCAPE):]
    return REVERSE_KEY_MAP.get(key, key)


def _rename(obj: Any, rename: Callable[[str], str]) -> Any:
    if isinstance(obj, list):
        return [_rename(item, rename) for item in obj]
    if isinstance(obj, dict):
        return {rename(k): _rename(v, rename) for k, v in obj.items()}
    return obj


def alias(obj: Any) -> Any:
    """Replace known field names with their short alias in every nested map."""
    return _rename(obj, _alias_key)


def unalias(obj: Any) -> Any:
    """Inverse of alias()."""
    return _rename(obj, _unalias_key)
