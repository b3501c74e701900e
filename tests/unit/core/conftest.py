"""Shared fixtures for core unit tests"""

import copy

import pytest

from webx.core.models import Blueprint


WELCOME = {
    "title": "Welcome to WebX",
    "layout": "article",
    "meta": {"version": "1.0", "author": "WebX Protocol", "created": 1700000000000},
    "data": [
        {"type": "heading", "value": "The Future of Hyperlinks"},
        {"type": "paragraph", "value": "This page was rendered from a payload embedded in the URL."},
    ],
}

RICH = {
    "title": "Quarterly Report: Ünïcode ✓",
    "layout": "bank",
    "meta": {
        "version": "1.0", "author": "Finance Team", "created": 1700000000123,
        "category": "finance", "featured": True, "downloads": 42, "to": "board@example.com",
    },
    "ai": {"prompt": "Summarize the quarter", "auto_generate": False},
    "jwt": {
        "token": "eyJhbGciOiJIUzI1NiJ9.e30.signature",
        "expiration": 1800000000000,
        "expireOnFirstView": True,
        "permissions": ["read", "share"],
    },
    "data": [
        {"type": "heading", "value": "Finance Team"},
        {"type": "image", "value": "", "props": {"src": "https://example.com/chart.png", "alt": "Revenue chart",
                                                 "width": 640, "height": 480}},
        {"type": "table", "value": "a,b\n1,2", "props": {"rows": 2, "columns": 2}},
        {"type": "callout", "value": "Finance Team", "props": {"severity": "warning"}},
        {"type": "button", "value": "Download", "props": {"variant": "primary", "url": "https://example.com"}},
        {"type": "card-grid", "props": {"u": "not a url alias", "$": "literal dollar", "~x": ["Finance Team"]}},
        {"type": "qr-code", "value": "https://example.com"},
        {"type": "divider"},
    ],
}


@pytest.fixture(name="welcome")
def welcome_fixture() -> Blueprint:
    return Blueprint.model_validate(WELCOME)


@pytest.fixture(name="rich")
def rich_fixture() -> Blueprint:
    """Blueprint using every optional section, nested props and awkward prop keys."""
    return Blueprint.model_validate(RICH)


@pytest.fixture(name="welcome_wire")
def welcome_wire_fixture() -> dict:
    """A fresh, mutable copy of the welcome blueprint in wire form."""
    return copy.deepcopy(WELCOME)
