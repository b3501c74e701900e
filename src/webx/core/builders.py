"""Convenience constructors for blueprints and content blocks, plus bundled samples"""

import json
import time
from typing import Any, Optional

from webx.core.models import Blueprint, BlueprintMeta, ContentBlock, ContentBlockType, LayoutType


PROTOCOL_VERSION = "1.0"
SAMPLE_CREATED = 1735689600000     # 2025-01-01T00:00:00Z


def now_ms() -> int:
    return int(time.time() * 1000)


def create_blueprint(
    title: str,
    content: list[ContentBlock],
    layout: LayoutType | str = LayoutType.article,
    author: Optional[str] = None,
    category: Optional[str] = None,
    created: Optional[int] = None,
    ) -> Blueprint:
    """Build a minimal valid Blueprint; created defaults to the current time."""
    return Blueprint(
        title=title,
        layout=layout,
        content=content,
        meta=BlueprintMeta(
            version=PROTOCOL_VERSION,
            author=author,
            created=now_ms() if created is None else created,
            category=category,
        ),
    )


def _block(type_: ContentBlockType, value: Optional[str] = None, props: Optional[dict[str, Any]] = None) -> ContentBlock:
    return ContentBlock(type=type_, value=value, props=props)


class block:
    """Factories for common content blocks, e.g. block.heading("Welcome")."""

    @staticmethod
    def heading(text: str) -> ContentBlock:
        return _block(ContentBlockType.heading, text)

    @staticmethod
    def paragraph(text: str) -> ContentBlock:
        return _block(ContentBlockType.paragraph, text)

    @staticmethod
    def image(src: str, alt: str = "") -> ContentBlock:
        return _block(ContentBlockType.image, "", {"src": src, "alt": alt})

    @staticmethod
    def list(items: list[str]) -> ContentBlock:
        """Items are stored comma-joined in value."""
        return _block(ContentBlockType.list, ",".join(items))

    @staticmethod
    def code(code: str, language: Optional[str] = None) -> ContentBlock:
        return _block(ContentBlockType.code, code, {"language": language} if language else None)

    @staticmethod
    def quote(text: str) -> ContentBlock:
        return _block(ContentBlockType.quote, text)

    @staticmethod
    def divider() -> ContentBlock:
        return _block(ContentBlockType.divider)

    @staticmethod
    def button(text: str, variant: Optional[str] = None) -> ContentBlock:
        return _block(ContentBlockType.button, text, {"variant": variant} if variant else None)

    @staticmethod
    def callout(text: str, severity: Optional[str] = None) -> ContentBlock:
        return _block(ContentBlockType.callout, text, {"severity": severity} if severity else None)

    @staticmethod
    def markdown(content: str) -> ContentBlock:
        return _block(ContentBlockType.markdown, content)

    @staticmethod
    def json(data: Any) -> ContentBlock:
        return _block(ContentBlockType.json, json.dumps(data, separators=(",", ":")))


SAMPLE_BLUEPRINTS: dict[str, Blueprint] = {
    "welcome": Blueprint.model_validate({
        "title": "Welcome to WebX",
        "layout": "article",
        "meta": {"version": PROTOCOL_VERSION, "author": "WebX Protocol", "created": SAMPLE_CREATED},
        "data": [
            {"type": "heading", "value": "The Future of Hyperlinks"},
            {"type": "paragraph", "value": "WebX isn't just a link; it's a blueprint. This entire page was "
                                           "rendered client-side from a JSON payload embedded in the URL."},
            {"type": "quote", "value": "No servers. No hosting. Just instructions."},
            {"type": "list", "value": "Decentralized content distribution,Client-side rendering,"
                                      "AI-ready structure,Zero-infrastructure hosting"},
            {"type": "code", "value": "WebX://eyJ0aXRsZSI6IldlYlh... (Payload)"},
        ],
    }),
    "product": Blueprint.model_validate({
        "title": "CyberDeck 2077",
        "layout": "card",
        "meta": {"version": PROTOCOL_VERSION, "author": "TechCorp", "created": SAMPLE_CREATED},
        "data": [
            {"type": "image", "value": "", "props": {
                "src": "https://images.unsplash.com/photo-1550751827-4bd374c3f58b?auto=format&fit=crop&q=80&w=1000",
                "alt": "Cyberpunk Device",
            }},
            {"type": "heading", "value": "CyberDeck 2077"},
            {"type": "paragraph", "value": "The ultimate portable hacking terminal. Features a neural link "
                                           "interface and quantum encryption."},
            {"type": "button", "value": "Pre-order - 5000 Credits", "props": {"variant": "primary"}},
        ],
    }),
    "ai_demo": Blueprint.model_validate({
        "title": "AI Story Generator",
        "layout": "article",
        "meta": {"version": PROTOCOL_VERSION, "author": "AI Bot", "created": SAMPLE_CREATED},
        "ai": {"prompt": "Write a short sci-fi story about a robot discovering a flower in a wasteland.",
               "auto_generate": True},
        "data": [
            {"type": "heading", "value": "A New Beginning"},
            {"type": "paragraph", "value": "[AI Content Will Be Inserted Here]"},
        ],
    }),
}
