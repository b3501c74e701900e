"""Blueprint document models and schema validation"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, ValidationError


Number = Union[StrictInt, StrictFloat]


class ContentBlockType(str, Enum):
    """Restrict content blocks to the renderable element types"""
    heading = "heading"
    paragraph = "paragraph"
    image = "image"
    list = "list"
    code = "code"
    quote = "quote"
    divider = "divider"
    input = "input"
    button = "button"
    tab = "tab"
    toggle = "toggle"
    embed = "embed"
    table = "table"
    metric = "metric"
    chart = "chart"
    json = "json"
    formula = "formula"
    video = "video"
    audio = "audio"
    callout = "callout"
    card_grid = "card-grid"
    timeline = "timeline"
    qr_code = "qr-code"
    markdown = "markdown"


class LayoutType(str, Enum):
    """Rendering family selected by a blueprint; opaque to the codec"""
    article = "article"
    card = "card"
    newsfeed = "newsfeed"
    gallery = "gallery"
    form = "form"
    minimal = "minimal"
    bank = "bank"
    messaging = "messaging"
    email = "email"
    postcard = "postcard"
    video_call = "video-call"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ContentBlock(_WireModel):
    """One renderable unit; `value` is interpreted according to `type`."""
    type: ContentBlockType
    value: Optional[StrictStr] = None
    props: Optional[dict[str, Any]] = None


class AIHint(_WireModel):
    prompt: StrictStr
    auto_generate: Optional[StrictBool] = None


class AccessGrant(_WireModel):
    """Bearer token plus expiry hints. Transported verbatim, never enforced here.

    expire_on_first_view cannot be honoured by a stateless codec; a separate
    ledger has to record first access.
    """
    token: StrictStr
    expiration: Optional[Number] = None
    expire_on_first_view: Optional[StrictBool] = Field(default=None, alias="expireOnFirstView")
    permissions: Optional[list[StrictStr]] = None


class BlueprintMeta(_WireModel):
    version: StrictStr
    author: Optional[StrictStr] = None
    created: Number = Field(..., description="Milliseconds since epoch; excluded from the content hash")
    category: Optional[StrictStr] = None
    featured: Optional[StrictBool] = None
    downloads: Optional[Number] = None
    to: Optional[StrictStr] = None


class Blueprint(_WireModel):
    """A page blueprint: the unit the codec encodes and decodes."""
    title: StrictStr
    layout: LayoutType
    content: list[ContentBlock] = Field(..., alias="data")
    ai: Optional[AIHint] = None
    access: Optional[AccessGrant] = Field(default=None, alias="jwt")
    meta: BlueprintMeta

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-ready dict using protocol field names, unset optionals omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass
class ValidationResult:
    success: bool
    blueprint: Optional[Blueprint] = None
    errors: list[dict] = field(default_factory=list)


def validate_blueprint(obj: Any) -> ValidationResult:
    """Validate obj against the blueprint schema without raising."""
    try:
        return ValidationResult(success=True, blueprint=Blueprint.model_validate(obj))
    except ValidationError as e:
        return ValidationResult(success=False, errors=e.errors(include_url=False))
