"""
Data model for a creative generation run.

All objects here belong to a single pipeline invocation. ``AdCopy`` and
``AdCreative`` are frozen: once assembled, a creative does not change.
"""

import base64
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Any, Optional

from creativebuilder.core.utils import build_data_url


class CreativeFormat(Enum):
    """Output format requested by the user."""

    SQUARE = "1080x1080 (Square)"
    HORIZONTAL = "1920x1080 (Horizontal)"
    VERTICAL = "1080x1920 (Vertical/Reels)"

    @property
    def aspect_ratio(self) -> str:
        return _ASPECT_RATIOS[self]

    @property
    def key(self) -> str:
        return self.name.lower()

    @classmethod
    def from_key(cls, key: str) -> "CreativeFormat":
        return cls[key.upper()]


_ASPECT_RATIOS = {
    CreativeFormat.SQUARE: "1:1",
    CreativeFormat.HORIZONTAL: "16:9",
    CreativeFormat.VERTICAL: "9:16",
}


class CreativeType(Enum):
    IMAGE = "Image"
    VIDEO = "Video"

    @property
    def key(self) -> str:
        return self.name.lower()

    @classmethod
    def from_key(cls, key: str) -> "CreativeType":
        return cls[key.upper()]


class FontStyle(Enum):
    MODERN = "Modern"
    BOLD = "Bold"
    HANDWRITTEN = "Handwritten"
    ELEGANT = "Elegant"
    PLAYFUL = "Playful"


@dataclass(frozen=True)
class ProductImage:
    """An uploaded product image, base64 encoded."""

    data: str
    mime_type: str

    @classmethod
    def from_bytes(cls, content: bytes, mime_type: str) -> "ProductImage":
        return cls(data=base64.b64encode(content).decode("ascii"), mime_type=mime_type)

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data)

    def to_data_url(self) -> str:
        return build_data_url(self.data, self.mime_type)


@dataclass
class UserInputs:
    """
    Everything the user submits for one run.

    At least one of ``product_description``, ``product_url`` or
    ``product_image`` identifies the product; the orchestrator fills in a
    default description when none of them is present.
    """

    product_description: str = ""
    product_image: Optional[ProductImage] = None
    product_url: Optional[str] = None
    creative_format: CreativeFormat = CreativeFormat.SQUARE
    creative_type: CreativeType = CreativeType.IMAGE
    hook_text: Optional[str] = None
    font_style: Optional[FontStyle] = FontStyle.MODERN

    def has_product_identity(self) -> bool:
        return bool(self.product_description or self.product_url or self.product_image)

    def copy(self, **changes) -> "UserInputs":
        return replace(self, **changes)

    def summary(self) -> Dict[str, Any]:
        """Loggable view of the inputs, without the image payload."""
        return {
            "product_description": self.product_description,
            "product_url": self.product_url,
            "product_image": self.product_image.mime_type if self.product_image else None,
            "creative_format": self.creative_format.value,
            "creative_type": self.creative_type.value,
            "hook_text": self.hook_text,
            "font_style": self.font_style.value if self.font_style else None,
        }


@dataclass(frozen=True)
class AdCopy:
    headline: str
    primary_text: str
    cta: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdCopy":
        """Build from the wire shape ``{"headline", "primaryText", "cta"}``."""
        return cls(
            headline=data["headline"],
            primary_text=data["primaryText"],
            cta=data["cta"],
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "headline": self.headline,
            "primaryText": self.primary_text,
            "cta": self.cta,
        }


@dataclass(frozen=True)
class AdCreative:
    """
    One finished creative: an asset paired with one set of ad copy.

    ``url`` is a ``data:`` URL for images and a local file path for videos.
    """

    url: str
    type: CreativeType
    copy: AdCopy
    variation: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "variation": self.variation,
            "copy": self.copy.to_dict(),
            "url": self.url,
        }
