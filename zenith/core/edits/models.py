"""
Edit value types and the factories that create them.
"""
import base64
import itertools
import logging
import time
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping, Tuple, Union

import fitz  # PyMuPDF

from zenith import config
from zenith.core.errors import InvalidImageKind

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
JPEG_SIGNATURE = b"\xff\xd8\xff"


class EditKind(Enum):
    TEXT = "text"
    IMAGE = "image"


class ImageKind(Enum):
    PNG = "png"
    JPEG = "jpeg"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"


def detect_image_kind(data: bytes) -> ImageKind:
    """JPEG when the payload carries the JPEG signature, PNG otherwise."""
    if data.startswith(JPEG_SIGNATURE):
        return ImageKind.JPEG
    return ImageKind.PNG


def read_image_size(data: bytes) -> Tuple[int, int]:
    """
    Decode an image payload far enough to learn its natural size.

    Args:
        data: Raw PNG or JPEG bytes

    Returns:
        Tuple of (width, height) in pixels

    Raises:
        InvalidImageKind: If the payload is not a decodable PNG or JPEG
    """
    if not (data.startswith(PNG_SIGNATURE) or data.startswith(JPEG_SIGNATURE)):
        raise InvalidImageKind("Image is neither PNG nor JPEG")

    try:
        pix = fitz.Pixmap(data)
    except Exception as e:
        raise InvalidImageKind(f"Could not decode image: {e}") from e

    if pix.width <= 0 or pix.height <= 0:
        raise InvalidImageKind("Image has no pixels")
    return pix.width, pix.height


class EditIdGenerator:
    """Hands out ids that are never repeated within a session."""

    def __init__(self):
        self._session = format(int(time.time() * 1000), "x")
        self._counter = itertools.count(1)

    def next_id(self) -> str:
        return f"{self._session}-{next(self._counter)}"


@dataclass(frozen=True)
class BaseEdit:
    """Geometry shared by every edit, in unscaled page points (top-left origin)."""

    kind: ClassVar[EditKind]

    id: str
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Edit {self.id} needs a positive size, got {self.width}x{self.height}"
            )

    def merged(self, patch: Mapping[str, Any]) -> "BaseEdit":
        """
        Return a copy with the patch applied.

        Only fields of this variant are taken from the patch; the id and the
        kind never change. Returns ``self`` when nothing changes.
        """
        allowed = {f.name for f in fields(self)} - {"id"}
        changes = {
            key: value
            for key, value in patch.items()
            if key in allowed and getattr(self, key) != value
        }
        ignored = set(patch) - allowed
        if ignored:
            logger.debug("Ignoring patch keys %s for %s edit", sorted(ignored), self.kind.value)
        if not changes:
            return self
        return replace(self, **changes)

    def _geometry_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.kind.value,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class TextEdit(BaseEdit):
    kind: ClassVar[EditKind] = EditKind.TEXT

    text: str = config.DEFAULT_TEXT
    font_size: float = config.DEFAULT_FONT_SIZE
    font_family: str = config.DEFAULT_FONT_FAMILY

    def __post_init__(self):
        super().__post_init__()
        if self.font_size <= 0:
            raise ValueError(f"Edit {self.id} needs a positive font size")

    def to_dict(self) -> Dict[str, Any]:
        data = self._geometry_dict()
        data.update(
            text=self.text,
            fontSize=self.font_size,
            fontFamily=self.font_family,
        )
        return data


@dataclass(frozen=True)
class ImageEdit(BaseEdit):
    kind: ClassVar[EditKind] = EditKind.IMAGE

    src: bytes = b""

    @property
    def image_kind(self) -> ImageKind:
        return detect_image_kind(self.src)

    def to_dict(self) -> Dict[str, Any]:
        data = self._geometry_dict()
        encoded = base64.b64encode(self.src).decode("ascii")
        data["src"] = f"data:{self.image_kind.mime_type};base64,{encoded}"
        return data


Edit = Union[TextEdit, ImageEdit]


def edit_to_dict(edit: Edit) -> Dict[str, Any]:
    """Serialize an edit for JSON storage and equality checks."""
    if isinstance(edit, (TextEdit, ImageEdit)):
        return edit.to_dict()
    raise TypeError(f"Unsupported edit type: {type(edit).__name__}")


def edit_from_dict(data: Mapping[str, Any]) -> Edit:
    """Create an edit from its dictionary form."""
    kind = EditKind(data["type"])
    geometry = dict(
        id=str(data["id"]),
        x=data["x"],
        y=data["y"],
        width=data["width"],
        height=data["height"],
    )

    if kind is EditKind.TEXT:
        return TextEdit(
            text=data.get("text", config.DEFAULT_TEXT),
            font_size=data.get("fontSize", config.DEFAULT_FONT_SIZE),
            font_family=data.get("fontFamily", config.DEFAULT_FONT_FAMILY),
            **geometry,
        )
    if kind is EditKind.IMAGE:
        src = data["src"]
        # Stored as a data URL; only the base64 payload matters
        _, _, payload = src.partition("base64,")
        return ImageEdit(src=base64.b64decode(payload), **geometry)
    raise TypeError(f"Unsupported edit kind: {kind}")


def create_text_edit(ids: EditIdGenerator, x: float, y: float) -> TextEdit:
    """
    Create a default text edit anchored at a page position.

    Args:
        ids: Session id generator
        x: Left edge in page points
        y: Top edge in page points
    """
    return TextEdit(
        id=ids.next_id(),
        x=x,
        y=y,
        width=config.DEFAULT_TEXT_WIDTH,
        height=config.DEFAULT_TEXT_HEIGHT,
        text=config.DEFAULT_TEXT,
        font_size=config.DEFAULT_FONT_SIZE,
        font_family=config.DEFAULT_FONT_FAMILY,
    )


def create_image_edit(ids: EditIdGenerator, natural_width: float,
                      natural_height: float, data: bytes) -> ImageEdit:
    """
    Create an image edit sized to the default width with its aspect kept.

    New images always land at the fixed offset, not at the click position.
    """
    if natural_width <= 0 or natural_height <= 0:
        raise InvalidImageKind("Image has no pixels")

    aspect_ratio = natural_width / natural_height
    width = config.DEFAULT_IMAGE_WIDTH
    x, y = config.IMAGE_OFFSET
    return ImageEdit(
        id=ids.next_id(),
        x=x,
        y=y,
        width=width,
        height=width / aspect_ratio,
        src=data,
    )


def image_edit_from_bytes(ids: EditIdGenerator, data: bytes) -> ImageEdit:
    """Read the natural size of an image payload and wrap it in an edit."""
    natural_width, natural_height = read_image_size(data)
    return create_image_edit(ids, natural_width, natural_height, data)
