"""Data models for the reconstructed presentation: parts, assets, positions, styles, elements and slides."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Optional, Union

from slides2scene.internals import constants


# region Enums
class PartKind(Enum):
    """What kind of payload an archive part holds."""

    XML = "xml"
    BINARY = "binary"


class RelationshipKind(Enum):
    """Relationship classification. Only image relationships are kept by the resolver."""

    IMAGE = "image"
    OTHER = "other"


class TextAlign(Enum):
    """Paragraph alignment values we can express."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


class StageName(Enum):
    """Render pipeline stages, in the order they are attempted."""

    COMBINED = "combined"
    IMAGE_ONLY = "image_only"
    TEXT_ONLY = "text_only"
    FALLBACK = "fallback"


# endregion


# region PresentationDocument
@dataclass(frozen=True)
class PresentationDocument:
    """The input: a named byte blob that should be an OOXML presentation package."""

    name: str
    content: bytes = field(repr=False)

    @property
    def size(self) -> int:
        """Size of the blob in bytes."""
        return len(self.content)


# endregion


# region Relationship
@dataclass(frozen=True)
class Relationship:
    """One entry of a slide's relationship part: a symbolic id pointing at a part path."""

    rel_id: str
    target: str
    kind: RelationshipKind


# endregion


# region MediaAsset
@dataclass(frozen=True)
class MediaAsset:
    """An image part materialized in memory. Shared, read-only, by every element that references it."""

    name: str  # Path relative to the media folder, e.g. "image1.png"
    content: bytes = field(repr=False)
    content_type: str = "application/octet-stream"

    @property
    def handle(self) -> str:
        """Stable reference for this asset: its part path inside the package."""
        return f"{constants.MEDIA_DIR}{self.name}"

    @property
    def byte_size(self) -> int:
        return len(self.content)

    def to_data_uri(self) -> str:
        """Inline the asset as a data: URI so a standalone renderer can show it."""
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"


# endregion


# region Position
@dataclass(frozen=True)
class Position:
    """On-canvas placement in display pixels."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Position width/height must be non-negative, got {self.width}x{self.height}"
            )

    @classmethod
    def fallback(cls) -> Position:
        """The position used when a shape carries no transform at all."""
        return cls(
            x=constants.FALLBACK_X_PX,
            y=constants.FALLBACK_Y_PX,
            width=constants.FALLBACK_WIDTH_PX,
            height=constants.FALLBACK_HEIGHT_PX,
        )

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height


# endregion


# region StyleSet
@dataclass(frozen=True)
class StyleSet:
    """
    Sparse bag of text formatting attributes over a fixed schema.

    A value of None means "not set at this level", so a later layer in
    merge_styles() can never be clobbered by an earlier one that simply said nothing.
    """

    alignment: Optional[TextAlign] = None
    margin_left: Optional[int] = None  # px
    font_size: Optional[float] = None  # points
    font_family: Optional[str] = None
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None
    strikethrough: Optional[bool] = None
    color: Optional[str] = None  # "#RRGGBB"
    background_color: Optional[str] = None  # "#RRGGBB"

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def as_dict(self) -> dict[str, object]:
        """Only the attributes that are actually set, enums flattened to their values."""
        result: dict[str, object] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            result[f.name] = value.value if isinstance(value, Enum) else value
        return result


def merge_styles(*layers: StyleSet) -> StyleSet:
    """
    Precedence-ordered merge: every layer overrides the ones before it, key by key.

    Call as merge_styles(defaults, paragraph_style, run_style).
    """
    merged: dict[str, object] = {}
    for layer in layers:
        for f in fields(StyleSet):
            value = getattr(layer, f.name)
            if value is not None:
                merged[f.name] = value
    return StyleSet(**merged)  # type: ignore[arg-type]


# endregion


# region TextSegment / FormattedText
@dataclass(frozen=True)
class TextSegment:
    """A piece of uniformly styled text, or a line separator between paragraphs."""

    text: str
    style: StyleSet = field(default_factory=StyleSet)
    is_line_break: bool = False

    @classmethod
    def line_break(cls) -> TextSegment:
        return cls(text=" ", is_line_break=True)


@dataclass
class FormattedText:
    """Plain text plus the styled segments it was built from."""

    text: str = ""
    segments: list[TextSegment] = field(default_factory=list)

    def append(self, segment: TextSegment) -> None:
        self.segments.append(segment)
        self.text += segment.text


# endregion


# region Elements
@dataclass(frozen=True)
class TextElement:
    """A positioned block of formatted text."""

    content: str
    segments: tuple[TextSegment, ...]
    position: Position
    order: float
    is_title: bool = False

    @property
    def kind(self) -> str:
        return "text"


@dataclass(frozen=True)
class ImageElement:
    """A positioned raster image."""

    asset: MediaAsset
    alt: str
    position: Position
    order: float

    @property
    def kind(self) -> str:
        return "image"


Element = Union[TextElement, ImageElement]
# endregion


# region Bounds
@dataclass(frozen=True)
class Bounds:
    """The canvas a slide is drawn on, in the same pixel space as element positions."""

    min_x: int
    min_y: int
    width: int
    height: int

    @property
    def max_x(self) -> int:
        return self.min_x + self.width

    @property
    def max_y(self) -> int:
        return self.min_y + self.height


# endregion


# region Slide
@dataclass
class Slide:
    """One reconstructed slide: title, elements in stacking order, and its canvas."""

    index: int  # 1-based, contiguous
    title: str
    elements: list[Element] = field(default_factory=list)
    bounds: Bounds = field(
        default_factory=lambda: Bounds(
            0, 0, constants.EMPTY_CANVAS_WIDTH_PX, constants.EMPTY_CANVAS_HEIGHT_PX
        )
    )
    source_part: str | None = None
    is_placeholder: bool = False

    @property
    def text_elements(self) -> list[TextElement]:
        return [e for e in self.elements if isinstance(e, TextElement)]

    @property
    def image_elements(self) -> list[ImageElement]:
        return [e for e in self.elements if isinstance(e, ImageElement)]


# endregion


# region Stage outputs
@dataclass
class TextSlide:
    """Text-only rendition of a slide: no formatting, no positions."""

    index: int
    title: str
    paragraphs: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FallbackSummary:
    """Static information card shown when nothing could be extracted."""

    file_name: str
    file_size: int
    file_size_label: str
    file_type: str
    guidance: tuple[str, ...]


@dataclass(frozen=True)
class StageAttempt:
    """A stage that was tried and failed before the pipeline committed to a later one."""

    stage: StageName
    error_type: str
    message: str


@dataclass
class RenderResult:
    """What the render pipeline hands to the presentation surface."""

    stage: StageName
    document_name: str
    slides: list[Slide] = field(default_factory=list)
    gallery: list[MediaAsset] = field(default_factory=list)
    text_slides: list[TextSlide] = field(default_factory=list)
    summary: FallbackSummary | None = None
    attempts: list[StageAttempt] = field(default_factory=list)


# endregion
