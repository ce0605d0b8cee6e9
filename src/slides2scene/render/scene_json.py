"""Serialize a RenderResult into a JSON scene graph."""

import json
import logging
from typing import Any

from slides2scene.models import (
    Bounds,
    Element,
    ImageElement,
    MediaAsset,
    Position,
    RenderResult,
    Slide,
    TextElement,
    TextSegment,
)

log = logging.getLogger("slides2scene")


# region to_dict helpers
def _position(position: Position) -> dict[str, int]:
    return {
        "x": position.x,
        "y": position.y,
        "width": position.width,
        "height": position.height,
    }


def _bounds(bounds: Bounds) -> dict[str, int]:
    return {
        "min_x": bounds.min_x,
        "min_y": bounds.min_y,
        "width": bounds.width,
        "height": bounds.height,
    }


def _asset(asset: MediaAsset, include_data: bool) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": asset.name,
        "handle": asset.handle,
        "content_type": asset.content_type,
        "byte_size": asset.byte_size,
    }
    if include_data:
        data["data_uri"] = asset.to_data_uri()
    return data


def _segment(segment: TextSegment) -> dict[str, Any]:
    if segment.is_line_break:
        return {"line_break": True}
    return {"text": segment.text, "style": segment.style.as_dict()}


def element_to_dict(element: Element) -> dict[str, Any]:
    """One element as a JSON-ready dict. Images reference their asset by handle."""
    if isinstance(element, ImageElement):
        return {
            "kind": element.kind,
            "asset": element.asset.handle,
            "alt": element.alt,
            "position": _position(element.position),
            "order": element.order,
        }
    if isinstance(element, TextElement):
        return {
            "kind": element.kind,
            "content": element.content,
            "segments": [_segment(s) for s in element.segments],
            "position": _position(element.position),
            "order": element.order,
            "is_title": element.is_title,
        }
    raise TypeError(f"Unsupported element type: {type(element).__name__}")


def slide_to_dict(slide: Slide) -> dict[str, Any]:
    return {
        "index": slide.index,
        "title": slide.title,
        "is_placeholder": slide.is_placeholder,
        "source_part": slide.source_part,
        "bounds": _bounds(slide.bounds),
        "elements": [element_to_dict(e) for e in slide.elements],
    }


# endregion


# region result_to_dict
def result_to_dict(result: RenderResult, include_media_data: bool = False) -> dict[str, Any]:
    """
    The whole render result as plain data.

    Args:
        result: Output of the render pipeline selector.
        include_media_data: Inline every gallery asset as a data: URI.
    """
    data: dict[str, Any] = {
        "document": result.document_name,
        "stage": result.stage.value,
        "attempts": [
            {
                "stage": attempt.stage.value,
                "error_type": attempt.error_type,
                "message": attempt.message,
            }
            for attempt in result.attempts
        ],
        "slides": [slide_to_dict(s) for s in result.slides],
        "gallery": [_asset(a, include_media_data) for a in result.gallery],
        "text_slides": [
            {"index": t.index, "title": t.title, "paragraphs": list(t.paragraphs)}
            for t in result.text_slides
        ],
        "summary": None,
    }

    if result.summary is not None:
        data["summary"] = {
            "file_name": result.summary.file_name,
            "file_size": result.summary.file_size,
            "file_size_label": result.summary.file_size_label,
            "file_type": result.summary.file_type,
            "guidance": list(result.summary.guidance),
        }

    return data


# endregion


# region to_json
def to_json(result: RenderResult, include_media_data: bool = False) -> str:
    """JSON text of result_to_dict(), pretty-printed, non-ASCII kept as is."""
    return json.dumps(
        result_to_dict(result, include_media_data), indent=2, ensure_ascii=False
    )


# endregion
