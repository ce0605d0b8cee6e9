"""Decompose a slide's shape tree into positioned text and image elements."""

import logging
import xml.etree.ElementTree as ET

from pptx.oxml.ns import qn

from slides2scene.internals import constants
from slides2scene.models import (
    Element,
    FormattedText,
    ImageElement,
    MediaAsset,
    Position,
    Relationship,
    TextElement,
)
from slides2scene.processing.formatting import (
    format_paragraph,
    format_run,
    format_text_body,
    resolve_paragraph_style,
)
from slides2scene.processing.media import find_asset_for_target
from slides2scene.processing.positions import position_from_transform, resolve_position
from slides2scene.processing.xml_parts import (
    attr,
    build_parent_map,
    descendants,
    first_descendant,
    sibling_index,
)

log = logging.getLogger("slides2scene")


# region is_title_text
def is_title_text(text: str) -> bool:
    """
    Title heuristic: short, non-empty, and not a sentence.

    True when the stripped text is longer than 2 and shorter than 100 characters and contains
    none of the CJK full-width sentence terminators.
    """
    stripped = text.strip()
    if not stripped:
        return False
    if not constants.TITLE_MIN_LENGTH < len(stripped) < constants.TITLE_MAX_LENGTH:
        return False
    return not any(mark in stripped for mark in constants.TITLE_TERMINATORS)


# endregion


# region paragraph geometry
def _spacing_points(p_pr: ET.Element | None, tag: str) -> float:
    """a:spcBef / a:lnSpc expressed as a:spcPts, in points. Percentage spacing is ignored."""
    if p_pr is None:
        return 0.0
    spacing = p_pr.find(qn(tag))
    if spacing is None:
        return 0.0
    spc_pts = spacing.find(qn("a:spcPts"))
    if spc_pts is None:
        return 0.0
    try:
        return int(spc_pts.get("val", "0")) / 100
    except ValueError:
        return 0.0


def paragraph_offset(paragraph: ET.Element, index: int) -> int:
    """
    Estimated vertical offset of the index-th paragraph from the top of its shape, in px.

    Uses space-before plus line spacing times index when the paragraph declares them in
    points, and a fixed line height per paragraph otherwise. This is an estimate: there are
    no font metrics to measure real line heights with.
    """
    p_pr = paragraph.find(qn("a:pPr"))
    offset = _spacing_points(p_pr, "a:spcBef") + _spacing_points(p_pr, "a:lnSpc") * index
    if offset == 0:
        offset = index * constants.PARAGRAPH_LINE_HEIGHT_PX
    return round(offset)


def _explicit_position(node: ET.Element) -> Position | None:
    """A transform attached directly inside a paragraph or run. Rare, but wins when present."""
    xfrm = first_descendant(node, "a:xfrm")
    if xfrm is None:
        return None
    return position_from_transform(xfrm)


# endregion


# region extract_text_elements
def extract_text_elements(shape: ET.Element, shape_order: int) -> list[TextElement]:
    """
    Turn one p:sp into text elements using a three-tier split.

    1. More than one paragraph: one element per non-empty paragraph, stacked downward from
       the shape's top by the paragraph offset estimate.
    2. One paragraph with several runs: one element per non-empty run, laid out left to right
       across the shape's width.
    3. Otherwise: one element for the whole shape.

    Sub-elements keep the shape's place in the stacking order: the n-th visible block gets a
    fractional offset that stays below the next sibling shape's order, however many blocks
    the shape holds.

    Args:
        shape: The p:sp element.
        shape_order: Index of the shape among its siblings.

    Returns:
        list[TextElement]: Possibly empty if the shape has no visible text.
    """
    base = resolve_position(shape)
    paragraphs = descendants(shape, "a:p")

    if len(paragraphs) > 1:
        return _split_by_paragraph(paragraphs, base, shape_order)

    if len(paragraphs) == 1:
        runs = descendants(paragraphs[0], "a:r")
        if len(runs) > 1:
            return _split_by_run(paragraphs[0], runs, base, shape_order)

    whole = format_text_body(paragraphs)
    element = _make_text_element(whole, base, shape_order)
    return [element] if element else []


def _split_by_paragraph(
    paragraphs: list[ET.Element], base: Position, shape_order: int
) -> list[TextElement]:
    height = max(
        constants.MIN_PARAGRAPH_HEIGHT_PX, round(base.height / len(paragraphs))
    )

    blocks: list[tuple[FormattedText, Position]] = []
    for i, paragraph in enumerate(paragraphs):
        formatted = format_paragraph(paragraph)
        if not formatted.text.strip():
            continue

        position = _explicit_position(paragraph) or Position(
            x=base.x,
            y=base.y + paragraph_offset(paragraph, i),
            width=base.width,
            height=height,
        )
        blocks.append((formatted, position))
    return _make_sub_elements(blocks, shape_order)


def _split_by_run(
    paragraph: ET.Element, runs: list[ET.Element], base: Position, shape_order: int
) -> list[TextElement]:
    # Even subdivision is all we can do; runs carry no geometry of their own.
    run_width = max(constants.MIN_RUN_WIDTH_PX, round(base.width / len(runs)))
    paragraph_style = resolve_paragraph_style(paragraph)

    blocks: list[tuple[FormattedText, Position]] = []
    for i, run in enumerate(runs):
        segment = format_run(run, paragraph, paragraph_style)
        if not segment.text.strip():
            continue

        position = _explicit_position(run) or Position(
            x=base.x + i * run_width,
            y=base.y,
            width=run_width,
            height=base.height,
        )
        formatted = FormattedText()
        formatted.append(segment)
        blocks.append((formatted, position))
    return _make_sub_elements(blocks, shape_order)


def _make_sub_elements(
    blocks: list[tuple[FormattedText, Position]], shape_order: int
) -> list[TextElement]:
    # 0.1 per block, shrunk for long shapes so the last block stays under shape_order + 1.
    step = min(constants.SUB_ELEMENT_ORDER_STEP, 1 / (len(blocks) + 1))
    elements: list[TextElement] = []
    for block_index, (formatted, position) in enumerate(blocks):
        element = _make_text_element(
            formatted, position, shape_order + step * block_index
        )
        if element:
            elements.append(element)
    return elements


def _make_text_element(
    formatted: FormattedText, position: Position, order: float
) -> TextElement | None:
    if not formatted.text.strip():
        return None
    return TextElement(
        content=formatted.text,
        segments=tuple(formatted.segments),
        position=position,
        order=order,
        is_title=is_title_text(formatted.text),
    )


# endregion


# region extract_image_element
def extract_image_element(
    picture: ET.Element,
    shape_order: int,
    relationships: dict[str, Relationship],
    assets: list[MediaAsset],
) -> ImageElement | None:
    """
    Resolve a p:pic to an ImageElement through the slide's relationships and the asset table.

    Returns None when the picture has no blip, the reference is unknown, or no extracted
    asset matches the target.
    """
    blip = first_descendant(picture, "a:blip")
    if blip is None:
        return None

    rel_id = attr(blip, "r:embed")
    relationship = relationships.get(rel_id) if rel_id else None
    if relationship is None:
        log.debug(f"Picture references unknown relationship {rel_id!r}; skipping.")
        return None

    asset = find_asset_for_target(relationship.target, assets)
    if asset is None:
        log.debug(f"No extracted media matches {relationship.target}; skipping.")
        return None

    return ImageElement(
        asset=asset,
        alt=_alt_text(picture),
        position=resolve_position(picture),
        order=shape_order,
    )


def _alt_text(picture: ET.Element) -> str:
    c_nv_pr = first_descendant(picture, "p:cNvPr")
    if c_nv_pr is None:
        return ""
    return c_nv_pr.get("descr") or c_nv_pr.get("name") or ""


# endregion


# region extract_slide_elements
def extract_slide_elements(
    slide_root: ET.Element,
    relationships: dict[str, Relationship],
    assets: list[MediaAsset],
) -> list[Element]:
    """
    Every text and image element on a slide, in discovery order: all text first, then images.

    Callers sort by `order` afterwards; a stable sort keeps this discovery order for ties.
    """
    parents = build_parent_map(slide_root)
    elements: list[Element] = []

    for shape in descendants(slide_root, "p:sp"):
        elements.extend(extract_text_elements(shape, sibling_index(shape, parents)))

    for picture in descendants(slide_root, "p:pic"):
        image = extract_image_element(
            picture, sibling_index(picture, parents), relationships, assets
        )
        if image:
            elements.append(image)

    return elements


# endregion
