"""Assemble extracted elements into ordered Slides with a title and a canvas."""

import logging
import re

from slides2scene.errors import ArchiveReadError, PartParseError
from slides2scene.internals import constants
from slides2scene.internals.resource_cache import PartCache
from slides2scene.internals.run_context import get_pipeline_run_id
from slides2scene.models import (
    Bounds,
    Element,
    ImageElement,
    MediaAsset,
    Position,
    Relationship,
    Slide,
    TextElement,
    TextSegment,
)
from slides2scene.processing.archive import ArchivePart, PresentationArchive
from slides2scene.processing.shapes import extract_slide_elements
from slides2scene.processing.xml_parts import parse_xml_blob

log = logging.getLogger("slides2scene")

SLIDE_PART_PATTERN = re.compile(r"^slide(\d+)\.xml$")


# region list_slide_parts
def list_slide_parts(archive: PresentationArchive) -> list[tuple[int, ArchivePart]]:
    """
    The package's slide parts as (slide number, part), sorted numerically.

    slide10.xml sorts after slide9.xml. Relationship parts and anything in subfolders are
    ignored.
    """
    slides: list[tuple[int, ArchivePart]] = []
    for relative_path, part in archive.folder(constants.SLIDES_DIR):
        match = SLIDE_PART_PATTERN.match(relative_path)
        if match:
            slides.append((int(match.group(1)), part))
    slides.sort(key=lambda item: item[0])
    return slides


# endregion


# region infer_title
def find_title_element(elements: list[Element]) -> TextElement | None:
    """The text element a slide's title comes from: the first title-like one, else the first."""
    texts = [e for e in elements if isinstance(e, TextElement)]
    for element in texts:
        if element.is_title:
            return element
    return texts[0] if texts else None


def infer_title(elements: list[Element], index: int) -> str:
    """Content of the title element, else "Slide {index}"."""
    element = find_title_element(elements)
    if element is not None:
        return element.content
    return constants.PLACEHOLDER_TITLE_TEMPLATE.format(index=index)


# endregion


# region compute_bounds
def compute_bounds(elements: list[Element]) -> Bounds:
    """
    Canvas enclosing every element, padded on all sides, never smaller than the minimum.

    Element positions are absolute; a renderer places them at (x - min_x, y - min_y).
    """
    if not elements:
        return Bounds(
            min_x=0,
            min_y=0,
            width=constants.EMPTY_CANVAS_WIDTH_PX,
            height=constants.EMPTY_CANVAS_HEIGHT_PX,
        )

    padding = constants.BOUNDS_PADDING_PX
    min_x = min(e.position.x for e in elements) - padding
    min_y = min(e.position.y for e in elements) - padding
    max_x = max(e.position.right for e in elements) + padding
    max_y = max(e.position.bottom for e in elements) + padding

    return Bounds(
        min_x=min_x,
        min_y=min_y,
        width=max(max_x - min_x, constants.MIN_CANVAS_WIDTH_PX),
        height=max(max_y - min_y, constants.MIN_CANVAS_HEIGHT_PX),
    )


# endregion


# region placeholder_slide
def placeholder_slide(index: int, source_part: str | None = None) -> Slide:
    """Stand-in for a slide that could not be parsed."""
    fallback = Position.fallback()
    message = TextElement(
        content=constants.PARSE_FAILED_TEXT,
        segments=(TextSegment(text=constants.PARSE_FAILED_TEXT),),
        position=fallback,
        order=0,
    )
    return Slide(
        index=index,
        title=constants.PLACEHOLDER_TITLE_TEMPLATE.format(index=index),
        elements=[message],
        bounds=compute_bounds([message]),
        source_part=source_part,
        is_placeholder=True,
    )


# endregion


# region build_slide
def build_slide(
    index: int,
    xml_content: bytes | str,
    relationships: dict[str, Relationship],
    assets: list[MediaAsset],
    source_part: str | None = None,
) -> Slide:
    """
    Build one Slide from its XML.

    Raises:
        PartParseError: If the XML cannot be parsed.
    """
    root = parse_xml_blob(xml_content)
    elements = extract_slide_elements(root, relationships, assets)
    # sort() is stable, so ties keep discovery order (text before images).
    elements.sort(key=lambda e: e.order)

    return Slide(
        index=index,
        title=infer_title(elements, index),
        elements=elements,
        bounds=compute_bounds(elements),
        source_part=source_part,
    )


# endregion


# region assemble_slides
async def assemble_slides(
    archive: PresentationArchive,
    cache: PartCache,
    relationships_by_slide: dict[int, dict[str, Relationship]],
    assets: list[MediaAsset],
) -> list[Slide]:
    """
    Assemble every slide of the package, one after another.

    A slide that cannot be parsed, or whose extraction blows up, becomes a placeholder and
    the rest carry on. A slide part that cannot be decompressed is a container problem and
    fails the whole call.

    Args:
        archive: The open package.
        cache: Part cache shared by the stages of this pipeline run.
        relationships_by_slide: Output of resolve_slide_relationships().
        assets: Output of extract_media().

    Returns:
        list[Slide]: One per slide part, indexed 1..n in slide-number order.

    Raises:
        ArchiveReadError: If the package has no slides, or a slide part cannot be decompressed.
    """
    pipeline_id = get_pipeline_run_id()

    slide_parts = list_slide_parts(archive)
    if not slide_parts:
        raise ArchiveReadError(f"No slide parts found in {archive.name}")

    slides: list[Slide] = []
    for index, (slide_number, part) in enumerate(slide_parts, start=1):
        data = await cache.get(part.path, part.read_bytes)

        try:
            slide = build_slide(
                index,
                data,
                relationships_by_slide.get(slide_number, {}),
                assets,
                source_part=part.path,
            )
        except PartParseError as e:
            log.warning(
                f"Slide {index} ({part.path}) could not be parsed: {e} [pipeline:{pipeline_id}]"
            )
            slide = placeholder_slide(index, part.path)
        except Exception as e:
            log.warning(
                f"Slide {index} ({part.path}) failed during extraction: {e!r} [pipeline:{pipeline_id}]"
            )
            slide = placeholder_slide(index, part.path)

        slides.append(slide)

    placeholders = sum(1 for s in slides if s.is_placeholder)
    log.info(
        f"Assembled {len(slides)} slide(s), {placeholders} placeholder(s). [pipeline:{pipeline_id}]"
    )
    return slides


# endregion


# region composite_layers
def composite_layers(slide: Slide) -> tuple[list[ImageElement], list[TextElement]]:
    """
    Split a slide into its two compositing passes.

    Images are painted first (z-index 1), text second (z-index 10), whatever their numeric
    order. Inside each pass elements keep ascending `order`.
    """
    images = sorted(slide.image_elements, key=lambda e: e.order)
    texts = sorted(slide.text_elements, key=lambda e: e.order)
    return images, texts


# endregion
