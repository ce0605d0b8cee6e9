"""Text-only stage: the words on each slide, without formatting or positions."""

import logging

from slides2scene.errors import ArchiveReadError, NoExtractableContentError, PartParseError
from slides2scene.internals import constants
from slides2scene.internals.resource_cache import PartCache
from slides2scene.internals.run_context import get_pipeline_run_id
from slides2scene.models import PresentationDocument, RenderResult, StageName, TextSlide
from slides2scene.processing.archive import PresentationArchive
from slides2scene.processing.assemble_slides import list_slide_parts
from slides2scene.processing.xml_parts import parse_xml_blob, run_texts

log = logging.getLogger("slides2scene")


# region slide_texts
def slide_texts(xml_content: bytes | str) -> list[str]:
    """
    Every non-empty a:t text of one slide, stripped, in document order.

    Raises:
        PartParseError: If the XML cannot be parsed.
    """
    root = parse_xml_blob(xml_content)
    return [text.strip() for text in run_texts(root) if text.strip()]


def build_text_slide(texts: list[str], index: int) -> TextSlide:
    """First text is the title, the rest is body. No text keeps the "Slide {index}" title."""
    if not texts:
        return TextSlide(
            index=index, title=constants.PLACEHOLDER_TITLE_TEMPLATE.format(index=index)
        )
    return TextSlide(index=index, title=texts[0], paragraphs=texts[1:])


# endregion


# region render_text_only
async def render_text_only(
    document: PresentationDocument, cache: PartCache
) -> RenderResult:
    """
    Text preview of every slide.

    A slide that cannot be read or parsed is reported as "could not parse content" and the
    rest carry on.

    Raises:
        ArchiveReadError: If the package cannot be opened.
        NoExtractableContentError: If there are no slides, or no slide yielded any text.
    """
    pipeline_id = get_pipeline_run_id()
    log.debug(f"Text-only stage starting for {document.name} [pipeline:{pipeline_id}]")

    text_slides: list[TextSlide] = []
    found_text = False

    with PresentationArchive.open(document.content, document.name) as archive:
        slide_parts = list_slide_parts(archive)
        if not slide_parts:
            raise NoExtractableContentError(f"No slides in {document.name}")

        for index, (_, part) in enumerate(slide_parts, start=1):
            try:
                data = await cache.get(part.path, part.read_bytes)
                texts = slide_texts(data)
                text_slide = build_text_slide(texts, index)
            except (ArchiveReadError, PartParseError) as e:
                log.warning(
                    f"Could not read text of slide {index} ({part.path}): {e} [pipeline:{pipeline_id}]"
                )
                text_slide = TextSlide(
                    index=index,
                    title=constants.PLACEHOLDER_TITLE_TEMPLATE.format(index=index),
                    paragraphs=[constants.TEXT_ONLY_PARSE_FAILED_TEXT],
                )
            else:
                found_text = found_text or bool(texts)
            text_slides.append(text_slide)

    if not found_text:
        raise NoExtractableContentError(f"No slide text found in {document.name}")

    return RenderResult(
        stage=StageName.TEXT_ONLY,
        document_name=document.name,
        text_slides=text_slides,
    )


# endregion
