"""Combined stage: positioned text and images, slide by slide."""

import asyncio
import logging

from slides2scene.internals.resource_cache import PartCache
from slides2scene.internals.run_context import get_pipeline_run_id
from slides2scene.models import PresentationDocument, RenderResult, StageName
from slides2scene.processing.archive import PresentationArchive
from slides2scene.processing.assemble_slides import assemble_slides
from slides2scene.processing.media import extract_media
from slides2scene.processing.relationships import resolve_slide_relationships

log = logging.getLogger("slides2scene")


# region render_combined
async def render_combined(
    document: PresentationDocument, cache: PartCache
) -> RenderResult:
    """
    Full layout reconstruction.

    Relationship maps and media are resolved together, then every slide is assembled.
    A result where every slide is a placeholder is still a result.

    Raises:
        ArchiveReadError: If the package or one of its slide parts cannot be read.
    """
    pipeline_id = get_pipeline_run_id()
    log.debug(f"Combined stage starting for {document.name} [pipeline:{pipeline_id}]")

    with PresentationArchive.open(document.content, document.name) as archive:
        # Both sides must finish before the archive closes, even when one of them fails.
        relationships, assets = await asyncio.gather(
            resolve_slide_relationships(archive, cache),
            extract_media(archive, cache),
            return_exceptions=True,
        )
        for outcome in (relationships, assets):
            if isinstance(outcome, BaseException):
                raise outcome
        slides = await assemble_slides(archive, cache, relationships, assets)

    return RenderResult(
        stage=StageName.COMBINED,
        document_name=document.name,
        slides=slides,
        gallery=assets,
    )


# endregion
