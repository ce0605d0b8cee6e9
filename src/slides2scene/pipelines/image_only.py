"""Image-only stage: every raster image in the package as a flat gallery."""

import logging

from slides2scene.errors import NoExtractableContentError
from slides2scene.internals.resource_cache import PartCache
from slides2scene.internals.run_context import get_pipeline_run_id
from slides2scene.models import PresentationDocument, RenderResult, StageName
from slides2scene.processing.archive import PresentationArchive
from slides2scene.processing.media import extract_media

log = logging.getLogger("slides2scene")


# region render_image_only
async def render_image_only(
    document: PresentationDocument, cache: PartCache
) -> RenderResult:
    """
    Gallery of the package's images, with no positions and no slides.

    Raises:
        ArchiveReadError: If the package cannot be opened.
        NoExtractableContentError: If there is not a single readable image.
    """
    pipeline_id = get_pipeline_run_id()
    log.debug(f"Image-only stage starting for {document.name} [pipeline:{pipeline_id}]")

    with PresentationArchive.open(document.content, document.name) as archive:
        assets = await extract_media(archive, cache)

    if not assets:
        raise NoExtractableContentError(f"No extractable images in {document.name}")

    return RenderResult(
        stage=StageName.IMAGE_ONLY,
        document_name=document.name,
        gallery=assets,
    )


# endregion
