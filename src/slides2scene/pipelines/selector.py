"""Pick the richest rendition of a presentation that can actually be produced.

Stages are tried in order: combined layout, image gallery, text preview, information card.
The first stage that returns without raising is committed to; later stages never run.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Sequence

from slides2scene.internals.resource_cache import PartCache
from slides2scene.internals.run_context import get_pipeline_run_id
from slides2scene.models import (
    PresentationDocument,
    RenderResult,
    StageAttempt,
    StageName,
)
from slides2scene.pipelines.combined import render_combined
from slides2scene.pipelines.fallback import describe_document, render_fallback
from slides2scene.pipelines.image_only import render_image_only
from slides2scene.pipelines.text_only import render_text_only

log = logging.getLogger("slides2scene")

StageFunction = Callable[[PresentationDocument, PartCache], Awaitable[RenderResult]]

# Ordered from richest to plainest. The last entry must not raise.
DEFAULT_STAGES: list[tuple[StageName, StageFunction]] = [
    (StageName.COMBINED, render_combined),
    (StageName.IMAGE_ONLY, render_image_only),
    (StageName.TEXT_ONLY, render_text_only),
    (StageName.FALLBACK, render_fallback),
]


# region select_render_pipeline
async def select_render_pipeline(
    document: PresentationDocument,
    stages: Sequence[tuple[StageName, StageFunction]] | None = None,
    cache: PartCache | None = None,
) -> RenderResult:
    """
    Run the stages in order and return the first result.

    Every stage shares one PartCache, so parts inflated by a failed stage are not inflated
    again by the next one. Failed stages are recorded on the result's `attempts`.

    Args:
        document: The presentation to render.
        stages: Stage list to use instead of DEFAULT_STAGES (mainly for tests).
        cache: Part cache to share; a fresh one is created when omitted.

    Returns:
        RenderResult: Never raises for a bad document; the worst case is the fallback card.
    """
    pipeline_id = get_pipeline_run_id()
    stages = DEFAULT_STAGES if stages is None else stages
    cache = PartCache() if cache is None else cache

    attempts: list[StageAttempt] = []
    for stage_name, stage in stages:
        log.debug(f"Trying {stage_name.value} stage [pipeline:{pipeline_id}]")
        try:
            result = await stage(document, cache)
        except Exception as e:
            log.warning(
                f"{stage_name.value} stage failed with {type(e).__name__}: {e} [pipeline:{pipeline_id}]"
            )
            attempts.append(
                StageAttempt(
                    stage=stage_name, error_type=type(e).__name__, message=str(e)
                )
            )
            continue
        finally:
            cache.discard_pending()

        result.attempts = attempts
        log.info(
            f"Committed to {stage_name.value} stage after {len(attempts)} failed attempt(s). [pipeline:{pipeline_id}]"
        )
        return result

    # Only reachable with a custom stage list that has no working last resort.
    log.error(
        f"Every render stage failed for {document.name}; showing summary. [pipeline:{pipeline_id}]"
    )
    return RenderResult(
        stage=StageName.FALLBACK,
        document_name=document.name,
        summary=describe_document(document),
        attempts=attempts,
    )


# endregion


# region render_presentation
def render_presentation(
    document: PresentationDocument,
    stages: Sequence[tuple[StageName, StageFunction]] | None = None,
) -> RenderResult:
    """Synchronous entry point: run the selector on a fresh event loop."""
    return asyncio.run(select_render_pipeline(document, stages))


# endregion
