"""Fallback stage: a static information card. Never fails."""

import logging
from pathlib import Path

from slides2scene.internals.resource_cache import PartCache
from slides2scene.models import (
    FallbackSummary,
    PresentationDocument,
    RenderResult,
    StageName,
)

log = logging.getLogger("slides2scene")

SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]

FILE_TYPE_LABEL = "PowerPoint presentation (PPTX)"

GUIDANCE: tuple[str, ...] = (
    "Convert the presentation to PDF with a local office suite and preview that instead.",
    "Open the file in PowerPoint, LibreOffice Impress or WPS Presentation.",
    "Open the file with an office app on a phone or tablet.",
    "Any images found in the package can still be viewed on their own.",
)


# region format_file_size
def format_file_size(size: int) -> str:
    """
    Human readable size with up to two decimals: 0 -> "0 Bytes", 1536 -> "1.5 KB".

    Anything from a terabyte up is still reported in GB.
    """
    if size <= 0:
        return "0 Bytes"
    value = float(size)
    exponent = 0
    while value >= 1024 and exponent < len(SIZE_UNITS) - 1:
        value /= 1024
        exponent += 1
    number = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{number} {SIZE_UNITS[exponent]}"


# endregion


# region describe_document
def describe_document(document: PresentationDocument) -> FallbackSummary:
    """Everything the fallback card shows about a document."""
    suffix = Path(document.name).suffix.lower()
    if suffix == ".pptx":
        file_type = FILE_TYPE_LABEL
    else:
        file_type = f"Unrecognized ({suffix or 'no extension'})"
    return FallbackSummary(
        file_name=document.name,
        file_size=document.size,
        file_size_label=format_file_size(document.size),
        file_type=file_type,
        guidance=GUIDANCE,
    )


# endregion


# region render_fallback
async def render_fallback(
    document: PresentationDocument, cache: PartCache
) -> RenderResult:
    """Summary card for a document nothing could be extracted from. Does not touch the package."""
    log.info(f"Showing fallback summary for {document.name}")
    return RenderResult(
        stage=StageName.FALLBACK,
        document_name=document.name,
        summary=describe_document(document),
    )


# endregion
