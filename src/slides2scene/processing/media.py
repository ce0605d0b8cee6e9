"""Materialize the package's raster images into in-memory MediaAssets."""

import asyncio
import logging
import mimetypes

from slides2scene.errors import MediaExtractError
from slides2scene.internals import constants
from slides2scene.internals.resource_cache import PartCache
from slides2scene.internals.run_context import get_pipeline_run_id
from slides2scene.models import MediaAsset
from slides2scene.processing.archive import ArchivePart, PresentationArchive

log = logging.getLogger("slides2scene")

# Not every platform's mimetypes table knows these.
_EXTRA_CONTENT_TYPES = {
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
    ".bmp": "image/bmp",
}


# region is_raster_media
def is_raster_media(name: str) -> bool:
    """True for file names with a raster image extension, case-insensitive."""
    return name.lower().endswith(constants.RASTER_EXTENSIONS)


# endregion


# region guess_content_type
def guess_content_type(name: str) -> str:
    """Content type for a media file name, falling back to application/octet-stream."""
    content_type, _ = mimetypes.guess_type(name)
    if content_type:
        return content_type
    for extension, fallback in _EXTRA_CONTENT_TYPES.items():
        if name.lower().endswith(extension):
            return fallback
    return "application/octet-stream"


# endregion


# region extract_media
async def extract_media(
    archive: PresentationArchive, cache: PartCache
) -> list[MediaAsset]:
    """
    Materialize every raster image under the media folder, concurrently.

    All reads are started together and awaited as a group. An entry that fails to read is
    logged and left out; the rest are still returned.

    Args:
        archive: The open package.
        cache: Part cache shared by the stages of this pipeline run.

    Returns:
        list[MediaAsset]: The assets that could be read, sorted by name.
    """
    pipeline_id = get_pipeline_run_id()

    entries = [
        (relative_path, part)
        for relative_path, part in archive.folder(constants.MEDIA_DIR)
        if is_raster_media(relative_path)
    ]

    results = await asyncio.gather(
        *(_materialize(name, part, cache) for name, part in entries),
        return_exceptions=True,
    )

    assets: list[MediaAsset] = []
    for (name, _), result in zip(entries, results):
        if isinstance(result, MediaExtractError):
            log.warning(f"Skipping media {name}: {result} [pipeline:{pipeline_id}]")
            continue
        if isinstance(result, BaseException):
            # Anything else is a bug, not a bad image.
            raise result
        assets.append(result)

    assets.sort(key=lambda asset: asset.name)
    log.info(
        f"Extracted {len(assets)} of {len(entries)} media file(s). [pipeline:{pipeline_id}]"
    )
    return assets


async def _materialize(name: str, part: ArchivePart, cache: PartCache) -> MediaAsset:
    try:
        content = await cache.get(part.path, part.read_bytes)
    except Exception as e:
        raise MediaExtractError(f"Could not read {part.path}: {e}") from e

    return MediaAsset(name=name, content=content, content_type=guess_content_type(name))


# endregion


# region find_asset_for_target
def find_asset_for_target(
    target: str, assets: list[MediaAsset]
) -> MediaAsset | None:
    """
    Match a relationship target (e.g. "../media/image2.png") to an extracted asset.

    Matching is by file-name suffix in either direction, so both relative targets and bare
    file names resolve.
    """
    target_file = target.rsplit("/", 1)[-1]
    if not target_file:
        return None

    for asset in assets:
        if asset.name.endswith(target_file) or target_file.endswith(asset.name):
            return asset
    return None


# endregion
