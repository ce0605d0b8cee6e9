"""Resolve per-slide relationship parts into id -> Relationship maps of image references."""

import asyncio
import logging
import re

from slides2scene.errors import ArchiveReadError, PartParseError
from slides2scene.internals import constants
from slides2scene.internals.resource_cache import PartCache
from slides2scene.internals.run_context import get_pipeline_run_id
from slides2scene.models import Relationship, RelationshipKind
from slides2scene.processing.archive import ArchivePart, PresentationArchive
from slides2scene.processing.xml_parts import RELATIONSHIPS_NS, parse_xml_blob

log = logging.getLogger("slides2scene")

SLIDE_RELS_PATTERN = re.compile(r"slide(\d+)\.xml\.rels$")


# region classify_relationship
def classify_relationship(rel_type: str | None, target: str | None) -> RelationshipKind:
    """An image relationship either says so in its type URI or points at a raster file."""
    if rel_type and "image" in rel_type.lower():
        return RelationshipKind.IMAGE
    if target and target.lower().endswith(constants.RASTER_EXTENSIONS):
        return RelationshipKind.IMAGE
    return RelationshipKind.OTHER


# endregion


# region parse_relationships
def parse_relationships(xml_content: str | bytes | None) -> dict[str, Relationship]:
    """
    Parse one relationship part, keeping only image relationships.

    Args:
        xml_content: Raw text of a .rels part. None (part absent) yields an empty map.

    Returns:
        dict mapping relationship id to Relationship.

    Raises:
        PartParseError: If the part is not well-formed XML.
    """
    if xml_content is None:
        return {}

    root = parse_xml_blob(xml_content)

    relationships: dict[str, Relationship] = {}
    for rel in root.iter(f"{{{RELATIONSHIPS_NS}}}Relationship"):
        rel_id = rel.get("Id")
        target = rel.get("Target")
        rel_type = rel.get("Type")

        if not rel_id or not target:
            continue

        kind = classify_relationship(rel_type, target)
        if kind is RelationshipKind.IMAGE:
            relationships[rel_id] = Relationship(rel_id=rel_id, target=target, kind=kind)

    return relationships


# endregion


# region resolve_slide_relationships
async def resolve_slide_relationships(
    archive: PresentationArchive, cache: PartCache
) -> dict[int, dict[str, Relationship]]:
    """
    Read and parse every slide relationship part concurrently.

    A part that cannot be decompressed or parsed becomes an empty map for its slide, so the
    slide loses its images but keeps its text. It never fails the whole resolution.

    Returns:
        dict mapping slide number (the N in slideN.xml) to that slide's image relationships.
    """
    pipeline_id = get_pipeline_run_id()

    tasks: list[asyncio.Future] = []
    slide_numbers: list[int] = []
    for relative_path, part in archive.folder(constants.SLIDE_RELS_DIR):
        match = SLIDE_RELS_PATTERN.search(relative_path)
        if not match:
            continue
        slide_numbers.append(int(match.group(1)))
        tasks.append(asyncio.ensure_future(_load_relationship_part(part, cache)))

    results = await asyncio.gather(*tasks)

    relations = dict(zip(slide_numbers, results))
    log.debug(
        f"Resolved relationship maps for {len(relations)} slide(s). [pipeline:{pipeline_id}]"
    )
    return relations


async def _load_relationship_part(
    part: ArchivePart, cache: PartCache
) -> dict[str, Relationship]:
    try:
        data = await cache.get(part.path, part.read_bytes)
        return parse_relationships(data)
    except (ArchiveReadError, PartParseError) as e:
        log.warning(f"Could not read relationship part {part.path}: {e}")
        return {}


# endregion
