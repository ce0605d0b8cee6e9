"""Find a shape's transform and convert it from EMU into display pixels."""

import logging
import xml.etree.ElementTree as ET
from typing import Callable, Optional

from pptx.oxml.ns import qn
from pptx.util import Emu

from slides2scene.internals import constants
from slides2scene.models import Position
from slides2scene.processing.xml_parts import first_descendant, int_attr

log = logging.getLogger("slides2scene")

TransformLocator = Callable[[ET.Element], Optional[ET.Element]]


# region emu_to_pixels
def emu_to_pixels(emu: int) -> int:
    """
    Convert English Metric Units to display pixels at 96 dpi.

    914400 EMU is one inch, so 914400 -> 96.
    """
    return round(Emu(emu).inches * constants.PIXELS_PER_INCH)


# endregion


# region transform locators
def _xfrm_in_shape_properties(node: ET.Element) -> ET.Element | None:
    """a:xfrm directly inside the node's own p:spPr."""
    sp_pr = node.find(qn("p:spPr"))
    if sp_pr is None:
        return None
    return sp_pr.find(qn("a:xfrm"))


def _xfrm_in_preset_geometry(node: ET.Element) -> ET.Element | None:
    """a:xfrm tucked inside p:spPr/a:prstGeom, which some producers write."""
    sp_pr = node.find(qn("p:spPr"))
    if sp_pr is None:
        return None
    prst_geom = sp_pr.find(qn("a:prstGeom"))
    if prst_geom is None:
        return None
    return prst_geom.find(qn("a:xfrm"))


def _xfrm_anywhere(node: ET.Element) -> ET.Element | None:
    """Any a:xfrm in the subtree. Last resort."""
    return first_descendant(node, "a:xfrm")


# Tried in order; the first locator that finds something wins.
# Add new entries here to support other shape layouts.
TRANSFORM_LOCATORS: list[TransformLocator] = [
    _xfrm_in_shape_properties,
    _xfrm_in_preset_geometry,
    _xfrm_anywhere,
]
# endregion


# region find_transform
def find_transform(
    node: ET.Element, locators: list[TransformLocator] | None = None
) -> ET.Element | None:
    """Run the locators over node and return the first transform found, or None."""
    for locate in locators if locators is not None else TRANSFORM_LOCATORS:
        xfrm = locate(node)
        if xfrm is not None:
            return xfrm
    return None


# endregion


# region position_from_transform
def position_from_transform(xfrm: ET.Element) -> Position:
    """
    Build a Position from an a:xfrm element.

    Missing or non-numeric offsets and extents count as 0. A width or height that converts to
    0 falls back to the default box size, so a shape never collapses to nothing.
    """
    off = xfrm.find(qn("a:off"))
    ext = xfrm.find(qn("a:ext"))

    x = emu_to_pixels(int_attr(off, "x"))
    y = emu_to_pixels(int_attr(off, "y"))
    # Negative extents are not valid DrawingML; clamp before converting.
    width = emu_to_pixels(max(0, int_attr(ext, "cx")))
    height = emu_to_pixels(max(0, int_attr(ext, "cy")))

    return Position(
        x=x,
        y=y,
        width=width or constants.FALLBACK_WIDTH_PX,
        height=height or constants.FALLBACK_HEIGHT_PX,
    )


# endregion


# region resolve_position
def resolve_position(node: ET.Element) -> Position:
    """
    Resolve a shape node's on-canvas position in pixels.

    Args:
        node: A p:sp, p:pic or any other element that may carry an a:xfrm.

    Returns:
        Position: The converted transform, or the fallback position if none was found.
    """
    xfrm = find_transform(node)
    if xfrm is None:
        log.debug("No transform found for shape; using fallback position.")
        return Position.fallback()
    return position_from_transform(xfrm)


# endregion
