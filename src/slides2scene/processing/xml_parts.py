"""XML helpers for walking raw PresentationML / DrawingML parts.

The core only ever needs two things from a parsed tree: "all descendant elements with this
tag" and "this attribute's value". Tags and attributes are written with their usual prefixes
("a:p", "r:embed") and expanded to Clark notation through python-pptx's namespace map.
"""

import logging
import xml.etree.ElementTree as ET

from pptx.oxml.ns import qn

from slides2scene.errors import PartParseError

log = logging.getLogger("slides2scene")

# Relationship parts use the OPC package namespace, not a DrawingML one.
RELATIONSHIPS_NS = "http://schemas.openxmlformats.org/package/2006/relationships"


# region parse_xml_blob
def parse_xml_blob(xml_blob: bytes | str) -> ET.Element:
    """Parse an XML part into an Element tree, raising PartParseError if it is not well-formed."""
    try:
        if isinstance(xml_blob, str):
            xml_string = xml_blob
        else:
            xml_string = bytes(xml_blob).decode("utf-8-sig")

        root: ET.Element = ET.fromstring(xml_string)

        return root
    except UnicodeDecodeError as e:
        log.warning(f"Invalid encoding in XML blob: {e}")
        raise PartParseError(f"XML has invalid encoding: {e}") from e
    except ET.ParseError as e:
        log.warning(f"Malformed XML: {e}")
        raise PartParseError(f"XML is malformed: {e}") from e


# endregion


# region tree navigation
def descendants(node: ET.Element, tag: str) -> list[ET.Element]:
    """All elements below node (not node itself) with the given prefixed tag, in document order."""
    clark = qn(tag)
    return [el for el in node.iter(clark) if el is not node]


def first_descendant(node: ET.Element, tag: str) -> ET.Element | None:
    """First element below node with the given prefixed tag, or None."""
    clark = qn(tag)
    for el in node.iter(clark):
        if el is not node:
            return el
    return None


def attr(node: ET.Element, name: str) -> str | None:
    """Attribute value by name. Prefixed names ("r:embed") are namespace-qualified first."""
    if ":" in name:
        return node.get(qn(name))
    return node.get(name)


def int_attr(node: ET.Element | None, name: str, default: int = 0) -> int:
    """Integer attribute, falling back to default when the node, the attribute or a number is missing."""
    if node is None:
        return default
    raw = attr(node, name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        log.debug(f"Non-numeric value {raw!r} for attribute {name}; using {default}")
        return default


def build_parent_map(root: ET.Element) -> dict[ET.Element, ET.Element]:
    """ElementTree nodes don't know their parent, so we index that once per part."""
    return {child: parent for parent in root.iter() for child in parent}


def sibling_index(node: ET.Element, parents: dict[ET.Element, ET.Element]) -> int:
    """How many element siblings come before this node."""
    parent = parents.get(node)
    if parent is None:
        return 0
    for i, child in enumerate(parent):
        if child is node:
            return i
    return 0


def local_name(tag: str) -> str:
    """'{namespace}name' -> 'name'."""
    return tag.rsplit("}", 1)[-1]


# endregion


# region text helpers
def run_texts(node: ET.Element) -> list[str]:
    """Text of every a:t under node, in order, empty ones included."""
    return [t.text or "" for t in descendants(node, "a:t")]


# endregion
