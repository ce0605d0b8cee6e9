"""Shared test helper functions.

Most tests need packages with a very specific shape (a corrupted slide, a missing transform,
a relationship part that isn't XML), which python-pptx can't produce. These helpers write
raw PresentationML into a zip instead.
"""

import base64
import io
import zipfile

from slides2scene.models import PresentationDocument

# A valid 1x1 transparent PNG.
PNG_1X1 = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)

IMAGE_REL_TYPE = (
    "http://schemas.openxmlformats.org/officeDocument/2006/relationships/image"
)
LAYOUT_REL_TYPE = (
    "http://schemas.openxmlformats.org/officeDocument/2006/relationships/slideLayout"
)

_NAMESPACES = (
    'xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" '
    'xmlns:r="http://schemas.openxmlformats.org/officeDocument/2006/relationships" '
    'xmlns:p="http://schemas.openxmlformats.org/presentationml/2006/main"'
)

EMU_PER_PX = 9525  # 914400 / 96


# region XML builders
def px(value: int) -> int:
    """Pixels -> EMU, so tests can write geometry in the unit they assert on."""
    return value * EMU_PER_PX


def xfrm(x: int, y: int, width: int, height: int) -> str:
    """An a:xfrm with geometry given in pixels."""
    return (
        f'<a:xfrm><a:off x="{px(x)}" y="{px(y)}"/>'
        f'<a:ext cx="{px(width)}" cy="{px(height)}"/></a:xfrm>'
    )


def run(text: str, r_pr: str = "") -> str:
    return f"<a:r>{r_pr}<a:t>{text}</a:t></a:r>"


def paragraph(*runs: str, p_pr: str = "") -> str:
    return f"<a:p>{p_pr}{''.join(runs)}</a:p>"


def text_shape(
    shape_id: int,
    *paragraphs: str,
    geometry: str | None = None,
    name: str = "TextBox",
) -> str:
    """A p:sp whose spPr holds the given transform (or nothing)."""
    return (
        f'<p:sp><p:nvSpPr><p:cNvPr id="{shape_id}" name="{name} {shape_id}"/>'
        f"<p:cNvSpPr/><p:nvPr/></p:nvSpPr>"
        f"<p:spPr>{geometry or ''}</p:spPr>"
        f"<p:txBody><a:bodyPr/><a:lstStyle/>{''.join(paragraphs)}</p:txBody></p:sp>"
    )


def picture_shape(
    shape_id: int,
    rel_id: str,
    geometry: str | None = None,
    name: str = "Picture",
    descr: str | None = None,
) -> str:
    descr_attr = f' descr="{descr}"' if descr is not None else ""
    return (
        f'<p:pic><p:nvPicPr><p:cNvPr id="{shape_id}" name="{name}"{descr_attr}/>'
        f"<p:cNvPicPr/><p:nvPr/></p:nvPicPr>"
        f'<p:blipFill><a:blip r:embed="{rel_id}"/><a:stretch><a:fillRect/></a:stretch></p:blipFill>'
        f"<p:spPr>{geometry or ''}</p:spPr></p:pic>"
    )


def slide_xml(*shapes: str) -> str:
    """A complete slide part around the given shapes."""
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f"<p:sld {_NAMESPACES}><p:cSld><p:spTree>"
        '<p:nvGrpSpPr><p:cNvPr id="1" name=""/><p:cNvGrpSpPr/><p:nvPr/></p:nvGrpSpPr>'
        "<p:grpSpPr/>"
        f"{''.join(shapes)}"
        "</p:spTree></p:cSld></p:sld>"
    )


def rels_xml(*relationships: tuple[str, str, str]) -> str:
    """A relationship part from (id, type, target) triples."""
    entries = "".join(
        f'<Relationship Id="{rel_id}" Type="{rel_type}" Target="{target}"/>'
        for rel_id, rel_type, target in relationships
    )
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
        f"{entries}</Relationships>"
    )


def image_rel(rel_id: str, media_name: str) -> tuple[str, str, str]:
    return (rel_id, IMAGE_REL_TYPE, f"../media/{media_name}")


# endregion


# region package builders
def build_package(
    slides: dict[int, str] | None = None,
    rels: dict[int, str] | None = None,
    media: dict[str, bytes] | None = None,
    extra: dict[str, str | bytes] | None = None,
    compression: int = zipfile.ZIP_DEFLATED,
) -> bytes:
    """
    Zip up a minimal presentation package.

    Args:
        slides: slide number -> slide XML, written to ppt/slides/slideN.xml
        rels: slide number -> relationship XML, written to ppt/slides/_rels/slideN.xml.rels
        media: file name -> bytes, written under ppt/media/
        extra: any other part path -> content
        compression: ZIP_STORED keeps part bytes verbatim, which corrupt_part() relies on.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=compression) as zf:
        zf.writestr("[Content_Types].xml", "<Types/>")
        for number, xml in (slides or {}).items():
            zf.writestr(f"ppt/slides/slide{number}.xml", xml)
        for number, xml in (rels or {}).items():
            zf.writestr(f"ppt/slides/_rels/slide{number}.xml.rels", xml)
        for name, content in (media or {}).items():
            zf.writestr(f"ppt/media/{name}", content)
        for path, content in (extra or {}).items():
            zf.writestr(path, content)
    return buffer.getvalue()


def corrupt_part(package: bytes, marker: bytes, replacement: bytes) -> bytes:
    """
    Flip bytes inside a stored part so its CRC no longer matches.

    The package must have been built with ZIP_STORED, and marker must occur exactly once.
    The zip directory stays intact, so the part is still listed, it just can't be read back.
    """
    assert len(marker) == len(replacement), "Replacement must keep the part length"
    assert package.count(marker) == 1, f"Marker {marker!r} must appear exactly once"
    return package.replace(marker, replacement)


def make_document(content: bytes, name: str = "deck.pptx") -> PresentationDocument:
    return PresentationDocument(name=name, content=content)


# endregion
