"""Tests for slide assembly: ordering, titles, canvas bounds and per-slide failure containment."""

import asyncio
import zipfile

import pytest

from slides2scene.errors import ArchiveReadError
from slides2scene.internals.resource_cache import PartCache
from slides2scene.models import (
    Bounds,
    ImageElement,
    MediaAsset,
    Position,
    Relationship,
    RelationshipKind,
    Slide,
    TextElement,
)
from slides2scene.processing.archive import PresentationArchive
from slides2scene.processing.assemble_slides import (
    assemble_slides,
    build_slide,
    composite_layers,
    compute_bounds,
    find_title_element,
    infer_title,
    list_slide_parts,
    placeholder_slide,
)
from tests import helpers


def _text(
    content: str, position: Position, order: float = 0, is_title: bool = False
) -> TextElement:
    return TextElement(
        content=content, segments=(), position=position, order=order, is_title=is_title
    )


def _image(position: Position, order: float = 0) -> ImageElement:
    return ImageElement(
        asset=MediaAsset(name="image1.png", content=b"x"),
        alt="",
        position=position,
        order=order,
    )


def _assemble(
    package: bytes,
    relationships: dict[int, dict[str, Relationship]] | None = None,
    assets: list[MediaAsset] | None = None,
) -> list[Slide]:
    async def scenario() -> list[Slide]:
        with PresentationArchive.open(package) as archive:
            return await assemble_slides(
                archive, PartCache(), relationships or {}, assets or []
            )

    return asyncio.run(scenario())


def _titled_slide(title: str) -> str:
    return helpers.slide_xml(
        helpers.text_shape(
            2,
            helpers.paragraph(helpers.run(title)),
            geometry=helpers.xfrm(50, 40, 600, 80),
        )
    )


# region list_slide_parts
def test_slide_parts_sort_numerically() -> None:
    package = helpers.build_package(
        slides={10: helpers.slide_xml(), 2: helpers.slide_xml(), 1: helpers.slide_xml()},
        rels={1: helpers.rels_xml()},
        extra={"ppt/slides/extra/slide3.xml": helpers.slide_xml()},
    )
    with PresentationArchive.open(package) as archive:
        numbers = [number for number, _ in list_slide_parts(archive)]
    assert numbers == [1, 2, 10]


# endregion


# region infer_title
def test_title_prefers_title_like_text() -> None:
    position = Position.fallback()
    elements = [
        _text("这是第一段很长的说明文字。", position),
        _text("Roadmap", position, is_title=True),
    ]
    assert infer_title(elements, 1) == "Roadmap"


def test_title_falls_back_to_first_text() -> None:
    elements = [_text("No.", Position.fallback()), _text("ok", Position.fallback())]
    assert infer_title(elements, 4) == "No."


def test_title_of_slide_without_text() -> None:
    assert infer_title([_image(Position.fallback())], 7) == "Slide 7"
    assert infer_title([], 3) == "Slide 3"


def test_title_element_is_the_exact_source_element() -> None:
    position = Position.fallback()
    title = _text("Roadmap", position, is_title=True)
    repeat = _text("Roadmap", position, is_title=True)

    assert find_title_element([title, repeat]) is title
    assert find_title_element([repeat, title]) is repeat
    assert find_title_element([_image(position)]) is None


# endregion


# region compute_bounds
def test_bounds_of_empty_slide() -> None:
    assert compute_bounds([]) == Bounds(min_x=0, min_y=0, width=800, height=600)


def test_small_content_gets_minimum_canvas() -> None:
    bounds = compute_bounds([_text("x", Position(x=100, y=100, width=400, height=200))])
    assert bounds == Bounds(min_x=80, min_y=80, width=600, height=400)


def test_bounds_enclose_every_element_with_padding() -> None:
    elements = [
        _text("a", Position(x=0, y=0, width=1280, height=100)),
        _image(Position(x=600, y=300, width=400, height=420)),
    ]

    bounds = compute_bounds(elements)

    assert bounds == Bounds(min_x=-20, min_y=-20, width=1320, height=760)
    for element in elements:
        assert bounds.min_x <= element.position.x
        assert element.position.right <= bounds.max_x
        assert bounds.min_y <= element.position.y
        assert element.position.bottom <= bounds.max_y


# endregion


# region build_slide
def test_build_slide_sorts_by_order_and_keeps_ties_stable() -> None:
    relationships = {
        "rId2": Relationship(
            rel_id="rId2", target="../media/image1.png", kind=RelationshipKind.IMAGE
        )
    }
    assets = [MediaAsset(name="image1.png", content=b"x")]
    xml = helpers.slide_xml(
        helpers.picture_shape(2, "rId2", geometry=helpers.xfrm(0, 0, 100, 100)),
        helpers.text_shape(
            3,
            helpers.paragraph(helpers.run("Heading")),
            geometry=helpers.xfrm(0, 120, 300, 40),
        ),
    )

    slide = build_slide(1, xml, relationships, assets)

    assert [e.kind for e in slide.elements] == ["image", "text"]
    assert slide.title == "Heading"
    assert not slide.is_placeholder


def test_placeholder_slide_shape() -> None:
    slide = placeholder_slide(3, "ppt/slides/slide3.xml")

    assert slide.is_placeholder
    assert slide.index == 3
    assert slide.title == "Slide 3"
    assert [e.content for e in slide.text_elements] == ["parse failed"]
    assert slide.source_part == "ppt/slides/slide3.xml"


# endregion


# region assemble_slides
def test_assemble_indexes_slides_contiguously() -> None:
    package = helpers.build_package(
        slides={
            1: _titled_slide("Intro"),
            2: _titled_slide("Middle"),
            10: _titled_slide("End"),
        }
    )

    slides = _assemble(package)

    assert [(s.index, s.title) for s in slides] == [
        (1, "Intro"),
        (2, "Middle"),
        (3, "End"),
    ]


def test_one_bad_slide_becomes_a_placeholder(caplog: pytest.LogCaptureFixture) -> None:
    """Five slides, the third one malformed: exactly that one is replaced."""
    slides_xml = {n: _titled_slide(f"Topic {n}") for n in range(1, 6)}
    slides_xml[3] = "<p:sld><p:cSld><unclosed"
    package = helpers.build_package(slides=slides_xml)

    with caplog.at_level("WARNING", logger="slides2scene"):
        slides = _assemble(package)

    assert len(slides) == 5
    assert [s.is_placeholder for s in slides] == [False, False, True, False, False]
    assert slides[2].title == "Slide 3"
    assert slides[2].text_elements[0].content == "parse failed"
    assert [s.title for s in slides if not s.is_placeholder] == [
        "Topic 1",
        "Topic 2",
        "Topic 4",
        "Topic 5",
    ]
    assert "slide3.xml" in caplog.text


def test_relationships_are_applied_per_slide_number() -> None:
    package = helpers.build_package(
        slides={
            1: _titled_slide("No pictures"),
            2: helpers.slide_xml(helpers.picture_shape(2, "rId2")),
        }
    )
    relationships = {
        2: {
            "rId2": Relationship(
                rel_id="rId2", target="../media/image1.png", kind=RelationshipKind.IMAGE
            )
        }
    }
    assets = [MediaAsset(name="image1.png", content=b"x")]

    slides = _assemble(package, relationships, assets)

    assert slides[0].image_elements == []
    assert len(slides[1].image_elements) == 1
    assert slides[1].title == "Slide 2"


def test_package_without_slides_is_an_archive_error() -> None:
    package = helpers.build_package(media={"image1.png": helpers.PNG_1X1})
    with pytest.raises(ArchiveReadError, match="No slide parts"):
        _assemble(package)


def test_undecompressable_slide_fails_the_whole_assembly() -> None:
    package = helpers.build_package(
        slides={1: _titled_slide("Fine"), 2: _titled_slide("CORRUPTME")},
        compression=zipfile.ZIP_STORED,
    )
    corrupted = helpers.corrupt_part(package, b"CORRUPTME", b"corruptme")

    with pytest.raises(ArchiveReadError):
        _assemble(corrupted)


# endregion


# region composite_layers
def test_images_are_painted_before_text_whatever_their_order() -> None:
    slide = Slide(
        index=1,
        title="t",
        elements=[
            _text("front", Position.fallback(), order=1),
            _image(Position.fallback(), order=5),
            _text("back", Position.fallback(), order=0),
        ],
    )

    images, texts = composite_layers(slide)

    assert [e.order for e in images] == [5]
    assert [e.content for e in texts] == ["back", "front"]


# endregion
