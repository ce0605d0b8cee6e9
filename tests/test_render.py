"""Tests for the JSON scene graph and the HTML preview."""

import json

import pytest

from slides2scene.models import (
    Bounds,
    FallbackSummary,
    ImageElement,
    MediaAsset,
    Position,
    RenderResult,
    Slide,
    StageAttempt,
    StageName,
    StyleSet,
    TextAlign,
    TextElement,
    TextSegment,
    TextSlide,
)
from slides2scene.render.html import render_html, render_slide, style_to_css
from slides2scene.render.scene_json import result_to_dict, to_json

ASSET = MediaAsset(name="image1.png", content=b"png", content_type="image/png")


@pytest.fixture
def slide() -> Slide:
    """A title, a body paragraph on top of a picture, on a canvas starting at (80, 60)."""
    title = TextElement(
        content="Roadmap",
        segments=(TextSegment("Roadmap", StyleSet(bold=True)),),
        position=Position(x=100, y=80, width=600, height=50),
        order=2,
        is_title=True,
    )
    body = TextElement(
        content="Ship <it>",
        segments=(
            TextSegment("Ship", StyleSet(font_size=18.0)),
            TextSegment.line_break(),
            TextSegment("<it>"),
        ),
        position=Position(x=100, y=200, width=400, height=40),
        order=5,
    )
    picture = ImageElement(
        asset=ASSET,
        alt="Team photo",
        position=Position(x=300, y=150, width=200, height=150),
        order=7,
    )
    return Slide(
        index=1,
        title="Roadmap",
        elements=[title, body, picture],
        bounds=Bounds(min_x=80, min_y=60, width=640, height=400),
    )


# region style_to_css
def test_style_to_css_full() -> None:
    style = StyleSet(
        alignment=TextAlign.CENTER,
        margin_left=48,
        font_size=10.5,
        font_family="Calibri",
        bold=True,
        italic=True,
        underline=True,
        strikethrough=True,
        color="#FF0000",
        background_color="#FFFF00",
    )

    assert style_to_css(style) == (
        'font-size: 10.5pt; font-family: "Calibri"; font-weight: bold; '
        "font-style: italic; text-decoration: underline line-through; color: #FF0000; "
        "background-color: #FFFF00; text-align: center; margin-left: 48px"
    )


def test_style_to_css_skips_unset_and_false_values() -> None:
    assert style_to_css(StyleSet()) == ""
    assert style_to_css(StyleSet(bold=False, underline=False)) == ""


# endregion


# region render_slide
def test_images_are_drawn_before_text(slide: Slide) -> None:
    html = render_slide(slide)

    image_at = html.index("positioned-image-container")
    text_at = html.index("positioned-text")
    assert image_at < text_at
    assert "z-index: 1;" in html
    assert "z-index: 10;" in html


def test_positions_are_relative_to_the_canvas(slide: Slide) -> None:
    html = render_slide(slide)

    assert "left: 220px; top: 90px; width: 200px; height: 150px;" in html  # picture
    assert "left: 20px; top: 140px; width: 400px;" in html  # body text
    assert 'style="width: 640px; height: 400px; transform: scale(1);"' in html


def test_title_text_is_the_heading_not_a_canvas_block(slide: Slide) -> None:
    html = render_slide(slide)

    assert "<h2>1. Roadmap</h2>" in html
    assert "positioned-subtitle" not in html


def test_only_the_title_source_is_hidden_not_its_repeats(slide: Slide) -> None:
    footer = TextElement(
        content="Roadmap",
        segments=(TextSegment("Roadmap"),),
        position=Position(x=100, y=400, width=200, height=20),
        order=9,
    )
    slide.elements.append(footer)

    html = render_slide(slide)

    assert "<h2>1. Roadmap</h2>" in html
    assert "positioned-subtitle" not in html
    assert html.count("<span>Roadmap</span>") == 1
    assert "top: 340px" in html


def test_text_is_escaped_and_breaks_become_br(slide: Slide) -> None:
    html = render_slide(slide)

    assert '<span style="font-size: 18pt">Ship</span><br><span>&lt;it&gt;</span>' in html
    assert 'alt="Team photo"' in html


def test_zoom_is_applied_as_scale(slide: Slide) -> None:
    assert "transform: scale(1.5);" in render_slide(slide, zoom_percent=150)


# endregion


# region render_html per stage
def test_combined_html_has_thumbnails_and_slides(slide: Slide) -> None:
    result = RenderResult(
        stage=StageName.COMBINED,
        document_name="talk.pptx",
        slides=[slide],
        gallery=[ASSET],
    )

    html = render_html(result, initial_zoom=80)

    assert html.startswith("<!DOCTYPE html>")
    assert '<a class="thumbnail" href="#slide-1">' in html
    assert 'id="slide-1"' in html
    assert "transform: scale(0.8);" in html
    assert "Rendered with the combined view" in html


def test_initial_zoom_is_clamped(slide: Slide) -> None:
    result = RenderResult(
        stage=StageName.COMBINED, document_name="t.pptx", slides=[slide]
    )
    assert "transform: scale(2);" in render_html(result, initial_zoom=500)


def test_gallery_html() -> None:
    result = RenderResult(
        stage=StageName.IMAGE_ONLY, document_name="t.pptx", gallery=[ASSET]
    )

    html = render_html(result)

    assert "1 image(s) extracted" in html
    assert ASSET.to_data_uri() in html
    assert "Rendered with the image-only view" in html


def test_text_only_html() -> None:
    result = RenderResult(
        stage=StageName.TEXT_ONLY,
        document_name="t.pptx",
        text_slides=[TextSlide(index=1, title="Intro", paragraphs=["a & b"])],
    )

    html = render_html(result)

    assert "<h2>1. Intro</h2>" in html
    assert "<p>a &amp; b</p>" in html


def test_fallback_html() -> None:
    summary = FallbackSummary(
        file_name="x.pptx",
        file_size=2048,
        file_size_label="2 KB",
        file_type="PowerPoint presentation (PPTX)",
        guidance=("Try another viewer.",),
    )
    result = RenderResult(
        stage=StageName.FALLBACK, document_name="x.pptx", summary=summary
    )

    html = render_html(result)

    assert "2 KB" in html
    assert "<li>Try another viewer.</li>" in html


# endregion


# region scene json
def test_scene_json_shape(slide: Slide) -> None:
    result = RenderResult(
        stage=StageName.COMBINED,
        document_name="talk.pptx",
        slides=[slide],
        gallery=[ASSET],
        attempts=[],
    )

    data = json.loads(to_json(result))

    assert data["stage"] == "combined"
    assert data["slides"][0]["bounds"] == {
        "min_x": 80,
        "min_y": 60,
        "width": 640,
        "height": 400,
    }
    elements = data["slides"][0]["elements"]
    assert [e["kind"] for e in elements] == ["text", "text", "image"]
    assert elements[0]["segments"] == [{"text": "Roadmap", "style": {"bold": True}}]
    assert elements[1]["segments"][1] == {"line_break": True}
    assert elements[2]["asset"] == "ppt/media/image1.png"
    assert data["gallery"][0] == {
        "name": "image1.png",
        "handle": "ppt/media/image1.png",
        "content_type": "image/png",
        "byte_size": 3,
    }
    assert data["summary"] is None


def test_scene_json_can_inline_media() -> None:
    result = RenderResult(
        stage=StageName.IMAGE_ONLY, document_name="t.pptx", gallery=[ASSET]
    )

    data = result_to_dict(result, include_media_data=True)

    assert data["gallery"][0]["data_uri"] == "data:image/png;base64,cG5n"


def test_scene_json_records_failed_stages() -> None:
    result = RenderResult(
        stage=StageName.IMAGE_ONLY,
        document_name="t.pptx",
        attempts=[StageAttempt(StageName.COMBINED, "ArchiveReadError", "bad CRC")],
    )

    assert result_to_dict(result)["attempts"] == [
        {"stage": "combined", "error_type": "ArchiveReadError", "message": "bad CRC"}
    ]


def test_scene_json_keeps_non_ascii_text() -> None:
    result = RenderResult(
        stage=StageName.TEXT_ONLY,
        document_name="t.pptx",
        text_slides=[TextSlide(index=1, title="演示文稿")],
    )
    assert "演示文稿" in to_json(result)


# endregion
