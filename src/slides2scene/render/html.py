"""Standalone HTML preview of a RenderResult.

Whatever stage the pipeline committed to, the preview shows it: positioned slides for the
combined stage, a gallery for image-only, a text outline for text-only, and the information
card for the fallback. Images are inlined as data: URIs so the file has no dependencies.
"""

from __future__ import annotations

import logging
from html import escape

from slides2scene.internals import constants
from slides2scene.models import (
    FallbackSummary,
    MediaAsset,
    RenderResult,
    Slide,
    StageName,
    StyleSet,
    TextSegment,
    TextSlide,
)
from slides2scene.navigator import PresentationState
from slides2scene.processing.assemble_slides import composite_layers, find_title_element

log = logging.getLogger("slides2scene")

_CSS = """
html,body{margin:0;padding:0;background:#f3f2f1;color:#323130;font-family:system-ui,-apple-system,'Segoe UI',Roboto,'Noto Sans',sans-serif;}
header{padding:16px 28px;background:#ffffff;border-bottom:1px solid #e1dfdd;}
header h1{margin:0;font-size:20px;}
header .stage{color:#605e5c;font-size:13px;}
main{padding:24px 28px;}
.thumbnails{display:flex;flex-wrap:wrap;gap:8px;margin-bottom:24px;}
.thumbnail{display:block;width:140px;padding:6px;background:#fff;border:1px solid #e1dfdd;border-radius:6px;color:inherit;text-decoration:none;font-size:12px;}
.thumbnail img{width:100%;height:70px;object-fit:cover;border-radius:3px;}
.slide{margin:0 auto 32px auto;}
.slide h2{font-size:16px;margin:0 0 8px 0;}
.slide-canvas{position:relative;margin:0 auto;background:#ffffff;border:1px solid #e1dfdd;border-radius:8px;overflow:hidden;transform-origin:top center;}
.slide-canvas.placeholder{background:#fdf6f6;}
.positioned-image-container img{width:100%;height:100%;object-fit:cover;border-radius:4px;}
.positioned-text,.positioned-subtitle{white-space:pre-wrap;}
.positioned-subtitle{font-weight:600;}
.gallery{display:grid;grid-template-columns:repeat(auto-fill,minmax(240px,1fr));gap:16px;}
.gallery figure{margin:0;padding:12px;background:#fff;border:1px solid #e1dfdd;border-radius:8px;}
.gallery img{max-width:100%;height:auto;border-radius:4px;}
.text-slide{background:#fff;border:1px solid #e1dfdd;border-radius:8px;padding:16px 20px;margin-bottom:16px;}
.fallback{background:#fff;border:1px solid #e1dfdd;border-radius:8px;padding:20px 24px;max-width:760px;}
"""


# region style_to_css
def style_to_css(style: StyleSet) -> str:
    """Inline CSS declarations for a resolved style. Unset attributes produce nothing."""
    declarations: list[str] = []

    if style.font_size is not None:
        declarations.append(f"font-size: {style.font_size:g}pt")
    if style.font_family:
        declarations.append(f'font-family: "{style.font_family}"')
    if style.bold:
        declarations.append("font-weight: bold")
    if style.italic:
        declarations.append("font-style: italic")

    decorations = []
    if style.underline:
        decorations.append("underline")
    if style.strikethrough:
        decorations.append("line-through")
    if decorations:
        declarations.append(f"text-decoration: {' '.join(decorations)}")

    if style.color:
        declarations.append(f"color: {style.color}")
    if style.background_color:
        declarations.append(f"background-color: {style.background_color}")
    if style.alignment is not None:
        declarations.append(f"text-align: {style.alignment.value}")
    if style.margin_left:
        declarations.append(f"margin-left: {style.margin_left}px")

    return "; ".join(declarations)


# endregion


# region segments_to_html
def segments_to_html(segments: tuple[TextSegment, ...] | list[TextSegment]) -> str:
    """Styled spans for text segments, <br> for line breaks."""
    parts: list[str] = []
    for segment in segments:
        if segment.is_line_break:
            parts.append("<br>")
            continue
        css = style_to_css(segment.style)
        style_attr = f' style="{escape(css)}"' if css else ""
        parts.append(f"<span{style_attr}>{escape(segment.text)}</span>")
    return "".join(parts)


# endregion


# region render_slide
def render_slide(slide: Slide, zoom_percent: int = constants.ZOOM_DEFAULT) -> str:
    """
    One slide as an absolutely positioned canvas.

    Two passes: every image first at z-index 1, then every text block at z-index 10, each
    pass in element order. Positions are shifted so the canvas starts at the slide bounds'
    top-left corner. The text that became the slide title is shown as the heading rather
    than again on the canvas.
    """
    bounds = slide.bounds
    images, texts = composite_layers(slide)
    title_element = None if slide.is_placeholder else find_title_element(slide.elements)
    canvas_class = "slide-canvas placeholder" if slide.is_placeholder else "slide-canvas"
    scale = zoom_percent / 100

    html = [
        f'<section class="slide" id="slide-{slide.index}">',
        f"<h2>{slide.index}. {escape(slide.title)}</h2>",
        f'<div class="{canvas_class}" style="width: {bounds.width}px; height: {bounds.height}px; transform: scale({scale:g});">',
    ]

    for image in images:
        pos = image.position
        html.append(
            f'<div class="positioned-image-container" style="position: absolute; '
            f"left: {pos.x - bounds.min_x}px; top: {pos.y - bounds.min_y}px; "
            f'width: {pos.width}px; height: {pos.height}px; z-index: {constants.Z_INDEX_IMAGE};">'
            f'<img src="{image.asset.to_data_uri()}" alt="{escape(image.alt)}"></div>'
        )

    for text in texts:
        if text is title_element:
            continue
        pos = text.position
        css_class = "positioned-subtitle" if text.is_title else "positioned-text"
        html.append(
            f'<div class="{css_class}" style="position: absolute; '
            f"left: {pos.x - bounds.min_x}px; top: {pos.y - bounds.min_y}px; "
            f'width: {pos.width}px; z-index: {constants.Z_INDEX_TEXT};">'
            f"{segments_to_html(text.segments)}</div>"
        )

    html.append("</div>")
    html.append("</section>")
    return "\n".join(html)


# endregion


# region stage bodies
def render_thumbnails(state: PresentationState) -> str:
    items = []
    for thumb in state.thumbnails():
        image = (
            f'<img src="{thumb.image.to_data_uri()}" alt="">' if thumb.image else ""
        )
        items.append(
            f'<a class="thumbnail" href="#slide-{thumb.number}">{image}'
            f"<div>{thumb.number}. {escape(thumb.title)}</div></a>"
        )
    return f'<nav class="thumbnails">{"".join(items)}</nav>'


def render_gallery(assets: list[MediaAsset]) -> str:
    figures = [
        f'<figure><img src="{asset.to_data_uri()}" alt="{escape(asset.name)}">'
        f"<figcaption>Image {i}: {escape(asset.name)} ({asset.byte_size} bytes)</figcaption></figure>"
        for i, asset in enumerate(assets, start=1)
    ]
    return (
        f"<p>{len(assets)} image(s) extracted from the presentation.</p>"
        f'<div class="gallery">{"".join(figures)}</div>'
    )


def render_text_slides(text_slides: list[TextSlide]) -> str:
    blocks = []
    for text_slide in text_slides:
        paragraphs = "".join(f"<p>{escape(p)}</p>" for p in text_slide.paragraphs)
        blocks.append(
            f'<div class="text-slide"><h2>{text_slide.index}. {escape(text_slide.title)}</h2>'
            f"{paragraphs}</div>"
        )
    return "".join(blocks)


def render_summary(summary: FallbackSummary) -> str:
    guidance = "".join(f"<li>{escape(line)}</li>" for line in summary.guidance)
    return (
        '<div class="fallback">'
        "<h2>Presentation information</h2>"
        f"<p><strong>File name:</strong> {escape(summary.file_name)}</p>"
        f"<p><strong>File size:</strong> {escape(summary.file_size_label)}</p>"
        f"<p><strong>File type:</strong> {escape(summary.file_type)}</p>"
        f"<h3>Other ways to view it</h3><ul>{guidance}</ul>"
        "</div>"
    )


# endregion


# region render_html
def render_html(result: RenderResult, initial_zoom: int = constants.ZOOM_DEFAULT) -> str:
    """
    A complete HTML document for a render result.

    Args:
        result: Output of the render pipeline selector.
        initial_zoom: Zoom percent applied to the slide canvases (combined stage only).
    """
    if result.stage == StageName.COMBINED:
        state = PresentationState()
        state.load(result.slides)
        state.zoom_percent = min(max(initial_zoom, constants.ZOOM_MIN), constants.ZOOM_MAX)
        body = render_thumbnails(state) + "\n".join(
            render_slide(slide, state.zoom_percent) for slide in state.slides
        )
    elif result.stage == StageName.IMAGE_ONLY:
        body = render_gallery(result.gallery)
    elif result.stage == StageName.TEXT_ONLY:
        body = render_text_slides(result.text_slides)
    elif result.summary is not None:
        body = render_summary(result.summary)
    else:
        body = "<p>Nothing to show.</p>"

    log.debug(f"Rendered HTML preview for {result.document_name} ({result.stage.value})")

    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="utf-8"/>\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1"/>\n'
        f"<title>{escape(result.document_name)}</title>\n<style>{_CSS}</style>\n</head>\n"
        "<body>\n<header>"
        f"<h1>{escape(result.document_name)}</h1>"
        f'<div class="stage">Rendered with the {result.stage.value.replace("_", "-")} view</div>'
        "</header>\n"
        f"<main>\n{body}\n</main>\n</body>\n</html>\n"
    )


# endregion
