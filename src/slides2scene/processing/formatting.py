"""Resolve DrawingML paragraph and run properties into flat StyleSets."""

import logging
import xml.etree.ElementTree as ET

from pptx.oxml.ns import qn

from slides2scene.models import FormattedText, StyleSet, TextAlign, TextSegment, merge_styles
from slides2scene.processing.positions import emu_to_pixels
from slides2scene.processing.xml_parts import first_descendant, local_name

log = logging.getLogger("slides2scene")

# region Color tables
# Fixed stand-ins for the default Office theme; the package's own theme part is not consulted.
THEME_COLORS: dict[str, str] = {
    "dk1": "#000000",
    "lt1": "#ffffff",
    "dk2": "#1F497D",
    "lt2": "#EEECE1",
    "accent1": "#4F81BD",
    "accent2": "#F79646",
    "accent3": "#9BBB59",
    "accent4": "#8064A2",
    "accent5": "#4BACC6",
    "accent6": "#F24992",
}

HIGHLIGHT_THEME_COLORS: dict[str, str] = {
    **THEME_COLORS,
    "hlink": "#0563C1",
    "folHlink": "#954F72",
}

PRESET_COLORS: dict[str, str] = {
    "yellow": "#FFFF00",
    "lime": "#00FF00",
    "cyan": "#00FFFF",
    "magenta": "#FF00FF",
    "blue": "#0000FF",
    "red": "#FF0000",
    "darkBlue": "#000080",
    "darkCyan": "#008080",
    "darkGreen": "#008000",
    "darkMagenta": "#800080",
    "darkRed": "#800000",
    "darkYellow": "#808000",
    "darkGray": "#808080",
    "lightGray": "#C0C0C0",
    "black": "#000000",
}
# endregion

ALIGNMENTS: dict[str, TextAlign] = {
    "l": TextAlign.LEFT,
    "ctr": TextAlign.CENTER,
    "r": TextAlign.RIGHT,
    "just": TextAlign.JUSTIFY,
}

# Base layer of every cascade. Empty: a renderer's own defaults apply to anything unset.
DEFAULT_STYLE = StyleSet()

_TRUE_VALUES = ("1", "true")
_FALSE_VALUES = ("0", "false")


# region small helpers
def _flag(value: str | None) -> bool | None:
    """OOXML boolean attribute -> True/False, or None when absent or unrecognized."""
    if value is None:
        return None
    if value.lower() in _TRUE_VALUES:
        return True
    if value.lower() in _FALSE_VALUES:
        return False
    return None


def _hex(value: str | None) -> str | None:
    if not value:
        return None
    return f"#{value}"


def _font_size_points(raw: str | None) -> float | None:
    """sz is stored in hundredths of a point."""
    if raw is None:
        return None
    try:
        return int(raw) / 100
    except ValueError:
        log.debug(f"Ignoring non-numeric font size {raw!r}")
        return None


# endregion


# region resolve_color
def resolve_color(
    container: ET.Element | None,
    theme_table: dict[str, str],
    preset_table: dict[str, str] | None = None,
) -> str | None:
    """
    Colour of a fill-like container (a:solidFill, a:highlight) as "#RRGGBB".

    Looks at a:srgbClr first, then a:schemeClr against theme_table, then a:prstClr against
    preset_table when one is given. Unknown theme or preset names resolve to None.
    """
    if container is None:
        return None

    srgb = container.find(qn("a:srgbClr"))
    if srgb is not None:
        return _hex(srgb.get("val"))

    scheme = container.find(qn("a:schemeClr"))
    if scheme is not None:
        return theme_table.get(scheme.get("val", ""))

    if preset_table is not None:
        preset = container.find(qn("a:prstClr"))
        if preset is not None:
            return preset_table.get(preset.get("val", ""))

    return None


# endregion


# region resolve_paragraph_style
def resolve_paragraph_style(paragraph: ET.Element) -> StyleSet:
    """
    Paragraph-level style from a:pPr: alignment and left margin.

    Only the horizontal margin is converted; paragraph spacing is handled by the shape
    extractor's offset estimate, not by the style.
    """
    p_pr = paragraph.find(qn("a:pPr"))
    if p_pr is None:
        return StyleSet()

    alignment = ALIGNMENTS.get(p_pr.get("algn", ""))

    margin_left = None
    raw_margin = p_pr.get("marL")
    if raw_margin is not None:
        try:
            margin_left = emu_to_pixels(int(raw_margin))
        except ValueError:
            log.debug(f"Ignoring non-numeric marL {raw_margin!r}")

    return StyleSet(alignment=alignment, margin_left=margin_left)


# endregion


# region resolve_run_properties
def resolve_run_properties(r_pr: ET.Element | None) -> StyleSet:
    """
    Style carried by an a:rPr (or a:defRPr / a:endParaRPr, which share its schema).

    East-Asian typeface overrides Latin when both are present, so CJK text lands in a face
    that can draw it.
    """
    if r_pr is None:
        return StyleSet()

    underline = r_pr.get("u")
    strike = r_pr.get("strike")

    font_family = None
    latin = r_pr.find(qn("a:latin"))
    if latin is not None and latin.get("typeface"):
        font_family = latin.get("typeface")
    east_asian = r_pr.find(qn("a:ea"))
    if east_asian is not None and east_asian.get("typeface"):
        font_family = east_asian.get("typeface")

    return StyleSet(
        font_size=_font_size_points(r_pr.get("sz")),
        font_family=font_family,
        bold=_flag(r_pr.get("b")),
        italic=_flag(r_pr.get("i")),
        underline=None if underline is None else underline != "none",
        strikethrough=None if strike is None else strike != "noStrike",
        color=resolve_color(r_pr.find(qn("a:solidFill")), THEME_COLORS),
        background_color=resolve_color(
            r_pr.find(qn("a:highlight")), HIGHLIGHT_THEME_COLORS, PRESET_COLORS
        ),
    )


def resolve_run_style(run: ET.Element) -> StyleSet:
    """Run-level style from the run's own a:rPr."""
    return resolve_run_properties(run.find(qn("a:rPr")))


# endregion


# region default_run_style
def default_run_style(paragraph: ET.Element | None) -> StyleSet:
    """
    Fallback run style from the first a:defRPr under the paragraph.

    Only font size and Latin typeface are taken from it.
    """
    if paragraph is None:
        return StyleSet()

    def_r_pr = first_descendant(paragraph, "a:defRPr")
    if def_r_pr is None:
        return StyleSet()

    font_family = None
    latin = def_r_pr.find(qn("a:latin"))
    if latin is not None and latin.get("typeface"):
        font_family = latin.get("typeface")

    return StyleSet(font_size=_font_size_points(def_r_pr.get("sz")), font_family=font_family)


# endregion


# region effective_run_style
def effective_run_style(
    run: ET.Element,
    paragraph: ET.Element | None = None,
    paragraph_style: StyleSet | None = None,
) -> StyleSet:
    """
    The style a run is drawn with: defaults, then paragraph, then run. Later layers win.

    Args:
        run: The a:r element.
        paragraph: Its a:p, used for the a:defRPr fallback and (if paragraph_style is None)
            for the paragraph layer.
        paragraph_style: Already resolved paragraph layer, to avoid resolving it per run.
    """
    run_style = resolve_run_style(run)
    if run_style.is_empty:
        run_style = default_run_style(paragraph)

    if paragraph_style is None:
        paragraph_style = (
            resolve_paragraph_style(paragraph) if paragraph is not None else StyleSet()
        )

    return merge_styles(DEFAULT_STYLE, paragraph_style, run_style)


# endregion


# region format_paragraph
def format_paragraph(paragraph: ET.Element) -> FormattedText:
    """
    Turn an a:p into text plus one styled segment per run.

    Fields (a:fld, e.g. slide numbers) are treated like runs. Soft breaks (a:br) become
    line-break segments.
    """
    paragraph_style = resolve_paragraph_style(paragraph)
    formatted = FormattedText()

    for child in paragraph:
        name = local_name(child.tag)
        if name in ("r", "fld"):
            formatted.append(format_run(child, paragraph, paragraph_style))
        elif name == "br":
            formatted.append(TextSegment.line_break())

    return formatted


def format_run(
    run: ET.Element,
    paragraph: ET.Element | None = None,
    paragraph_style: StyleSet | None = None,
) -> TextSegment:
    """One a:r as a styled segment."""
    t = run.find(qn("a:t"))
    text = (t.text or "") if t is not None else ""
    return TextSegment(
        text=text, style=effective_run_style(run, paragraph, paragraph_style)
    )


# endregion


# region format_text_body
def format_text_body(paragraphs: list[ET.Element]) -> FormattedText:
    """All paragraphs of a shape as one block, joined by line-break segments."""
    formatted = FormattedText()
    for i, paragraph in enumerate(paragraphs):
        if i > 0:
            formatted.append(TextSegment.line_break())
        for segment in format_paragraph(paragraph).segments:
            formatted.append(segment)
    return formatted


# endregion
