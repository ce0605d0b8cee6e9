"""Navigation state for showing assembled slides one at a time."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from slides2scene.internals import constants
from slides2scene.models import MediaAsset, Slide

log = logging.getLogger("slides2scene")

PREVIOUS_KEYS = ("ArrowLeft", "ArrowUp")
NEXT_KEYS = ("ArrowRight", "ArrowDown")


# region Thumbnail
@dataclass(frozen=True)
class Thumbnail:
    """What a slide strip needs per slide."""

    number: int
    title: str
    image: MediaAsset | None


# endregion


# region PresentationState
@dataclass
class PresentationState:
    """
    Current slide, zoom and fullscreen flag over a loaded slide list.

    Every operation is a no-op when it cannot apply (out of range, at a boundary,
    zoom already at its limit), so a UI can call them without checking first.
    """

    slides: list[Slide] = field(default_factory=list)
    current_index: int = 0  # 0-based
    zoom_percent: int = constants.ZOOM_DEFAULT
    is_fullscreen: bool = False

    # region load
    def load(self, slides: list[Slide]) -> None:
        """Show a new slide list from the start, at default zoom, not fullscreen."""
        self.slides = list(slides)
        self.current_index = 0
        self.zoom_percent = constants.ZOOM_DEFAULT
        self.is_fullscreen = False
        log.debug(f"Navigator loaded {len(self.slides)} slide(s)")

    # endregion

    @property
    def current_slide(self) -> Slide | None:
        if not self.slides:
            return None
        return self.slides[self.current_index]

    # region navigation
    def go_to(self, index: int) -> bool:
        """Jump to a 0-based index. Returns False (and does nothing) if it is out of range."""
        if not 0 <= index < len(self.slides):
            return False
        self.current_index = index
        return True

    def next(self) -> bool:
        return self.go_to(self.current_index + 1)

    def previous(self) -> bool:
        return self.go_to(self.current_index - 1)

    def handle_key(self, key: str) -> bool:
        """Arrow keys: left/up go back, right/down go forward. Other keys are ignored."""
        if key in PREVIOUS_KEYS:
            return self.previous()
        if key in NEXT_KEYS:
            return self.next()
        return False

    # endregion

    # region zoom
    def zoom_in(self) -> int:
        self.zoom_percent = min(
            constants.ZOOM_MAX, self.zoom_percent + constants.ZOOM_STEP
        )
        return self.zoom_percent

    def zoom_out(self) -> int:
        self.zoom_percent = max(
            constants.ZOOM_MIN, self.zoom_percent - constants.ZOOM_STEP
        )
        return self.zoom_percent

    def fit_to_width(self, container_width: float, canvas_width: float) -> int:
        """
        Zoom so the canvas fills the container, leaving a small margin.

        Clamped to a narrower range than manual zoom. A non-positive canvas width leaves the
        zoom unchanged.
        """
        if canvas_width <= 0:
            return self.zoom_percent
        raw = (container_width - constants.FIT_CONTAINER_MARGIN_PX) / canvas_width * 100
        clamped = min(max(raw, constants.FIT_ZOOM_MIN), constants.FIT_ZOOM_MAX)
        self.zoom_percent = round(clamped)
        return self.zoom_percent

    # endregion

    def toggle_fullscreen(self) -> bool:
        self.is_fullscreen = not self.is_fullscreen
        return self.is_fullscreen

    # region thumbnails
    def thumbnails(self) -> list[Thumbnail]:
        """One entry per slide: 1-based number, title and the first image on it, if any."""
        result: list[Thumbnail] = []
        for slide in self.slides:
            images = slide.image_elements
            result.append(
                Thumbnail(
                    number=slide.index,
                    title=slide.title,
                    image=images[0].asset if images else None,
                )
            )
        return result

    # endregion


# endregion
