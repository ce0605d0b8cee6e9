"""Exception types raised while reconstructing a presentation.

Failures are contained at the smallest unit that can absorb them:

- ``PartParseError``: one slide or one relationship part is unreadable. The slide becomes a
  placeholder, the relationship map becomes empty.
- ``MediaExtractError``: one image could not be materialized. It is left out of the asset table.
- ``ArchiveReadError``: the container itself (or a part inside it) cannot be decompressed. Fatal
  for the running pipeline stage.
- ``NoExtractableContentError``: a stage that only shows one kind of content found none of it.

The render pipeline selector turns stage-level failures into a transition to the next stage.
"""


class Slides2SceneError(Exception):
    """Base class for every error raised by slides2scene."""


class ArchiveReadError(Slides2SceneError):
    """The package (or one of its parts) could not be opened or decompressed."""


class PartParseError(Slides2SceneError):
    """An XML part could not be parsed or its content could not be extracted."""


class MediaExtractError(Slides2SceneError):
    """A single media part could not be materialized."""


class NoExtractableContentError(Slides2SceneError):
    """A stage finished without producing anything it could show."""
