"""Application-wide constants and configuration values."""

# region Package layout
# Fixed part locations inside an OOXML presentation package.
SLIDES_DIR = "ppt/slides/"
SLIDE_RELS_DIR = "ppt/slides/_rels/"
MEDIA_DIR = "ppt/media/"

# Raster image extensions we know how to hand to a renderer.
RASTER_EXTENSIONS: tuple[str, ...] = (
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".bmp",
    ".svg",
    ".webp",
)
# endregion

# region Units
PIXELS_PER_INCH = 96
# endregion

# region Geometry defaults
# Used when a shape has no transform at all.
FALLBACK_X_PX = 50
FALLBACK_Y_PX = 50
FALLBACK_WIDTH_PX = 200
FALLBACK_HEIGHT_PX = 50

# Padding added around the union of element extents, and the smallest canvas we will hand out.
BOUNDS_PADDING_PX = 20
MIN_CANVAS_WIDTH_PX = 600
MIN_CANVAS_HEIGHT_PX = 400

# Canvas for a slide with nothing on it.
EMPTY_CANVAS_WIDTH_PX = 800
EMPTY_CANVAS_HEIGHT_PX = 600
# endregion

# region Text decomposition
# NOTE: These are estimates. There are no font metrics available here, so paragraph and run
# placement inside a text box is approximate by nature.
PARAGRAPH_LINE_HEIGHT_PX = 30
MIN_PARAGRAPH_HEIGHT_PX = 25
MIN_RUN_WIDTH_PX = 80
SUB_ELEMENT_ORDER_STEP = 0.1

TITLE_MAX_LENGTH = 100
TITLE_MIN_LENGTH = 2
TITLE_TERMINATORS: tuple[str, ...] = ("。", "！", "？")
# endregion

# region Placeholders
PLACEHOLDER_TITLE_TEMPLATE = "Slide {index}"
PARSE_FAILED_TEXT = "parse failed"
TEXT_ONLY_PARSE_FAILED_TEXT = "could not parse content"
# endregion

# region Compositing
Z_INDEX_IMAGE = 1
Z_INDEX_TEXT = 10
# endregion

# region Navigator
ZOOM_DEFAULT = 100
ZOOM_MIN = 50
ZOOM_MAX = 200
ZOOM_STEP = 10
FIT_ZOOM_MIN = 50
FIT_ZOOM_MAX = 150
FIT_CONTAINER_MARGIN_PX = 40
# endregion

# region Output
# Output filename bases which are combined with a unique timestamp on save to prevent clobbering
OUTPUT_JSON_FILENAME = r"slides2scene_output.json"
OUTPUT_HTML_FILENAME = r"slides2scene_output.html"
# endregion

DEBUG_ENV_VAR = "SLIDES2SCENE_DEBUG"
DEBUG_MODE_DEFAULT = False  # When the env var is unset or unreadable
