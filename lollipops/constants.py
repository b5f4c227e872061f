"""Constants and configuration defaults for lollipops diagrams"""

from enum import Enum

APP_NAME = "lollipops"
APP_DESCRIPTION = "Lollipop-style diagrams of protein point mutations"
APP_VERSION = "1.0.0"

# ==============================================================================
# Output and Labelling Modes
# ==============================================================================


class DomainLabelStyle(Enum):
    """How domain labels that do not fit their block are handled"""

    OFF = "off"  # never draw text inside domains
    FIT = "fit"  # only labels that fit unchanged
    TRUNCATE = "truncate"  # shorten labels until they fit (default)


class OutputFormat(Enum):
    """Renderer backends"""

    SVG = "svg"  # vector document
    PNG = "png"  # raster image


# ==============================================================================
# Tick Priorities
# ==============================================================================

# Higher priority wins when axis labels compete for the same space
PRIORITY_SEQUENCE_START = 0
PRIORITY_MOTIF = 1
PRIORITY_REGION = 5
PRIORITY_MUTATION = 10
PRIORITY_SEQUENCE_END = 99

# ==============================================================================
# Diagram Geometry (pixels at 72 DPI)
# ==============================================================================

DEFAULT_DPI = 72.0

LOLLIPOP_RADIUS = 4.0
LOLLIPOP_HEIGHT = 28.0
BACKBONE_HEIGHT = 14.0
MOTIF_HEIGHT = 18.0
DOMAIN_HEIGHT = 24.0
PADDING = 15.0
AXIS_PADDING = 10.0
AXIS_HEIGHT = 15.0
TEXT_PADDING = 5.0

DOMAIN_FONT_SIZE = 12.0
AXIS_FONT_SIZE = 10.0
LABEL_FONT_SIZE = 10.0
LEGEND_FONT_SIZE = 12.0
LEGEND_ROW_HEIGHT = 14.0
LEGEND_SWATCH_SIZE = 12.0
LEGEND_X = 4.0

AXIS_LABEL_SPACING = 20.0  # minimum pixel distance between axis labels
MIN_AUTO_WIDTH = 400.0
SHADOW_OFFSET = 2.0
STEM_WIDTH = 2.0
LINE_WIDTH = 1.0
MOTIF_CORNER_RADIUS = 2.0

MIN_LABEL_BOX_WIDTH = 10.0  # blocks narrower than this never get a label
MIN_TRUNCATE_WIDTH = 40.0  # character trimming only above this width

LABEL_ANGLE = -30.0  # degrees, mutation label rotation

# ==============================================================================
# Colors
# ==============================================================================

SYNONYMOUS_COLOR = "#0000ff"
MUTATION_COLOR = "#ff0000"

BACKGROUND_COLOR = "#ffffff"
BACKBONE_COLOR = "#babdb6"
AXIS_COLOR = "#aaaaaa"
AXIS_TEXT_COLOR = "#000000"
LABEL_TEXT_COLOR = "#555555"
DOMAIN_TEXT_COLOR = "#ffffff"
LEGEND_TEXT_COLOR = "#000000"

DISORDER_OPACITY = 0.15

# ==============================================================================
# Feature Categories
# ==============================================================================

DISORDER_TYPE = "disorder"

# Motif categories that are never drawn
SUPPRESSED_MOTIF_TYPES = frozenset({"pfamb"})

# Human-readable legend names for motif categories
MOTIF_NAMES = {
    "disorder": "Disordered region",
    "low_complexity": "Low complexity region",
    "sig_p": "Signal peptide region",
    "coiled_coil": "Coiled-coil motif",
    "transmembrane": "Transmembrane region",
}

# Link prefix for relative hrefs found in Pfam-style feature files
PFAM_LEGACY_URL = "http://pfam-legacy.xfam.org"
