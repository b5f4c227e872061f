"""
Text measurement for label fitting and glyph drawing

The layout engine only needs to know how wide a string is at a given pixel
size. Exact widths come from a TrueType font loaded through Pillow; when no
font can be found a conservative estimate keeps every diagram renderable,
just with less precise label fitting.

Examples:
    >>> from lollipops.fonts import HeuristicMeasurer, create_measurer
    >>> measurer = create_measurer()          # Arial/DejaVu if present
    >>> HeuristicMeasurer().measure("P53_TAD", 12)
    70
"""

import os
from pathlib import Path
from typing import Protocol

from PIL import ImageFont

from .errors import FontUnavailable
from .logging_config import get_logger

logger = get_logger(__name__)

FONT_ENV = "LOLLIPOPS_FONT"

# Arial first for parity with published diagrams, then common free fallbacks
DEFAULT_FONT_PATHS = (
    "/Library/Fonts/Arial.ttf",
    "/System/Library/Fonts/Supplemental/Arial.ttf",
    "C:/Windows/Fonts/arial.ttf",
    "/usr/share/fonts/truetype/msttcorefonts/arial.ttf",
    "/usr/share/fonts/truetype/msttcorefonts/Arial.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
)


class TextMeasurer(Protocol):
    """Capability consumed by the layout engine and the renderers"""

    family: str

    def measure(self, text: str, size: float) -> int:
        """Pixel width of text at the given font size"""
        ...

    def font(self, size: float) -> ImageFont.FreeTypeFont:
        """Pillow font used to draw glyphs at the given size"""
        ...


class FontMeasurer:
    """
    Exact text metrics from a TrueType font

    Faces are created once per size and widths are memoized per
    (text, size) pair; both caches are pure optimizations.

    Args:
        path: Path to a .ttf/.otf file
        family: CSS font family for vector output (default: the font's name)

    Raises:
        FontUnavailable: If the file cannot be opened or parsed
    """

    def __init__(self, path: str | Path, family: str | None = None):
        self.path = str(path)
        try:
            sample = ImageFont.truetype(self.path, 12)
        except OSError as e:
            raise FontUnavailable(f"Unable to load font '{self.path}': {e}") from e

        self.family = family or sample.getname()[0]
        self._faces: dict[float, ImageFont.FreeTypeFont] = {12.0: sample}
        self._widths: dict[tuple[str, float], int] = {}

    def font(self, size: float) -> ImageFont.FreeTypeFont:
        size = float(size)
        face = self._faces.get(size)
        if face is None:
            face = ImageFont.truetype(self.path, size)
            self._faces[size] = face
        return face

    def measure(self, text: str, size: float) -> int:
        key = (text, float(size))
        width = self._widths.get(key)
        if width is None:
            width = int(self.font(size).getlength(text))
            self._widths[key] = width
        return width

    def __repr__(self) -> str:
        return f"FontMeasurer(path='{self.path}', family='{self.family}')"


class HeuristicMeasurer:
    """
    Ballpark text widths when no font file is available

    Each character is assumed to be ``size - 2`` pixels wide, which
    overestimates proportional fonts and so errs on the side of shorter
    labels. Glyphs are drawn with Pillow's bundled default font, which is
    a bitmap font when Pillow is built without FreeType.
    """

    family = "sans-serif"

    def __init__(self):
        self._faces: dict[float, ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}

    def measure(self, text: str, size: float) -> int:
        return int(len(text) * (size - 2))

    def font(self, size: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        size = float(size)
        face = self._faces.get(size)
        if face is None:
            face = ImageFont.load_default(size=size)
            self._faces[size] = face
        return face

    def __repr__(self) -> str:
        return "HeuristicMeasurer()"


def load_default_font() -> FontMeasurer:
    """
    Load the first usable font from the common install locations

    Returns:
        FontMeasurer for Arial when installed, otherwise DejaVu Sans

    Raises:
        FontUnavailable: If none of the candidates can be loaded
    """
    for candidate in DEFAULT_FONT_PATHS:
        if not Path(candidate).is_file():
            continue
        try:
            return FontMeasurer(candidate)
        except FontUnavailable as e:
            logger.debug(str(e))

    # Let FreeType search the platform font directories by file name
    try:
        return FontMeasurer("DejaVuSans.ttf")
    except FontUnavailable as e:
        raise FontUnavailable(
            "Unable to find Arial.ttf or DejaVuSans.ttf, which are used for "
            "accurate label sizing"
        ) from e


def create_measurer(path: str | Path | None = None) -> TextMeasurer:
    """
    Resolve the text measurement capability for a render

    Resolution order: explicit path, the LOLLIPOPS_FONT environment
    variable, the default font locations, and finally the heuristic
    estimator. A missing font is logged and never fatal.

    Args:
        path: Optional TrueType font file

    Returns:
        FontMeasurer when a font loads, HeuristicMeasurer otherwise
    """
    path = path or os.getenv(FONT_ENV)
    try:
        if path:
            return FontMeasurer(path)
        return load_default_font()
    except FontUnavailable as e:
        logger.warning(f"{e}. Falling back to estimated text widths.")
        return HeuristicMeasurer()
