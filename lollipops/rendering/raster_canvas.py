"""
RGBA pixel buffer with the drawing primitives the raster backend needs

Pixels live in a ``(height, width, 4)`` uint8 numpy array. Every primitive
composites source-over onto the buffer, so translucent fills (shadows,
disorder shading) layer the same way they do in the vector output. Glyphs are
rasterized by Pillow into a coverage mask first and composited like any other
shape.
"""

import math

import numpy as np
from PIL import Image, ImageColor, ImageDraw, ImageFont

Color = str | tuple[int, int, int] | tuple[int, int, int, int]


def to_rgba(color: Color) -> tuple[int, int, int, int]:
    """Normalize '#rrggbb' or an RGB(A) tuple to an RGBA tuple"""
    if isinstance(color, str):
        return ImageColor.getcolor(color, "RGBA")
    if len(color) == 3:
        return (*color, 255)
    return tuple(color)


def rotate_point(dx: float, dy: float, angle: float) -> tuple[float, float]:
    """
    Rotate an offset in screen coordinates (y down)

    Positive angles turn clockwise on screen, matching SVG ``rotate()``.
    """
    theta = math.radians(angle)
    cos, sin = math.cos(theta), math.sin(theta)
    return (dx * cos - dy * sin, dx * sin + dy * cos)


def font_metrics(
    font: ImageFont.ImageFont | ImageFont.FreeTypeFont, text: str
) -> tuple[int, int]:
    """
    Ascent and descent of a font, in pixels

    Bitmap fonts (Pillow built without FreeType) have no ``getmetrics()``;
    their glyphs sit on the bottom of the bounding box, so the descent is 0.
    """
    if hasattr(font, "getmetrics"):
        return font.getmetrics()
    return max(1, font.getbbox(text)[3]), 0


class RasterCanvas:
    """
    Drawing surface backed by a numpy array

    Args:
        width: Width in pixels
        height: Height in pixels
        background: Initial fill color

    Examples:
        >>> canvas = RasterCanvas(100, 40)
        >>> canvas.fill_rect(10, 10, 20, 5, "#ff0000")
        >>> canvas.pixel(15, 12)
        (255, 0, 0, 255)
    """

    def __init__(self, width: int, height: int, background: Color = "#ffffff"):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 4), dtype=np.uint8)
        self.pixels[:, :] = to_rgba(background)

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        return tuple(int(v) for v in self.pixels[y, x])

    def composite(self, x: int, y: int, coverage: np.ndarray, color: Color) -> None:
        """
        Blend a color through a coverage mask placed with its top-left at (x, y)

        Args:
            x: Left edge of the mask on the canvas (may be negative)
            y: Top edge of the mask on the canvas (may be negative)
            coverage: 2D array of 0..1 weights
            color: Source color; its alpha multiplies the coverage
        """
        mask_h, mask_w = coverage.shape
        x0, y0 = max(x, 0), max(y, 0)
        x1, y1 = min(x + mask_w, self.width), min(y + mask_h, self.height)
        if x0 >= x1 or y0 >= y1:
            return

        r, g, b, a = to_rgba(color)
        alpha = coverage[y0 - y : y1 - y, x0 - x : x1 - x, np.newaxis] * (a / 255.0)

        region = self.pixels[y0:y1, x0:x1].astype(np.float64)
        source = np.array([r, g, b], dtype=np.float64)
        region[..., :3] = source * alpha + region[..., :3] * (1.0 - alpha)
        region[..., 3:] = 255.0 * alpha + region[..., 3:] * (1.0 - alpha)
        self.pixels[y0:y1, x0:x1] = np.clip(np.rint(region), 0, 255).astype(np.uint8)

    def _fill_box(self, x0: int, y0: int, x1: int, y1: int, color: Color) -> None:
        """Fill the half-open box [x0, x1) x [y0, y1)"""
        if x1 <= x0 or y1 <= y0:
            return
        self.composite(x0, y0, np.ones((y1 - y0, x1 - x0)), color)

    def hline(self, x0: int, x1: int, y: int, color: Color) -> None:
        """Horizontal line including both end points"""
        self._fill_box(min(x0, x1), y, max(x0, x1) + 1, y + 1, color)

    def vline(self, x: int, y0: int, y1: int, color: Color) -> None:
        """Vertical line including both end points"""
        self._fill_box(x, min(y0, y1), x + 1, max(y0, y1) + 1, color)

    def thick_hline(self, x0: int, x1: int, y: int, thickness: float, color: Color) -> None:
        for offset in range(max(1, round(thickness))):
            self.hline(x0, x1, y + offset, color)

    def thick_vline(self, x: int, y0: int, y1: int, thickness: float, color: Color) -> None:
        for offset in range(max(1, round(thickness))):
            self.vline(x + offset, y0, y1, color)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None:
        self._fill_box(int(x), int(y), int(x + w), int(y + h), color)

    def fill_rounded_rect(
        self, x: float, y: float, w: float, h: float, radius: float, color: Color
    ) -> None:
        """Filled rectangle with circular corners"""
        left, top = int(x), int(y)
        box_w, box_h = int(x + w) - left, int(y + h) - top
        if box_w <= 0 or box_h <= 0:
            return
        radius = min(radius, box_w / 2, box_h / 2)
        if radius < 1:
            self._fill_box(left, top, left + box_w, top + box_h, color)
            return

        mask = Image.new("L", (box_w, box_h), 0)
        ImageDraw.Draw(mask).rounded_rectangle(
            (0, 0, box_w - 1, box_h - 1), radius=int(radius), fill=255
        )
        self.composite(left, top, np.asarray(mask, dtype=np.float64) / 255.0, color)

    def shadow_rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        color: Color,
        offset: float,
        radius: float = 0.0,
    ) -> None:
        """
        Rectangle with an approximated drop shadow

        The shadow is a stack of faint black copies offset diagonally by
        ``offset`` down to 1 pixels; their alphas sum to roughly 30%.
        """
        if offset > 0:
            shade = (0, 0, 0, 1 + int(75 / offset))
            step = offset
            while step > 0:
                self.fill_rounded_rect(x + step, y + step, w, h, radius, shade)
                step -= 1
        self.fill_rounded_rect(x, y, w, h, radius, color)

    def circle(self, x0: int, y0: int, radius: int, color: Color) -> None:
        """Filled circle using the integer midpoint algorithm"""
        f = 1 - radius
        dx, dy = 1, -2 * radius
        x, y = 0, radius

        # Scanlines overlap, so blend each covered pixel exactly once
        coverage = np.zeros((2 * radius + 1, 2 * radius + 1))

        def span(left: int, right: int, row: int) -> None:
            coverage[row + radius, left + radius : right + radius + 1] = 1.0

        span(-radius, radius, 0)
        coverage[:, radius] = 1.0
        while x < y:
            if f >= 0:
                y -= 1
                dy += 2
                f += dy
            x += 1
            dx += 2
            f += dx
            span(-x, x, y)
            span(-x, x, -y)
            span(-y, y, x)
            span(-y, y, -x)

        self.composite(x0 - radius, y0 - radius, coverage, color)

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        font: ImageFont.ImageFont | ImageFont.FreeTypeFont,
        color: Color,
        anchor: str = "start",
        angle: float = 0.0,
    ) -> None:
        """
        Draw text with its baseline anchor at (x, y)

        Args:
            text: Text to draw
            x: Anchor x
            y: Baseline y
            font: Pillow TrueType or bitmap font
            color: Text color
            anchor: "start" (left aligned) or "middle" (centred on x)
            angle: Rotation about the anchor in degrees, SVG convention
        """
        if not text:
            return
        ascent, descent = font_metrics(font, text)
        text_w = max(1, math.ceil(font.getlength(text)))
        mask = Image.new("L", (text_w, ascent + descent), 0)
        ImageDraw.Draw(mask).text((0, 0), text, font=font, fill=255)

        anchor_x = text_w / 2 if anchor == "middle" else 0.0
        anchor_y = float(ascent)

        if angle:
            center_x, center_y = mask.width / 2, mask.height / 2
            mask = mask.rotate(-angle, resample=Image.Resampling.BICUBIC, expand=True)
            dx, dy = rotate_point(anchor_x - center_x, anchor_y - center_y, angle)
            anchor_x = mask.width / 2 + dx
            anchor_y = mask.height / 2 + dy

        coverage = np.asarray(mask, dtype=np.float64) / 255.0
        self.composite(round(x - anchor_x), round(y - anchor_y), coverage, color)

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels)
