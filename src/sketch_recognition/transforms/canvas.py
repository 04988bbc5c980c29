"""Headless ink canvas: collects pen strokes and rasterizes them."""

from __future__ import annotations

from collections.abc import Iterable

from PIL import Image, ImageDraw

from sketch_recognition.transforms.conversion import resize_image

Point = tuple[float, float]

_TRANSPARENT: tuple[int, int, int, int] = (0, 0, 0, 0)
_INK: tuple[int, int, int, int] = (0, 0, 0, 255)


class SketchCanvas:
    """A drawing surface of ``width`` x ``height`` pixels.

    Strokes are polylines drawn with a round pen of ``pen_width`` pixels.
    The surface itself is transparent: only strokes carry ink, which is why
    :func:`canvas_to_image` composites the raster onto white.

    Args:
        width: Surface width in pixels.
        height: Surface height in pixels.
        pen_width: Pen diameter in pixels.
    """

    def __init__(self, width: int = 400, height: int = 400, pen_width: int = 15) -> None:
        if width < 1 or height < 1:
            msg = f"canvas size must be positive, got {width}x{height}"
            raise ValueError(msg)
        if pen_width < 1:
            msg = f"pen_width must be >= 1, got {pen_width}"
            raise ValueError(msg)
        self.width = width
        self.height = height
        self.pen_width = pen_width
        self.strokes: list[list[Point]] = []

    @property
    def is_empty(self) -> bool:
        return not self.strokes

    def _check_point(self, x: float, y: float) -> Point:
        if not (0 <= x < self.width and 0 <= y < self.height):
            msg = f"point ({x}, {y}) is outside the {self.width}x{self.height} canvas"
            raise ValueError(msg)
        return (float(x), float(y))

    def begin_stroke(self, x: float, y: float) -> None:
        """Put the pen down at ``(x, y)``."""
        self.strokes.append([self._check_point(x, y)])

    def add_point(self, x: float, y: float) -> None:
        """Extend the current stroke to ``(x, y)``."""
        if not self.strokes:
            msg = "add_point called before begin_stroke"
            raise RuntimeError(msg)
        self.strokes[-1].append(self._check_point(x, y))

    def add_stroke(self, points: Iterable[Point]) -> None:
        """Add a whole stroke at once."""
        stroke = [self._check_point(x, y) for x, y in points]
        if not stroke:
            msg = "a stroke needs at least one point"
            raise ValueError(msg)
        self.strokes.append(stroke)

    def clear(self) -> None:
        self.strokes.clear()

    def render(self) -> Image.Image:
        """Rasterize the strokes at on-screen resolution (RGBA, transparent page)."""
        img = Image.new("RGBA", (self.width, self.height), _TRANSPARENT)
        draw = ImageDraw.Draw(img)
        radius = self.pen_width / 2
        for stroke in self.strokes:
            if len(stroke) > 1:
                draw.line(stroke, fill=_INK, width=self.pen_width, joint="curve")
            # Round caps and joints, as drawn by an elliptical stylus
            for x, y in stroke:
                draw.ellipse(
                    (x - radius, y - radius, x + radius, y + radius), fill=_INK
                )
        return img


def canvas_to_image(canvas: SketchCanvas, size: tuple[int, int]) -> Image.Image:
    """Rasterize ``canvas`` and resize it to ``size`` = ``(height, width)``.

    The result is an RGB image with a white background, ready for
    :func:`~sketch_recognition.transforms.conversion.image_to_tensor`.
    """
    return resize_image(canvas.render(), size)
