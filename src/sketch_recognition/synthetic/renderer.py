"""Synthetic solid-shape renderer for demo and test datasets.

Draws a filled black shape on a white page with a random size and a small
random offset, matching the "dark ink on white" convention of hand drawn
sketches captured from the canvas.
"""

from __future__ import annotations

import math
import random

from PIL import Image, ImageDraw

SHAPES: tuple[str, ...] = ("circle", "square", "triangle")

_PAGE: tuple[int, int, int] = (255, 255, 255)
_INK: tuple[int, int, int] = (0, 0, 0)


class ShapeRenderer:
    """Renders filled shapes on a square white image.

    Args:
        image_size: Output image side in pixels.
        min_scale: Smallest shape extent as a fraction of ``image_size``.
        max_scale: Largest shape extent as a fraction of ``image_size``.
        max_offset: Largest centre shift as a fraction of ``image_size``.
        seed: Random seed for reproducibility.
    """

    def __init__(
        self,
        image_size: int = 128,
        min_scale: float = 0.45,
        max_scale: float = 0.75,
        max_offset: float = 0.1,
        seed: int = 42,
    ) -> None:
        if not 0 < min_scale <= max_scale <= 1:
            msg = f"need 0 < min_scale <= max_scale <= 1, got {min_scale}, {max_scale}"
            raise ValueError(msg)
        self.image_size = image_size
        self.min_scale = min_scale
        self.max_scale = max_scale
        self.max_offset = max_offset
        self.rng = random.Random(seed)  # noqa: S311

    def render(self, shape: str) -> tuple[Image.Image, dict[str, object]]:
        """Render one image of ``shape``.

        Returns:
            Tuple of (RGB image, metadata dict with shape, extent and centre).
        """
        if shape not in SHAPES:
            msg = f"Unknown shape {shape!r}. Use one of {SHAPES}."
            raise ValueError(msg)
        size = self.image_size
        img = Image.new("RGB", (size, size), _PAGE)
        draw = ImageDraw.Draw(img)

        extent = size * self.rng.uniform(self.min_scale, self.max_scale)
        half = extent / 2
        # Keep the whole shape on the page
        slack = max(0.0, min(size * self.max_offset, size / 2 - half))
        cx = size / 2 + self.rng.uniform(-slack, slack)
        cy = size / 2 + self.rng.uniform(-slack, slack)

        if shape == "circle":
            draw.ellipse((cx - half, cy - half, cx + half, cy + half), fill=_INK)
        elif shape == "square":
            draw.rectangle((cx - half, cy - half, cx + half, cy + half), fill=_INK)
        else:
            points = [
                (
                    cx + half * math.cos(math.radians(angle)),
                    cy + half * math.sin(math.radians(angle)),
                )
                for angle in (-90, 30, 150)
            ]
            draw.polygon(points, fill=_INK)

        metadata: dict[str, object] = {
            "shape": shape,
            "extent": round(extent, 2),
            "center": (round(cx, 2), round(cy, 2)),
        }
        return img, metadata
