"""Write synthetic images into a folder-per-label dataset on disk."""

from __future__ import annotations

from pathlib import Path

from loguru import logger
from PIL import Image


class SyntheticWriter:
    """Writes images to ``output_dir/<label>/<label>_<index>.png``.

    The resulting tree is exactly the layout ``load_dataset`` reads.

    Args:
        output_dir: Dataset root to write into.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self._counts: dict[str, int] = {}

    def write_image(self, img: Image.Image, label: str, index: int) -> Path:
        """Save ``img`` under the folder for ``label`` and return its path."""
        if not label or "/" in label or label in (".", ".."):
            msg = f"invalid label folder name: {label!r}"
            raise ValueError(msg)
        label_dir = self.output_dir / label
        label_dir.mkdir(exist_ok=True)
        path = label_dir / f"{label}_{index:05d}.png"
        img.save(path)
        self._counts[label] = self._counts.get(label, 0) + 1
        return path

    def summary(self) -> dict[str, int]:
        """Images written per label so far."""
        for label, count in sorted(self._counts.items()):
            logger.info(f"Wrote {count} synthetic image(s) for {label!r}")
        return dict(self._counts)

    @property
    def num_written(self) -> int:
        """Number of images written so far."""
        return sum(self._counts.values())
