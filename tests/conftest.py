"""Shared pytest fixtures for sketch_recognition tests."""

from pathlib import Path

import pytest
import torch
from PIL import Image

from sketch_recognition.synthetic.renderer import ShapeRenderer
from sketch_recognition.synthetic.writer import SyntheticWriter
from sketch_recognition.types import Sample


@pytest.fixture()
def tmp_dataset_dir(tmp_path: Path) -> Path:
    """Minimal folder-per-label dataset.

    3 labels x 2 images = 6 images.  Folders are created in reverse
    alphabetical order so tests can check that label order is sorted rather
    than creation order.  Images have different sizes and modes to exercise
    the resize and conversion path.
    """
    root = tmp_path / "dataset"
    root.mkdir()
    for shade, label in ((200, "gamma"), (120, "beta"), (40, "alpha")):
        label_dir = root / label
        label_dir.mkdir()
        Image.new("RGB", (48, 40), color=(shade, shade, shade)).save(
            label_dir / "img_00.png"
        )
        Image.new("L", (20, 20), color=shade).save(label_dir / "img_01.png")
    return root


@pytest.fixture()
def shapes_dataset_dir(tmp_path: Path) -> Path:
    """2 labels ("circle", "square") x 20 synthetic 128x128 solid shapes."""
    root = tmp_path / "shapes"
    renderer = ShapeRenderer(image_size=128, seed=0)
    writer = SyntheticWriter(root)
    for shape in ("circle", "square"):
        for i in range(20):
            img, _ = renderer.render(shape)
            writer.write_image(img, shape, i)
    return root


@pytest.fixture()
def indexed_samples() -> list[Sample]:
    """10 samples whose image values equal their dataset index (2 classes)."""
    samples: list[Sample] = []
    for i in range(10):
        label = torch.zeros(2)
        label[i % 2] = 1.0
        samples.append((torch.full((1, 4, 4), float(i)), label))
    return samples
