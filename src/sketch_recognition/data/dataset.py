"""In-memory dataset built from a folder-per-label image directory."""

from __future__ import annotations

from pathlib import Path

import torch
from loguru import logger
from PIL import Image
from torch.utils.data import Dataset

from sketch_recognition.data.utils import get_files, get_label_dirs
from sketch_recognition.errors import DecodeError
from sketch_recognition.transforms.conversion import image_to_tensor, resize_image
from sketch_recognition.types import Sample


def one_hot(index: int, num_classes: int) -> torch.Tensor:
    """Float32 vector of length ``num_classes`` with a single 1 at ``index``."""
    if not 0 <= index < num_classes:
        msg = f"label index {index} out of range for {num_classes} classes"
        raise ValueError(msg)
    vec = torch.zeros(num_classes, dtype=torch.float32)
    vec[index] = 1.0
    return vec


def decode_image(path: Path | str) -> Image.Image:
    """Open and fully decode ``path``.

    Raises:
        DecodeError: The file is not a readable image.
    """
    try:
        with Image.open(path) as img:
            img.load()
            return img.copy()
    except (OSError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"Cannot decode image {path}: {exc}") from exc


class SketchFolderDataset(Dataset[Sample]):
    """Labeled images materialized in memory as ``(image, one_hot)`` tensors.

    Layout is ``root/<label>/<image file>``.  Label names are the subfolder
    names sorted lexicographically; a label's index is its position in that
    order.  Every file in a label folder must be a decodable image: a single
    bad file aborts the whole load.

    Each image is resized to ``image_size`` = ``(height, width)`` over a white
    background and converted to a ``(1, H, W)`` grayscale tensor in
    ``[0, 1]``.  Labels are float32 one-hot vectors of length
    ``len(label_names)``.

    Args:
        root: Dataset root directory.
        image_size: Target ``(height, width)``.

    Raises:
        FileNotFoundError: ``root`` does not exist.
        NotADirectoryError: ``root`` is not a directory.
        DatasetError: No label folders, or a folder cannot be listed.
        DecodeError: A file is not a decodable image.
    """

    def __init__(self, root: Path | str, image_size: tuple[int, int]) -> None:
        self.root = Path(root)
        self.image_size = (int(image_size[0]), int(image_size[1]))
        self.samples: list[Sample] = []
        self.paths: list[Path] = []

        label_dirs = get_label_dirs(self.root)
        self.label_names: list[str] = [d.name for d in label_dirs]
        num_classes = len(self.label_names)

        for label_idx, label_dir in enumerate(label_dirs):
            files = get_files(label_dir)
            if not files:
                logger.warning(f"Label folder {label_dir} contains no files")
            target = one_hot(label_idx, num_classes)
            for path in files:
                img = resize_image(decode_image(path), self.image_size)
                self.samples.append((image_to_tensor(img), target.clone()))
                self.paths.append(path)
            logger.debug(f"Loaded {len(files)} image(s) for label {label_dir.name!r}")

        logger.info(
            f"SketchFolderDataset: loaded {len(self.samples)} samples, "
            f"{num_classes} labels from {self.root}"
        )

    @property
    def num_classes(self) -> int:
        return len(self.label_names)

    def __len__(self) -> int:
        return len(self.samples)

    def __getitem__(self, idx: int) -> Sample:
        return self.samples[idx]

    def class_counts(self) -> dict[int, int]:
        """Number of samples per label index (every label present, even if 0)."""
        counts = dict.fromkeys(range(self.num_classes), 0)
        for _, target in self.samples:
            counts[int(target.argmax())] += 1
        return counts


def load_dataset(
    root: Path | str, image_size: tuple[int, int]
) -> tuple[SketchFolderDataset, list[str]]:
    """Load ``root`` into memory and return the dataset and its label names."""
    dataset = SketchFolderDataset(root, image_size)
    return dataset, list(dataset.label_names)
