"""Data pipeline for sketch_recognition."""

from sketch_recognition.data.batching import EpochBatches, make_batches
from sketch_recognition.data.dataset import (
    SketchFolderDataset,
    load_dataset,
    one_hot,
)

__all__ = [
    "EpochBatches",
    "SketchFolderDataset",
    "load_dataset",
    "make_batches",
    "one_hot",
]
