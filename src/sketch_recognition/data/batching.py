"""Mini-batch construction over an in-memory dataset."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence

import torch
from loguru import logger
from torch.utils.data import IterableDataset

from sketch_recognition.types import Batch, Sample


def make_batches(
    dataset: Sequence[Sample],
    batch_size: int,
    order: Sequence[int] | None = None,
) -> list[Batch]:
    """Slice ``dataset`` into stacked mini-batches.

    Batch ``i`` holds traversal positions ``[i * batch_size,
    min((i + 1) * batch_size, len(dataset)))``.  The traversal is dataset
    order unless ``order`` (a permutation of dataset indices) is given.
    Only the last batch may be smaller than ``batch_size``.

    Args:
        dataset: Indexable sequence of ``(image, one_hot)`` samples.
        batch_size: Maximum number of samples per batch.
        order: Optional traversal order.

    Returns:
        ``ceil(len(dataset) / batch_size)`` batches; empty for an empty dataset.
    """
    if batch_size < 1:
        msg = f"batch_size must be >= 1, got {batch_size}"
        raise ValueError(msg)
    indices = list(range(len(dataset))) if order is None else list(order)
    if len(indices) != len(dataset):
        msg = f"order has {len(indices)} entries for a dataset of {len(dataset)}"
        raise ValueError(msg)

    batches: list[Batch] = []
    for start in range(0, len(indices), batch_size):
        chunk = [dataset[i] for i in indices[start : start + batch_size]]
        batches.append(
            {
                "images": torch.stack([image for image, _ in chunk]),
                "labels": torch.stack([label for _, label in chunk]),
            }
        )
    return batches


class EpochBatches(IterableDataset[Batch]):
    """Regenerates the batch list every time it is iterated (once per epoch).

    By default every epoch sees the same deterministic order.  With
    ``shuffle=True`` epoch ``e`` uses a permutation drawn from a generator
    seeded with ``seed + e``, so runs are reproducible.

    Wrap in ``DataLoader(..., batch_size=None)`` so batches pass through as-is.
    """

    def __init__(
        self,
        dataset: Sequence[Sample],
        batch_size: int,
        shuffle: bool = False,
        seed: int = 42,
    ) -> None:
        super().__init__()
        if batch_size < 1:
            msg = f"batch_size must be >= 1, got {batch_size}"
            raise ValueError(msg)
        self.dataset = dataset
        self.batch_size = batch_size
        self.shuffle = shuffle
        self.seed = seed
        self.epoch = 0

    def __len__(self) -> int:
        return math.ceil(len(self.dataset) / self.batch_size)

    def _order(self) -> list[int] | None:
        if not self.shuffle:
            return None
        generator = torch.Generator().manual_seed(self.seed + self.epoch)
        return torch.randperm(len(self.dataset), generator=generator).tolist()

    def __iter__(self) -> Iterator[Batch]:
        batches = make_batches(self.dataset, self.batch_size, self._order())
        logger.debug(
            f"Epoch {self.epoch}: {len(batches)} batch(es) of up to {self.batch_size}"
        )
        self.epoch += 1
        yield from batches
