"""Type aliases and TypedDicts for sketch_recognition inter-module contracts."""

from typing import TypedDict

import torch

# (image [1, H, W] float32 in [0, 1], one-hot label [C] float32)
Sample = tuple[torch.Tensor, torch.Tensor]


class Batch(TypedDict):
    """A single mini-batch produced by the batcher.

    images: Float tensor of shape (B, 1, H, W), values in [0, 1].
    labels: Float tensor of shape (B, C), one-hot rows.
    """

    images: torch.Tensor
    labels: torch.Tensor
