"""Two-conv / two-dense sketch classifier."""

from __future__ import annotations

from typing import Any

import torch
import torch.nn as nn
import torch.nn.functional as F

from sketch_recognition.config import TrainingConfig
from sketch_recognition.errors import ShapeError
from sketch_recognition.models.base import BaseSketchModel

CONV_CHANNELS = 16
CONV_KERNEL = 8
CONV_STRIDE = 2


def conv_output_size(size: int, kernel: int = CONV_KERNEL, stride: int = CONV_STRIDE) -> int:
    """Output length of an unpadded convolution: ``(size - kernel) // stride + 1``."""
    if size < kernel:
        msg = f"input length {size} is smaller than the kernel ({kernel})"
        raise ShapeError(msg)
    return (size - kernel) // stride + 1


class SketchClassifier(BaseSketchModel):
    """Small CNN: conv(1->16) -> conv(16->16) -> dense(hidden) -> dense(C) -> softmax.

    Both convolutions use kernel 8, stride 2, no padding, and ReLU.  The
    flattened feature width feeding the first dense layer is measured by
    pushing a zero image through the convolutions once at construction;
    :meth:`feature_shape` gives the same number in closed form.

    Args:
        input_size: ``(height, width)`` of input images.
        num_classes: Number of output classes (label folders).
        hidden_size: Width of the hidden dense layer.
        **kwargs: Forwarded to :class:`BaseSketchModel` (learning_rate, loss,
            device).
    """

    def __init__(
        self,
        input_size: tuple[int, int] = (128, 128),
        num_classes: int = 2,
        hidden_size: int = 32,
        **kwargs: Any,
    ) -> None:
        super().__init__(input_size=input_size, num_classes=num_classes, **kwargs)
        channels, height, width = self.feature_shape(self.input_size)

        self.conv_a = nn.Conv2d(1, CONV_CHANNELS, kernel_size=CONV_KERNEL, stride=CONV_STRIDE)
        self.conv_b = nn.Conv2d(
            CONV_CHANNELS, CONV_CHANNELS, kernel_size=CONV_KERNEL, stride=CONV_STRIDE
        )

        with torch.no_grad():
            dummy = torch.zeros(1, 1, *self.input_size)
            features = torch.flatten(self.conv_b(self.conv_a(dummy)), start_dim=1)
        self.feature_size = int(features.shape[1])
        if self.feature_size != channels * height * width:
            msg = (
                f"measured feature size {self.feature_size} disagrees with "
                f"{channels}x{height}x{width}"
            )
            raise ShapeError(msg)

        self.dense_a = nn.Linear(self.feature_size, hidden_size)
        self.dense_b = nn.Linear(hidden_size, num_classes)

        self.to(self.target_device)

    @staticmethod
    def feature_shape(input_size: tuple[int, int]) -> tuple[int, int, int]:
        """``(channels, height, width)`` after both convolutions."""
        height, width = input_size
        height = conv_output_size(conv_output_size(height))
        width = conv_output_size(conv_output_size(width))
        return CONV_CHANNELS, height, width

    def forward(self, images: torch.Tensor) -> torch.Tensor:
        x = F.relu(self.conv_a(images))
        x = F.relu(self.conv_b(x))
        x = torch.flatten(x, start_dim=1)
        x = F.relu(self.dense_a(x))
        return F.softmax(self.dense_b(x), dim=1)


def build_classifier(config: TrainingConfig, num_classes: int) -> SketchClassifier:
    """Construct a :class:`SketchClassifier` from a training config."""
    return SketchClassifier(
        input_size=config.image_size,
        num_classes=num_classes,
        hidden_size=config.hidden_size,
        learning_rate=config.learning_rate,
        loss=config.loss,
        device=config.device,
    )
