"""Pydantic frozen configuration models for sketch_recognition."""

from typing import Literal

import torch
from pydantic import BaseModel, field_validator

LossName = Literal["categorical_cross_entropy", "focal"]
DeviceName = Literal["auto", "cpu", "cuda"]


class TrainingConfig(BaseModel, frozen=True):
    """Configuration for loading a dataset, building the model and training it.

    All fields are validated at construction time. Frozen after creation.

    ``image_size`` is ``(height, width)``; every image is resized to it both
    when loading the dataset and before inference.
    """

    image_size: tuple[int, int] = (128, 128)
    epochs: int = 50
    batch_size: int = 128
    learning_rate: float = 1e-3
    hidden_size: int = 32
    loss: LossName = "categorical_cross_entropy"
    shuffle: bool = False
    seed: int = 42
    device: DeviceName = "auto"

    @field_validator("image_size")
    @classmethod
    def _positive_image_size(cls, value: tuple[int, int]) -> tuple[int, int]:
        if min(value) < 1:
            msg = f"image_size must be positive, got {value}"
            raise ValueError(msg)
        return value

    @field_validator("epochs", "batch_size", "hidden_size")
    @classmethod
    def _positive_int(cls, value: int) -> int:
        if value < 1:
            msg = f"must be >= 1, got {value}"
            raise ValueError(msg)
        return value

    @field_validator("learning_rate")
    @classmethod
    def _positive_learning_rate(cls, value: float) -> float:
        if value <= 0:
            msg = f"learning_rate must be > 0, got {value}"
            raise ValueError(msg)
        return value


def resolve_device(device: DeviceName | str = "auto") -> torch.device:
    """Pick the torch device for a model.

    ``"auto"`` selects CUDA when it is available and falls back to the CPU.
    An explicit ``"cuda"`` without a GPU is an error rather than a silent
    fallback.
    """
    if device == "auto":
        return torch.device("cuda" if torch.cuda.is_available() else "cpu")
    resolved = torch.device(device)
    if resolved.type == "cuda" and not torch.cuda.is_available():
        msg = f"device={device!r} requested but CUDA is not available"
        raise ValueError(msg)
    return resolved
