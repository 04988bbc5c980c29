"""Supervised training loop for sketch classifiers."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import lightning as L
from loguru import logger
from torch.utils.data import DataLoader

from sketch_recognition.callbacks.loss_history import LossHistoryCallback
from sketch_recognition.data.batching import EpochBatches
from sketch_recognition.models.base import BaseSketchModel
from sketch_recognition.types import Sample


def _accelerator_for(model: BaseSketchModel) -> tuple[str, list[int] | int]:
    """Trainer accelerator/devices that keep the model on ``target_device``."""
    device = model.target_device
    if device.type == "cuda":
        return "gpu", [device.index or 0]
    return "cpu", 1


def train(
    model: BaseSketchModel,
    dataset: Sequence[Sample],
    epoch_count: int,
    batch_size: int,
    *,
    shuffle: bool = False,
    seed: int = 42,
    callbacks: list[L.Callback] | None = None,
    root_dir: str | Path | None = None,
) -> list[float]:
    """Train ``model`` on ``dataset`` for exactly ``epoch_count`` epochs.

    Every epoch regenerates the mini-batches (same order each epoch unless
    ``shuffle`` is set, in which case a permutation seeded with
    ``seed + epoch`` is used).  Each batch runs zero-grad, forward, loss,
    backward and an Adam step.  There is no validation, checkpointing,
    early stopping or learning-rate schedule.

    Args:
        model: Model to train in place.
        dataset: ``(image, one_hot)`` samples, e.g. a ``SketchFolderDataset``.
        epoch_count: Number of epochs to run.
        batch_size: Maximum samples per batch.
        shuffle: Use a seeded per-epoch permutation instead of dataset order.
        seed: Base seed for the per-epoch permutation.
        callbacks: Extra Lightning callbacks.
        root_dir: Trainer ``default_root_dir`` (nothing is written there by
            default since logging and checkpointing are off).

    Returns:
        The loss of every batch, in training order.

    Raises:
        ValueError: Non-positive ``epoch_count``/``batch_size`` or an empty
            dataset.
        ShapeError: Sample images or labels do not match the model.
    """
    if epoch_count < 1:
        msg = f"epoch_count must be >= 1, got {epoch_count}"
        raise ValueError(msg)
    if batch_size < 1:
        msg = f"batch_size must be >= 1, got {batch_size}"
        raise ValueError(msg)
    if len(dataset) == 0:
        msg = "cannot train on an empty dataset"
        raise ValueError(msg)

    image, label = dataset[0]
    model.check_compatible(
        image_size=(int(image.shape[-2]), int(image.shape[-1])),
        num_classes=int(label.shape[0]),
    )

    history = LossHistoryCallback()
    loader = DataLoader(
        EpochBatches(dataset, batch_size, shuffle=shuffle, seed=seed),
        batch_size=None,
        num_workers=0,
    )
    accelerator, devices = _accelerator_for(model)
    trainer = L.Trainer(
        max_epochs=epoch_count,
        accelerator=accelerator,
        devices=devices,
        logger=False,
        enable_checkpointing=False,
        enable_progress_bar=False,
        enable_model_summary=False,
        log_every_n_steps=1,
        callbacks=[history, *(callbacks or [])],
        default_root_dir=str(root_dir) if root_dir is not None else None,
    )

    logger.info(
        f"Training {type(model).__name__} for {epoch_count} epoch(s), "
        f"batch_size={batch_size}, {len(dataset)} samples on {model.target_device}"
    )
    trainer.fit(model, train_dataloaders=loader)

    # Lightning may move the module off its device during teardown.
    model.to(model.target_device)
    model.eval()
    if history.batch_losses:
        logger.info(
            f"Training finished: first loss={history.batch_losses[0]:.6f}, "
            f"last loss={history.batch_losses[-1]:.6f}"
        )
    return list(history.batch_losses)
