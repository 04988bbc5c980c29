"""Loss history callback: records the loss of every training batch."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import lightning as L
from loguru import logger


class LossHistoryCallback(L.Callback):
    """Collect per-batch training losses in order.

    ``batch_losses`` holds one float per optimizer step across all epochs;
    ``epoch_losses`` holds the per-epoch lists.  Each batch loss is logged at
    debug level and each epoch's mean at info level.
    """

    def __init__(self) -> None:
        super().__init__()
        self.batch_losses: list[float] = []
        self.epoch_losses: list[list[float]] = []

    def on_train_epoch_start(
        self, trainer: L.Trainer, pl_module: L.LightningModule
    ) -> None:
        self.epoch_losses.append([])

    def on_train_batch_end(
        self,
        trainer: L.Trainer,
        pl_module: L.LightningModule,
        outputs: Any,
        batch: Any,
        batch_idx: int,
    ) -> None:
        loss = outputs["loss"] if isinstance(outputs, Mapping) else outputs
        value = float(loss)
        self.batch_losses.append(value)
        if not self.epoch_losses:
            self.epoch_losses.append([])
        self.epoch_losses[-1].append(value)
        logger.debug(
            f"epoch {trainer.current_epoch} batch {batch_idx}: loss={value:.6f}"
        )

    def on_train_epoch_end(
        self, trainer: L.Trainer, pl_module: L.LightningModule
    ) -> None:
        losses = self.epoch_losses[-1] if self.epoch_losses else []
        if not losses:
            return
        mean = sum(losses) / len(losses)
        logger.info(
            f"epoch {trainer.current_epoch}: mean loss={mean:.6f} "
            f"over {len(losses)} batch(es)"
        )
