"""Base LightningModule for sketch classification models."""

from __future__ import annotations

from typing import Any

import lightning as L
import numpy as np
import torch
from torchmetrics.classification import MulticlassAccuracy

from sketch_recognition.config import resolve_device
from sketch_recognition.errors import ShapeError
from sketch_recognition.losses import build_loss_fn
from sketch_recognition.types import Batch


class BaseSketchModel(L.LightningModule):
    """Abstract base for models mapping ``(B, 1, H, W)`` images to probabilities.

    Subclasses build their layers in ``__init__``, implement ``forward()`` so
    that it returns softmax probabilities of shape ``(B, C)``, and finish
    ``__init__`` with ``self.to(self.target_device)``.

    The device is chosen once here and never changes: :meth:`predict` and the
    training loop move every input to ``target_device`` explicitly.
    """

    def __init__(
        self,
        input_size: tuple[int, int],
        num_classes: int,
        learning_rate: float = 1e-3,
        loss: str = "categorical_cross_entropy",
        device: str = "auto",
    ) -> None:
        super().__init__()
        if num_classes < 1:
            msg = f"num_classes must be >= 1, got {num_classes}"
            raise ValueError(msg)
        self.save_hyperparameters()
        self.input_size = (int(input_size[0]), int(input_size[1]))
        self.num_classes = int(num_classes)
        self.target_device = resolve_device(device)
        self.loss_fn = build_loss_fn(loss)

        # MulticlassAccuracy rejects num_classes < 2.
        self.train_acc: MulticlassAccuracy | None = None
        if num_classes > 1:
            self.train_acc = MulticlassAccuracy(
                num_classes=num_classes, top_k=1, average="micro"
            )

    # ------------------------------------------------------------------
    # Shape contract
    # ------------------------------------------------------------------

    def check_compatible(
        self,
        image_size: tuple[int, int] | None = None,
        num_classes: int | None = None,
    ) -> None:
        """Raise :class:`ShapeError` if data does not fit this model."""
        if image_size is not None and tuple(image_size) != self.input_size:
            msg = (
                f"image size {tuple(image_size)} does not match the model input "
                f"size {self.input_size}"
            )
            raise ShapeError(msg)
        if num_classes is not None and num_classes != self.num_classes:
            msg = (
                f"label set has {num_classes} labels but the model outputs "
                f"{self.num_classes} classes"
            )
            raise ShapeError(msg)

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def training_step(self, batch: Batch, batch_idx: int) -> torch.Tensor:
        images, labels = batch["images"], batch["labels"]
        probs = self(images)
        loss: torch.Tensor = self.loss_fn(probs, labels)
        self.log("train/loss", loss, on_step=True, on_epoch=True, prog_bar=True)
        if self.train_acc is not None:
            self.train_acc.update(probs, labels.argmax(dim=1))
        return loss

    def on_train_epoch_end(self) -> None:
        if self.train_acc is not None:
            self.log("train/acc", self.train_acc.compute())
            self.train_acc.reset()

    def configure_optimizers(self) -> Any:
        return torch.optim.Adam(self.parameters(), lr=self.hparams["learning_rate"])

    # ------------------------------------------------------------------
    # Inference
    # ------------------------------------------------------------------

    def predict_proba(self, image: torch.Tensor) -> np.ndarray:  # type: ignore[type-arg]
        """Class probabilities for a single ``(1, H, W)`` image as a NumPy array.

        Runs without gradients and leaves the module's train/eval mode as it
        found it.
        """
        expected = (1, *self.input_size)
        if tuple(image.shape) != expected:
            msg = f"expected an image of shape {expected}, got {tuple(image.shape)}"
            raise ShapeError(msg)
        was_training = self.training
        self.eval()
        try:
            with torch.no_grad():
                output = self(image.unsqueeze(0).to(self.target_device)).squeeze(0)
        finally:
            self.train(was_training)
        return output.cpu().numpy()

    def predict(self, image: torch.Tensor) -> tuple[int, float]:
        """Classify a single ``(1, H, W)`` image.

        Returns the index of the most probable class (lowest index on ties)
        and its probability.
        """
        probs = self.predict_proba(image)
        index = int(np.argmax(probs))
        return index, float(probs[index])
