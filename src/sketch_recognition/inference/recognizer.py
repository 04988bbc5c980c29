"""Sketch recognizer: a trained model together with its label vocabulary."""

from __future__ import annotations

from pathlib import Path

import lightning as L
import numpy as np
import torch
from loguru import logger
from PIL import Image

from sketch_recognition.config import TrainingConfig
from sketch_recognition.data.dataset import load_dataset
from sketch_recognition.errors import ShapeError
from sketch_recognition.inference.base import BaseSketchInferencer
from sketch_recognition.models.base import BaseSketchModel
from sketch_recognition.models.cnn import build_classifier
from sketch_recognition.schemas.prediction import ClassificationPrediction
from sketch_recognition.training import train
from sketch_recognition.transforms.canvas import SketchCanvas, canvas_to_image
from sketch_recognition.transforms.conversion import image_to_tensor, resize_image


class SketchRecognizer(BaseSketchInferencer):
    """Handle owning a model, its label names and the input image size.

    Build one with :meth:`from_folder` (load, construct, train) or wrap an
    existing model.  Not safe for concurrent training and prediction.

    Args:
        model: A model whose output size equals ``len(label_names)``.
        label_names: Label for each output index.
        config: Training settings used by :meth:`retrain`.

    Raises:
        ShapeError: ``label_names`` does not match the model's output size.
    """

    def __init__(
        self,
        model: BaseSketchModel,
        label_names: list[str],
        config: TrainingConfig | None = None,
    ) -> None:
        model.check_compatible(num_classes=len(label_names))
        self.model = model
        self.label_names = list(label_names)
        self.config = config or TrainingConfig(image_size=model.input_size)
        model.check_compatible(image_size=self.config.image_size)
        self.loss_history: list[float] = []

    @property
    def image_size(self) -> tuple[int, int]:
        return self.model.input_size

    @classmethod
    def from_folder(
        cls,
        root: Path | str,
        config: TrainingConfig | None = None,
        callbacks: list[L.Callback] | None = None,
        root_dir: Path | str | None = None,
    ) -> SketchRecognizer:
        """Load ``root``, build a classifier sized to its labels and train it."""
        config = config or TrainingConfig()
        dataset, label_names = load_dataset(root, config.image_size)
        model = build_classifier(config, len(label_names))
        recognizer = cls(model, label_names, config)
        recognizer.loss_history = train(
            model,
            dataset,
            config.epochs,
            config.batch_size,
            shuffle=config.shuffle,
            seed=config.seed,
            callbacks=callbacks,
            root_dir=root_dir,
        )
        logger.info(f"Recognizer ready for labels {label_names}")
        return recognizer

    def retrain(
        self,
        root: Path | str,
        callbacks: list[L.Callback] | None = None,
        root_dir: Path | str | None = None,
    ) -> list[float]:
        """Continue training the same model on another folder.

        Raises:
            ShapeError: The folder's label count differs from the model's.
        """
        dataset, label_names = load_dataset(root, self.image_size)
        self.model.check_compatible(num_classes=len(label_names))
        if label_names != self.label_names:
            logger.warning(
                f"Label names changed from {self.label_names} to {label_names}"
            )
        losses = train(
            self.model,
            dataset,
            self.config.epochs,
            self.config.batch_size,
            shuffle=self.config.shuffle,
            seed=self.config.seed,
            callbacks=callbacks,
            root_dir=root_dir,
        )
        self.label_names = label_names
        self.loss_history.extend(losses)
        return losses

    def _encode(self, image: Image.Image) -> torch.Tensor:
        return image_to_tensor(resize_image(image, self.image_size))

    def _prediction(self, index: int, confidence: float) -> ClassificationPrediction:
        if not 0 <= index < len(self.label_names):
            msg = f"class index {index} has no label ({len(self.label_names)} labels)"
            raise ShapeError(msg)
        return ClassificationPrediction(
            class_id=index,
            label=self.label_names[index],
            confidence=min(max(confidence, 0.0), 1.0),
        )

    def predict(self, image: Image.Image) -> ClassificationPrediction:
        """Resize over white, encode and classify ``image``."""
        index, confidence = self.model.predict(self._encode(image))
        return self._prediction(index, confidence)

    def top_k(self, image: Image.Image, k: int = 3) -> list[ClassificationPrediction]:
        if k < 1:
            msg = f"k must be >= 1, got {k}"
            raise ValueError(msg)
        probs = self.model.predict_proba(self._encode(image))
        # Stable sort keeps the lowest index first among equal probabilities.
        ranked = np.argsort(-probs, kind="stable")[:k]
        return [self._prediction(int(i), float(probs[i])) for i in ranked]

    def predict_canvas(self, canvas: SketchCanvas) -> ClassificationPrediction:
        """Classify what is drawn on ``canvas``."""
        return self.predict(canvas_to_image(canvas, self.image_size))


def format_prediction(prediction: ClassificationPrediction) -> str:
    """Render a prediction the way the drawing UI shows it."""
    return f"Predicted:  {prediction.label} ({prediction.confidence * 100:.2f} %)"
