"""Abstract base class for sketch inferencers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from PIL import Image

from sketch_recognition.schemas.prediction import ClassificationPrediction


class BaseSketchInferencer(ABC):
    """Base class for sketch inferencers.

    Subclasses implement ``predict`` (single image, best class) and
    ``top_k`` (single image, ranked classes).  ``predict_batch`` maps
    ``predict`` over a list.
    """

    @abstractmethod
    def predict(self, image: Image.Image) -> ClassificationPrediction:
        """Return the most probable class for one image."""

    @abstractmethod
    def top_k(self, image: Image.Image, k: int = 3) -> list[ClassificationPrediction]:
        """Return up to ``k`` predictions sorted by confidence descending."""

    def predict_batch(
        self, images: list[Image.Image]
    ) -> list[ClassificationPrediction]:
        return [self.predict(img) for img in images]
