"""Classification model implementations."""

from sketch_recognition.models.base import BaseSketchModel
from sketch_recognition.models.cnn import (
    SketchClassifier,
    build_classifier,
    conv_output_size,
)

__all__ = [
    "BaseSketchModel",
    "SketchClassifier",
    "build_classifier",
    "conv_output_size",
]
