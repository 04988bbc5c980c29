"""Sketch inference."""

from sketch_recognition.inference.base import BaseSketchInferencer
from sketch_recognition.inference.recognizer import (
    SketchRecognizer,
    format_prediction,
)

__all__ = [
    "BaseSketchInferencer",
    "SketchRecognizer",
    "format_prediction",
]
