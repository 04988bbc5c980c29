"""Prediction schemas."""

from sketch_recognition.schemas.prediction import ClassificationPrediction

__all__ = ["ClassificationPrediction"]
