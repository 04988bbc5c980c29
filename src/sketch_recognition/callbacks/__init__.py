"""Training callbacks for sketch_recognition."""

from sketch_recognition.callbacks.loss_history import LossHistoryCallback
from sketch_recognition.callbacks.model_info import ModelInfoCallback
from sketch_recognition.callbacks.statistics import DatasetStatisticsCallback

__all__ = [
    "DatasetStatisticsCallback",
    "LossHistoryCallback",
    "ModelInfoCallback",
]
