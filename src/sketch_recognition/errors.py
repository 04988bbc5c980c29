"""Exception types raised by sketch_recognition.

Missing dataset paths raise the builtin ``FileNotFoundError`` /
``NotADirectoryError``; everything else that is specific to this package is
defined here.
"""


class DatasetError(OSError):
    """A dataset root cannot be used (no label folders, unreadable folder)."""


class DecodeError(ValueError):
    """A file in the dataset is not a decodable image."""


class ShapeError(ValueError):
    """Tensor shapes disagree with what the model was built for.

    Raised for image size mismatches between training and inference, label
    count mismatches between a model and a label set, and inputs that are
    too small for the convolution stack.
    """
