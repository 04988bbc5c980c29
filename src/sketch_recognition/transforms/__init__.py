"""Image codec: Pillow images and canvas sketches to model input tensors."""

from sketch_recognition.transforms.canvas import SketchCanvas, canvas_to_image
from sketch_recognition.transforms.conversion import (
    image_to_tensor,
    resize_image,
    tensor_to_image,
)

__all__ = [
    "SketchCanvas",
    "canvas_to_image",
    "image_to_tensor",
    "resize_image",
    "tensor_to_image",
]
