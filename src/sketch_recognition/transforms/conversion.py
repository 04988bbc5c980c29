"""Conversions between Pillow images and model input tensors."""

from __future__ import annotations

import torch
from PIL import Image
from torchvision.transforms.v2 import functional as F

# Canvas strokes and training images are dark ink on a white page.
WHITE: tuple[int, int, int, int] = (255, 255, 255, 255)


def resize_image(image: Image.Image, size: tuple[int, int]) -> Image.Image:
    """Resize ``image`` to ``size`` = ``(height, width)`` over a white page.

    Uses bicubic interpolation.  Transparent or partially transparent pixels
    are composited onto white so every output matches the white background
    convention of the training data.  Returns a new RGB image; the input is
    left untouched.
    """
    height, width = size
    resized = image.convert("RGBA").resize(
        (width, height), resample=Image.Resampling.BICUBIC
    )
    page = Image.new("RGBA", (width, height), WHITE)
    page.alpha_composite(resized)
    return page.convert("RGB")


def image_to_tensor(image: Image.Image, channels: int = 1) -> torch.Tensor:
    """Convert an image to a float32 ``(C, H, W)`` tensor scaled to ``[0, 1]``.

    Args:
        image: Any Pillow image; it is read as RGB.
        channels: ``1`` averages R, G and B into a single grayscale plane,
            ``3`` keeps the colour planes.  Values are divided by 255 with no
            further normalisation.

    Raises:
        ValueError: If ``channels`` is neither 1 nor 3.
    """
    if channels not in (1, 3):
        msg = f"channels must be 1 or 3, got {channels}"
        raise ValueError(msg)
    rgb = F.pil_to_tensor(image.convert("RGB")).to(torch.float32)
    if channels == 1:
        rgb = rgb.mean(dim=0, keepdim=True)
    return (rgb / 255.0).contiguous()


def tensor_to_image(tensor: torch.Tensor) -> Image.Image:
    """Inverse of :func:`image_to_tensor` for 1- or 3-channel tensors.

    Values are clamped to ``[0, 1]`` and rounded to 8-bit.  Used to inspect
    what the model actually sees.
    """
    if tensor.ndim != 3 or tensor.shape[0] not in (1, 3):
        msg = f"expected a (1|3, H, W) tensor, got shape {tuple(tensor.shape)}"
        raise ValueError(msg)
    pixels = (tensor.detach().cpu().clamp(0.0, 1.0) * 255.0).round().to(torch.uint8)
    mode = "L" if pixels.shape[0] == 1 else "RGB"
    return F.to_pil_image(pixels, mode=mode)
