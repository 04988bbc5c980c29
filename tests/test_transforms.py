"""Tests for the image codec: conversion and canvas rasterization."""

from __future__ import annotations

import pytest
import torch
from PIL import Image

from sketch_recognition.transforms import (
    SketchCanvas,
    canvas_to_image,
    image_to_tensor,
    resize_image,
    tensor_to_image,
)


class TestImageToTensor:
    @pytest.mark.parametrize("size", [(8, 8), (12, 30), (128, 128)])
    def test_shape_and_range(self, size: tuple[int, int]) -> None:
        height, width = size
        img = Image.effect_noise((width, height), 64).convert("RGB")
        tensor = image_to_tensor(img)
        assert tensor.shape == (1, height, width)
        assert tensor.dtype == torch.float32
        assert tensor.min() >= 0.0
        assert tensor.max() <= 1.0

    def test_white_is_one_black_is_zero(self) -> None:
        assert torch.all(image_to_tensor(Image.new("RGB", (4, 4), "white")) == 1.0)
        assert torch.all(image_to_tensor(Image.new("RGB", (4, 4), "black")) == 0.0)

    def test_grayscale_is_channel_mean(self) -> None:
        img = Image.new("RGB", (2, 2), (30, 60, 90))
        tensor = image_to_tensor(img)
        assert torch.allclose(tensor, torch.full((1, 2, 2), 60 / 255))

    def test_row_major_layout(self) -> None:
        """Pixel (x, y) lands at tensor[:, y, x]."""
        img = Image.new("RGB", (3, 2), "white")
        img.putpixel((2, 0), (0, 0, 0))
        tensor = image_to_tensor(img)
        assert tensor[0, 0, 2] == 0.0
        assert tensor[0, 1, 2] == 1.0

    def test_three_channels(self) -> None:
        img = Image.new("RGB", (2, 2), (255, 0, 51))
        tensor = image_to_tensor(img, channels=3)
        assert tensor.shape == (3, 2, 2)
        assert torch.allclose(tensor[:, 0, 0], torch.tensor([1.0, 0.0, 0.2]))

    def test_invalid_channels(self) -> None:
        with pytest.raises(ValueError, match="channels"):
            image_to_tensor(Image.new("RGB", (2, 2)), channels=2)

    def test_input_not_mutated(self) -> None:
        img = Image.new("RGB", (5, 5), (10, 20, 30))
        before = img.tobytes()
        image_to_tensor(img)
        assert img.tobytes() == before


class TestResizeImage:
    def test_size_is_height_width(self) -> None:
        out = resize_image(Image.new("RGB", (50, 50), "white"), (20, 30))
        assert out.size == (30, 20)
        assert out.mode == "RGB"

    def test_transparent_becomes_white(self) -> None:
        clear = Image.new("RGBA", (40, 40), (0, 0, 0, 0))
        out = resize_image(clear, (16, 16))
        assert torch.all(image_to_tensor(out) == 1.0)

    def test_opaque_content_preserved(self) -> None:
        out = resize_image(Image.new("RGB", (40, 40), "black"), (10, 10))
        assert torch.all(image_to_tensor(out) == 0.0)

    def test_input_not_mutated(self) -> None:
        img = Image.new("RGBA", (10, 10), (0, 0, 0, 0))
        resize_image(img, (4, 4))
        assert img.size == (10, 10)
        assert img.mode == "RGBA"


class TestTensorToImage:
    def test_grayscale_roundtrip(self) -> None:
        img = Image.new("RGB", (6, 4), (100, 100, 100))
        back = tensor_to_image(image_to_tensor(img))
        assert back.mode == "L"
        assert back.size == (6, 4)
        assert back.getpixel((0, 0)) == 100

    def test_rejects_bad_shape(self) -> None:
        with pytest.raises(ValueError):
            tensor_to_image(torch.zeros(2, 4, 4))


class TestSketchCanvas:
    def test_empty_canvas_renders_transparent(self) -> None:
        canvas = SketchCanvas(50, 40)
        img = canvas.render()
        assert canvas.is_empty
        assert img.mode == "RGBA"
        assert img.size == (50, 40)
        assert img.getextrema()[3] == (0, 0)

    def test_empty_canvas_to_image_is_white(self) -> None:
        img = canvas_to_image(SketchCanvas(100, 100), (28, 28))
        tensor = image_to_tensor(img)
        assert tensor.shape == (1, 28, 28)
        assert torch.all(tensor == 1.0)

    def test_stroke_leaves_ink(self) -> None:
        canvas = SketchCanvas(100, 100, pen_width=15)
        canvas.add_stroke([(10, 50), (90, 50)])
        tensor = image_to_tensor(canvas_to_image(canvas, (28, 28)))
        # Middle row is inked, top-left corner stays white
        assert tensor[0, 14, 14] < 0.2
        assert tensor[0, 0, 0] == pytest.approx(1.0)

    def test_begin_and_add_point(self) -> None:
        canvas = SketchCanvas(20, 20)
        canvas.begin_stroke(1, 1)
        canvas.add_point(5, 5)
        assert canvas.strokes == [[(1.0, 1.0), (5.0, 5.0)]]

    def test_single_point_draws_dot(self) -> None:
        canvas = SketchCanvas(30, 30, pen_width=9)
        canvas.begin_stroke(15, 15)
        assert canvas.render().getpixel((15, 15)) == (0, 0, 0, 255)

    def test_clear(self) -> None:
        canvas = SketchCanvas(20, 20)
        canvas.add_stroke([(2, 2), (3, 3)])
        canvas.clear()
        assert canvas.is_empty

    def test_point_outside_rejected(self) -> None:
        canvas = SketchCanvas(20, 20)
        with pytest.raises(ValueError, match="outside"):
            canvas.begin_stroke(25, 5)

    def test_add_point_requires_stroke(self) -> None:
        with pytest.raises(RuntimeError):
            SketchCanvas(20, 20).add_point(1, 1)

    def test_invalid_dimensions(self) -> None:
        with pytest.raises(ValueError):
            SketchCanvas(0, 10)
        with pytest.raises(ValueError):
            SketchCanvas(10, 10, pen_width=0)
