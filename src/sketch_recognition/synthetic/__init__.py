"""Synthetic shape dataset generation."""

from sketch_recognition.synthetic.renderer import SHAPES, ShapeRenderer
from sketch_recognition.synthetic.writer import SyntheticWriter

__all__ = ["SHAPES", "ShapeRenderer", "SyntheticWriter"]
