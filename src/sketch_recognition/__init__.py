"""Sketch recognition: train a small CNN on labeled image folders and classify drawings."""

__version__ = "0.0.1"
