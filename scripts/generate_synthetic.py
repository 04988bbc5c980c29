#!/usr/bin/env python3
"""Generate a synthetic folder-per-label dataset of solid shapes.

Writes ``<output>/<shape>/<shape>_<index>.png`` for every requested shape,
ready to be loaded by ``sketch_recognition.data.load_dataset``.

Usage::

    python scripts/generate_synthetic.py --output data/shapes
    python scripts/generate_synthetic.py --output data/shapes \
        --shapes circle square triangle --per-class 50 --size 128 --seed 7
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger

# Add project root to path so we can import sketch_recognition
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from sketch_recognition.synthetic.renderer import SHAPES, ShapeRenderer  # noqa: E402
from sketch_recognition.synthetic.writer import SyntheticWriter  # noqa: E402


def generate(
    output: Path,
    shapes: list[str],
    per_class: int,
    size: int,
    seed: int,
) -> dict[str, int]:
    """Render ``per_class`` images for each shape into ``output``."""
    renderer = ShapeRenderer(image_size=size, seed=seed)
    writer = SyntheticWriter(output)
    for shape in shapes:
        for index in range(per_class):
            img, _ = renderer.render(shape)
            writer.write_image(img, shape, index)
    return writer.summary()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic shapes dataset"
    )
    parser.add_argument("--output", type=Path, required=True, help="Dataset root")
    parser.add_argument(
        "--shapes",
        nargs="+",
        choices=SHAPES,
        default=["circle", "square"],
        help="Shapes (label folders) to render",
    )
    parser.add_argument("--per-class", type=int, default=20)
    parser.add_argument("--size", type=int, default=128)
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args(argv)

    if args.per_class < 1:
        parser.error("--per-class must be >= 1")

    counts = generate(args.output, args.shapes, args.per_class, args.size, args.seed)
    logger.info(f"Wrote {sum(counts.values())} images to {args.output}")


if __name__ == "__main__":
    main()
