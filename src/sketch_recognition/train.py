"""Training entrypoint for sketch_recognition.

Usage:
    python -m sketch_recognition.train data_root=/data/shapes
    python -m sketch_recognition.train data_root=/data/shapes training.epochs=10
    python -m sketch_recognition.train data_root=/data/shapes 'predict=[a.png,b.png]'
"""

import sys
from typing import Any

import hydra
import lightning as L
from loguru import logger
from omegaconf import DictConfig, OmegaConf
from PIL import Image

from sketch_recognition.callbacks import DatasetStatisticsCallback, ModelInfoCallback
from sketch_recognition.config import TrainingConfig
from sketch_recognition.data.dataset import decode_image, load_dataset
from sketch_recognition.inference.recognizer import SketchRecognizer, format_prediction
from sketch_recognition.models.cnn import build_classifier
from sketch_recognition.training import train


def build_config(cfg: DictConfig) -> TrainingConfig:
    """Validate the ``training`` node of a Hydra config."""
    raw: Any = OmegaConf.to_container(cfg.training, resolve=True)
    return TrainingConfig(**raw)


def run(cfg: DictConfig) -> SketchRecognizer:
    """Load, train and (optionally) predict as described by ``cfg``."""
    config = build_config(cfg)
    L.seed_everything(config.seed, workers=True)

    dataset, label_names = load_dataset(cfg.data_root, config.image_size)
    model = build_classifier(config, len(label_names))

    callbacks: list[L.Callback] = []
    if cfg.get("show_tables", True):
        callbacks = [ModelInfoCallback(), DatasetStatisticsCallback(dataset)]

    recognizer = SketchRecognizer(model, label_names, config)
    recognizer.loss_history = train(
        model,
        dataset,
        config.epochs,
        config.batch_size,
        shuffle=config.shuffle,
        seed=config.seed,
        callbacks=callbacks,
    )

    top_k = int(cfg.get("top_k", 1))
    for path in cfg.get("predict") or []:
        image: Image.Image = decode_image(path)
        if top_k > 1:
            ranked = recognizer.top_k(image, top_k)
            summary = ", ".join(
                f"{p.label}={p.confidence:.3f}" for p in ranked
            )
            logger.info(f"{path}: {summary}")
        else:
            logger.info(f"{path}: {format_prediction(recognizer.predict(image))}")
    return recognizer


@hydra.main(version_base=None, config_path="conf", config_name="train")
def main(cfg: DictConfig) -> None:
    """Run training with the given Hydra config."""
    logger.remove()
    logger.add(sys.stderr, level=cfg.get("log_level", "INFO"))
    logger.info(f"Configuration:\n{OmegaConf.to_yaml(cfg)}")
    run(cfg)


if __name__ == "__main__":
    main()
