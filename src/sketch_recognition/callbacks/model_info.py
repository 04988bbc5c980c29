"""Model info callback: reports parameter counts and layer geometry."""

from __future__ import annotations

import lightning as L
from loguru import logger
from rich import box
from rich.console import Console
from rich.table import Table


class ModelInfoCallback(L.Callback):
    """Compute and display model statistics at training start.

    Reports total and trainable parameters, model size in MB, the flattened
    convolution feature width (when the model exposes ``feature_size``) and
    the device the model is pinned to.

    Args:
        console: Optional rich console (tests pass a recording console).
    """

    def __init__(self, console: Console | None = None) -> None:
        super().__init__()
        self.console = console or Console()
        self.stats: dict[str, str] = {}

    def on_fit_start(
        self, trainer: L.Trainer, pl_module: L.LightningModule
    ) -> None:
        total_params = sum(p.numel() for p in pl_module.parameters())
        trainable_params = sum(
            p.numel() for p in pl_module.parameters() if p.requires_grad
        )
        param_size = sum(
            p.numel() * p.element_size() for p in pl_module.parameters()
        )
        model_size_mb = param_size / (1024 * 1024)

        self.stats = {
            "Model Class": type(pl_module).__name__,
            "Total Parameters": f"{total_params:,}",
            "Trainable Parameters": f"{trainable_params:,}",
            "Model Size": f"{model_size_mb:.2f} MB",
        }
        feature_size = getattr(pl_module, "feature_size", None)
        if feature_size is not None:
            self.stats["Feature Size"] = str(feature_size)
        target_device = getattr(pl_module, "target_device", None)
        if target_device is not None:
            self.stats["Device"] = str(target_device)

        table = Table(
            title="Model Information",
            header_style="bold magenta",
            box=box.SQUARE,
            show_lines=True,
        )
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green")
        for key, value in self.stats.items():
            table.add_row(key, value)
        self.console.print(table)

        logger.info(
            f"Model: {total_params:,} params ({trainable_params:,} trainable), "
            f"{model_size_mb:.2f} MB"
        )
