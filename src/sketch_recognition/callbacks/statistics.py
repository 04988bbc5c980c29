"""Dataset statistics callback: prints label distribution at training start."""

from __future__ import annotations

import lightning as L
from loguru import logger
from rich import box
from rich.console import Console
from rich.table import Table

from sketch_recognition.data.dataset import SketchFolderDataset


class DatasetStatisticsCallback(L.Callback):
    """Print a rich table of samples per label for the training dataset.

    Args:
        dataset: The dataset being trained on.
        console: Optional rich console (tests pass a recording console).
    """

    def __init__(
        self, dataset: SketchFolderDataset, console: Console | None = None
    ) -> None:
        super().__init__()
        self.dataset = dataset
        self.console = console or Console()

    def build_table(self) -> Table:
        counts = self.dataset.class_counts()
        total = len(self.dataset)

        table = Table(
            title="Dataset Label Distribution",
            header_style="bold magenta",
            box=box.SQUARE,
            show_lines=True,
        )
        table.add_column("Label", style="cyan")
        table.add_column("Index", justify="right")
        table.add_column("Count", justify="right", style="green")
        table.add_column("Percentage", justify="right", style="yellow")

        for idx, name in enumerate(self.dataset.label_names):
            count = counts[idx]
            pct = count / total * 100 if total > 0 else 0.0
            table.add_row(name, str(idx), str(count), f"{pct:.1f}%")
        return table

    def on_fit_start(self, trainer: L.Trainer, pl_module: L.LightningModule) -> None:
        """Log totals and display the distribution table."""
        logger.info(
            f"Training dataset: {len(self.dataset)} samples, "
            f"{self.dataset.num_classes} labels"
        )
        self.console.print(self.build_table())
