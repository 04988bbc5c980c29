"""Loss functions over predicted probabilities and one-hot targets."""

from __future__ import annotations

import torch
import torch.nn as nn

# Keeps log() finite when softmax saturates to exactly 0.
_EPS = 1e-7


def _per_sample_cross_entropy(
    probs: torch.Tensor, targets: torch.Tensor
) -> torch.Tensor:
    if probs.shape != targets.shape:
        msg = (
            f"probabilities {tuple(probs.shape)} and targets "
            f"{tuple(targets.shape)} must have the same shape"
        )
        raise ValueError(msg)
    return -(targets * torch.log(probs.clamp_min(_EPS))).sum(dim=1)


class CategoricalCrossEntropy(nn.Module):
    """Categorical cross-entropy on probability vectors.

    The model already ends in softmax, so this takes probabilities (not
    logits) and computes ``mean_b(-sum_c y[b, c] * log(p[b, c]))`` with
    one-hot (or soft) targets ``y`` of shape ``(B, C)``.
    """

    def forward(self, probs: torch.Tensor, targets: torch.Tensor) -> torch.Tensor:
        return _per_sample_cross_entropy(probs, targets).mean()


class FocalLoss(nn.Module):
    """Focal loss on probability vectors.

    Down-weights well-classified examples.  When ``gamma=0`` this reduces to
    :class:`CategoricalCrossEntropy`.

    Parameters
    ----------
    gamma:
        Focusing parameter.  Higher values increase focus on hard examples.
    """

    def __init__(self, gamma: float = 2.0) -> None:
        super().__init__()
        self.gamma = gamma

    def forward(self, probs: torch.Tensor, targets: torch.Tensor) -> torch.Tensor:
        ce_loss = _per_sample_cross_entropy(probs, targets)
        pt = torch.exp(-ce_loss)
        return (((1.0 - pt) ** self.gamma) * ce_loss).mean()


def build_loss_fn(name: str, focal_gamma: float = 2.0) -> nn.Module:
    """Factory for loss functions.

    Parameters
    ----------
    name:
        ``"categorical_cross_entropy"`` or ``"focal"``.
    focal_gamma:
        Gamma for focal loss (ignored for cross-entropy).
    """
    if name == "categorical_cross_entropy":
        return CategoricalCrossEntropy()
    if name == "focal":
        return FocalLoss(gamma=focal_gamma)
    msg = f"Unknown loss function: {name!r}. Use 'categorical_cross_entropy' or 'focal'."
    raise ValueError(msg)
