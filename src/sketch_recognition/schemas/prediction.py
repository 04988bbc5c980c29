"""Classification prediction schema."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ClassificationPrediction(BaseModel, frozen=True):
    """A single classification prediction."""

    class_id: int = Field(ge=0)
    label: str
    confidence: float = Field(ge=0.0, le=1.0)
