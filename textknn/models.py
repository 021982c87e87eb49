"""
Data models and type definitions for TextKNN.
"""

from dataclasses import dataclass
from enum import Enum

from .exceptions import ValidationError


class Occur(Enum):
    """How a clause takes part in a boolean query."""

    SHOULD = "should"
    MUST = "must"


@dataclass(frozen=True)
class SearchHit:
    """A document returned by the searcher together with its relevance score."""

    doc_id: int
    score: float


@dataclass
class ClassificationResult:
    """
    A class label with its estimated probability.

    Results compare by score so that sorting a list puts the most probable
    class first. The score is only changed through rescale().
    """

    assigned_class: str
    score: float

    def __post_init__(self) -> None:
        if self.score < 0:
            raise ValidationError(
                f"Score must be non-negative, got {self.score}",
                field="score",
                value=self.score,
            )

    def __lt__(self, other: "ClassificationResult") -> bool:
        # Higher score ranks first
        if not isinstance(other, ClassificationResult):
            return NotImplemented
        return self.score > other.score

    def rescale(self, factor: float) -> None:
        """Multiply the score by a correction factor."""
        self.score = self.score * factor

    def to_dict(self) -> dict:
        return {"class": self.assigned_class, "score": round(self.score, 6)}
