# findway/scoring/normalizer.py
"""
Score Normalizer
----------------
Converts RawScores into one 0-100 integer per category.

Formula:
    total    = Σ subcategory values of the category
    maximum  = questions allocated to the category × max points per question
    score    = round_half_up(total / maximum × 100)   clamped to [0, 100]

The maximum is a configured constant, not derived from the questions that
were actually generated. A category with maximum 0 scores 0.
"""
import structlog
from typing import Dict, Mapping, Optional

from findway.models.enumerations import Category
from findway.models.scores import RawScores, Scores
from findway.scoring.utils import percent_of

logger = structlog.get_logger(__name__)

# orientationStyle 2×5, interest 5×5, personality 4×5, aptitude 5×5, eq 4×5
DEFAULT_MAX_SCORES: Dict[Category, int] = {
    Category.ORIENTATION_STYLE: 10,
    Category.INTEREST: 25,
    Category.PERSONALITY: 20,
    Category.APTITUDE: 25,
    Category.EMOTIONAL_QUOTIENT: 20,
}


class ScoreNormalizer:
    """Scale raw category totals against configured maxima."""

    def __init__(self, max_scores: Optional[Mapping[Category, int]] = None):
        self.max_scores: Dict[Category, int] = dict(DEFAULT_MAX_SCORES)
        if max_scores:
            self.max_scores.update(max_scores)

    def normalize(self, raw: RawScores) -> Scores:
        normalized = {
            category: percent_of(raw.category_total(category), self.max_scores.get(category, 0))
            for category in Category
        }
        logger.debug(
            "scores_normalized",
            scores={c.value: v for c, v in normalized.items()},
        )
        return Scores(normalized)


def normalize(raw: RawScores) -> Scores:
    """Normalize with the default per-category maxima."""
    return ScoreNormalizer().normalize(raw)
