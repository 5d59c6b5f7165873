# findway/scoring/aggregator.py
"""
Score Aggregator
----------------
Folds answers and the questions they refer to into RawScores.

Rules:
    - answer whose question id is unknown        -> skipped
    - question whose subCategory is not part of
      its category's schema                      -> skipped
    - otherwise                                  -> bucket += answer.value

Forced choice: a multiple-choice orientationStyle/interest question without
a subCategory credits FORCED_CHOICE_POINTS to the subcategory whose 1-based
position matches the answer value.

Never raises over well-typed input; duplicates are summed.
"""
import structlog
from typing import Dict, Iterable, Optional

from findway.models.enumerations import (
    Category,
    FORCED_CHOICE_CATEGORIES,
    QuestionType,
    SUBCATEGORIES,
    is_valid_subcategory,
)
from findway.models.question import Answer, Question
from findway.models.scores import RawScores, empty_buckets

logger = structlog.get_logger(__name__)

DEFAULT_FORCED_CHOICE_POINTS = 5


class ScoreAggregator:
    """Aggregate answers into the fixed RawScores shape."""

    def __init__(self, forced_choice_points: int = DEFAULT_FORCED_CHOICE_POINTS):
        self.forced_choice_points = forced_choice_points

    def aggregate(
        self,
        answers: Iterable[Answer],
        questions: Iterable[Question],
    ) -> RawScores:
        """
        Args:
            answers: Answers in submission order. May reference unknown
                     questions or repeat a question id.
            questions: Authoritative question set for this attempt.

        Returns:
            RawScores with every (category, subcategory) pair present.
        """
        lookup: Dict[int, Question] = {q.id: q for q in questions}
        buckets = empty_buckets()
        applied = 0
        skipped = 0

        for answer in answers:
            question = lookup.get(answer.question_id)
            if question is None:
                skipped += 1
                logger.debug("answer_skipped", question_id=answer.question_id, reason="unknown_question")
                continue

            target = self._resolve_bucket(question, answer)
            if target is None:
                skipped += 1
                logger.debug(
                    "answer_skipped",
                    question_id=question.id,
                    category=question.category.value,
                    sub_category=question.sub_category,
                    reason="unknown_subcategory",
                )
                continue

            subcategory, points = target
            buckets[question.category][subcategory] += points
            applied += 1

        raw = RawScores(buckets)
        logger.info(
            "scores_aggregated",
            answers_applied=applied,
            answers_skipped=skipped,
            totals={c.value: raw.category_total(c) for c in Category},
        )
        return raw

    def _resolve_bucket(self, question: Question, answer: Answer) -> Optional[tuple]:
        """Return (subcategory, points) for an answer, or None to skip it."""
        if question.sub_category is not None:
            if not is_valid_subcategory(question.category, question.sub_category):
                return None
            return question.sub_category, answer.value

        if (
            question.type == QuestionType.MULTIPLE_CHOICE
            and question.category in FORCED_CHOICE_CATEGORIES
        ):
            subcategories = SUBCATEGORIES[question.category]
            if 1 <= answer.value <= len(subcategories):
                return subcategories[answer.value - 1], self.forced_choice_points
        return None


def aggregate(answers: Iterable[Answer], questions: Iterable[Question]) -> RawScores:
    """Aggregate with default forced-choice weighting."""
    return ScoreAggregator().aggregate(answers, questions)
