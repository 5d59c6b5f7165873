from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from findway.models.profile import UserProfile
from findway.models.question import Answer, Question
from findway.models.report import ReportData
from findway.models.scores import RawScores


class AssessmentStage(str, Enum):
    IDLE = "idle"
    COLLECTING_PROFILE = "collecting_profile"
    GENERATING_QUESTIONS = "generating_questions"
    TESTING = "testing"
    SCORING = "scoring"
    GENERATING_REPORT = "generating_report"
    REPORT_READY = "report_ready"


# Stages waiting on an external service; only abandon() is accepted
LOADING_STAGES = frozenset({
    AssessmentStage.GENERATING_QUESTIONS,
    AssessmentStage.SCORING,
    AssessmentStage.GENERATING_REPORT,
})


@dataclass
class AssessmentState:
    """
    Everything held for one assessment attempt.
    Replaced wholesale by reset() so nothing leaks into the next attempt.
    """

    stage: AssessmentStage = AssessmentStage.IDLE
    profile: Optional[UserProfile] = None
    questions: List[Question] = field(default_factory=list)
    # question id -> answer; one entry per question
    answers: Dict[int, Answer] = field(default_factory=dict)
    current_index: int = 0
    raw_scores: Optional[RawScores] = None
    report: Optional[ReportData] = None
    last_error: Optional[str] = None
    last_updated: str = ""

    def touch(self) -> None:
        self.last_updated = datetime.now(timezone.utc).isoformat()

    def reset(self) -> None:
        """Discard all attempt data; stage and error are left to the caller."""
        self.profile = None
        self.questions = []
        self.answers = {}
        self.current_index = 0
        self.raw_scores = None
        self.report = None
        self.touch()

    def ordered_answers(self) -> List[Answer]:
        """Answers in question order."""
        return [self.answers[q.id] for q in self.questions if q.id in self.answers]

    def unanswered_ids(self) -> List[int]:
        return [q.id for q in self.questions if q.id not in self.answers]
