# findway/pipelines/orchestrator.py
"""
Assessment Orchestrator
-----------------------
Single source of truth for where a user is in the assessment:

    idle -> collecting_profile -> generating_questions -> testing
         -> scoring -> generating_report -> report_ready

Any failure returns to idle with last_error set. Retake (start() from
report_ready) always begins a fresh attempt.

Every awaited service call remembers the generation it was issued from.
abandon(), start() and failures bump the generation, so a result that
arrives afterwards is discarded instead of being applied to a newer attempt.
"""
import structlog
from typing import Iterable, List, Optional

from findway.core.exceptions import (
    AssessmentValidationError,
    CacheCorruptionError,
    GenerationError,
    InvalidTransitionError,
)
from findway.models.profile import UserProfile, validate_profile
from findway.models.question import Answer, Question
from findway.models.report import ReportData
from findway.models.scores import RawScores, Scores
from findway.pipelines.assessment_state import (
    AssessmentStage,
    AssessmentState,
    LOADING_STAGES,
)
from findway.scoring.aggregator import ScoreAggregator
from findway.scoring.normalizer import ScoreNormalizer
from findway.services.ai_service import QuestionGenerator, ReportGenerator
from findway.services.session_store import LastSessionStore

logger = structlog.get_logger(__name__)

EMPTY_GENERATION_MESSAGE = "generation produced no questions"
DEFAULT_REQUIRED_FIELDS = ("name", "contact", "education", "skills", "interests")


class AssessmentOrchestrator:
    """Drives one user's assessment attempt through its stages."""

    def __init__(
        self,
        question_generator: QuestionGenerator,
        report_generator: ReportGenerator,
        store: LastSessionStore,
        aggregator: Optional[ScoreAggregator] = None,
        normalizer: Optional[ScoreNormalizer] = None,
        required_profile_fields: Iterable[str] = DEFAULT_REQUIRED_FIELDS,
    ):
        self.question_generator = question_generator
        self.report_generator = report_generator
        self.store = store
        self.aggregator = aggregator or ScoreAggregator()
        self.normalizer = normalizer or ScoreNormalizer()
        self.required_profile_fields = tuple(required_profile_fields)
        self.state = AssessmentState()
        self._generation = 0

    # -------------------------
    # Read-only views
    # -------------------------
    @property
    def stage(self) -> AssessmentStage:
        return self.state.stage

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def last_error(self) -> Optional[str]:
        return self.state.last_error

    @property
    def profile(self) -> Optional[UserProfile]:
        return self.state.profile

    @property
    def questions(self) -> List[Question]:
        return list(self.state.questions)

    @property
    def answers(self) -> List[Answer]:
        return self.state.ordered_answers()

    @property
    def raw_scores(self) -> Optional[RawScores]:
        return self.state.raw_scores

    @property
    def report(self) -> Optional[ReportData]:
        return self.state.report

    @property
    def current_index(self) -> int:
        return self.state.current_index

    @property
    def current_question(self) -> Optional[Question]:
        if self.stage != AssessmentStage.TESTING or not self.state.questions:
            return None
        return self.state.questions[self.state.current_index]

    @property
    def is_loading(self) -> bool:
        return self.stage in LOADING_STAGES

    @property
    def scores(self) -> Optional[Scores]:
        """Normalized scores, recomputed from RawScores on every access."""
        if self.stage != AssessmentStage.REPORT_READY or self.state.raw_scores is None:
            return None
        return self.normalizer.normalize(self.state.raw_scores)

    # -------------------------
    # Transitions
    # -------------------------
    def start(self) -> None:
        """Begin a fresh attempt (also used for retake)."""
        self._require("start an assessment", AssessmentStage.IDLE, AssessmentStage.REPORT_READY)
        self._generation += 1
        self.state.reset()
        self.state.last_error = None
        self._transition(AssessmentStage.COLLECTING_PROFILE)

    async def submit_profile(self, profile: UserProfile) -> None:
        """
        Accept the profile and generate questions.

        Raises:
            AssessmentValidationError: required fields missing; stage unchanged.
        """
        self._require("submit a profile", AssessmentStage.COLLECTING_PROFILE)
        validate_profile(profile, self.required_profile_fields)

        self.state.profile = profile
        self._transition(AssessmentStage.GENERATING_QUESTIONS)
        generation = self._generation

        try:
            questions = await self.question_generator.generate(profile)
        except Exception as e:
            if not self._is_stale(generation, "question_generation"):
                self._fail(self._user_message(e))
            return

        if self._is_stale(generation, "question_generation"):
            return
        if not questions:
            self._fail(EMPTY_GENERATION_MESSAGE)
            return

        self.state.questions = list(questions)
        self.state.current_index = 0
        logger.info("questions_ready", generation=generation, count=len(questions))
        self._transition(AssessmentStage.TESTING)

    def answer(self, question_id: int, value: int) -> Answer:
        """Record or overwrite the answer to one question."""
        self._require("answer a question", AssessmentStage.TESTING)
        question = next((q for q in self.state.questions if q.id == question_id), None)
        if question is None:
            raise AssessmentValidationError(
                f"Question {question_id} is not part of this assessment",
                details={"question_id": question_id},
            )
        if value not in question.option_values:
            raise AssessmentValidationError(
                f"Value {value} is not an option of question {question_id}",
                details={"question_id": question_id, "allowed": question.option_values},
            )

        answer = Answer(question_id=question_id, value=value)
        self.state.answers[question_id] = answer
        self.state.touch()
        return answer

    def next_question(self) -> Question:
        self._require("move to the next question", AssessmentStage.TESTING)
        if self.state.current_index < len(self.state.questions) - 1:
            self.state.current_index += 1
        return self.current_question

    def previous_question(self) -> Question:
        self._require("move to the previous question", AssessmentStage.TESTING)
        if self.state.current_index > 0:
            self.state.current_index -= 1
        return self.current_question

    def go_to(self, index: int) -> Question:
        self._require("jump to a question", AssessmentStage.TESTING)
        if not 0 <= index < len(self.state.questions):
            raise AssessmentValidationError(
                f"Question index {index} out of range",
                details={"index": index, "total": len(self.state.questions)},
            )
        self.state.current_index = index
        return self.current_question

    async def complete_test(self) -> None:
        """
        Seal answers into RawScores, checkpoint, and generate the report.

        Raises:
            AssessmentValidationError: questions left unanswered; stage unchanged.
        """
        self._require("complete the test", AssessmentStage.TESTING)
        unanswered = self.state.unanswered_ids()
        if unanswered:
            raise AssessmentValidationError(
                f"{len(unanswered)} question(s) still need an answer",
                details={"unanswered": unanswered},
            )

        self._transition(AssessmentStage.SCORING)
        profile = self.state.profile
        raw = self.aggregator.aggregate(self.state.ordered_answers(), self.state.questions)
        self.state.raw_scores = raw

        try:
            self.store.save_checkpoint(profile, raw)
        except Exception as e:
            logger.error("checkpoint_failed", error=str(e))
            self._fail("Could not save your results. Please try again.")
            return

        self._transition(AssessmentStage.GENERATING_REPORT)
        generation = self._generation

        try:
            report = await self.report_generator.generate(raw, profile)
            if not isinstance(report, ReportData):
                report = ReportData.model_validate(report)
        except Exception as e:
            if not self._is_stale(generation, "report_generation"):
                self._fail(self._user_message(e, prefix="Failed to generate your report."))
            return

        if self._is_stale(generation, "report_generation"):
            return

        try:
            self.store.save_report(report)
        except Exception as e:
            logger.error("report_persist_failed", error=str(e))
            self._fail("Could not save your report. Please try again.")
            return

        self.state.report = report
        self._transition(AssessmentStage.REPORT_READY)

    def abandon(self) -> None:
        """Leave the current attempt from any stage; pending results are discarded."""
        self._generation += 1
        self.state.reset()
        self.state.last_error = None
        self._transition(AssessmentStage.IDLE)

    def rehydrate(self) -> bool:
        """
        Restore the last completed session from the store.

        Returns:
            True when profile, scores and report were all restored and the
            orchestrator is now report_ready.
        """
        self._require("restore the last report", AssessmentStage.IDLE)
        try:
            session = self.store.load()
        except CacheCorruptionError as e:
            logger.warning("cache_corruption_recovered", key=e.key)
            self.store.clear()
            return False

        if session is None:
            return False

        self.state.reset()
        self.state.profile = session.profile
        self.state.raw_scores = session.raw_scores
        self.state.report = session.report
        self.state.last_error = None
        self._transition(AssessmentStage.REPORT_READY)
        logger.info("session_rehydrated", session_id=self.store.session_id)
        return True

    # -------------------------
    # Internals
    # -------------------------
    def _require(self, operation: str, *stages: AssessmentStage) -> None:
        if self.stage not in stages:
            raise InvalidTransitionError(self.stage.value, operation)

    def _transition(self, stage: AssessmentStage) -> None:
        logger.info(
            "stage_transition",
            from_stage=self.state.stage.value,
            to_stage=stage.value,
            generation=self._generation,
        )
        self.state.stage = stage
        self.state.touch()

    def _is_stale(self, generation: int, call: str) -> bool:
        if generation != self._generation:
            logger.info(
                "stale_response_discarded",
                call=call,
                issued_generation=generation,
                current_generation=self._generation,
            )
            return True
        return False

    def _fail(self, message: str) -> None:
        logger.warning("assessment_failed", stage=self.stage.value, reason=message)
        self._generation += 1
        self.state.reset()
        self.state.last_error = message
        self._transition(AssessmentStage.IDLE)

    @staticmethod
    def _user_message(error: Exception, prefix: str = "Failed to communicate with the AI model.") -> str:
        if isinstance(error, GenerationError):
            return error.message
        return f"{prefix} Please try again. Error: {error}"
