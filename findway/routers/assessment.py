"""
Assessment Router - FindWay Assessment Engine
findway/routers/assessment.py

Drives one AssessmentOrchestrator per session through its stages.
"""

from datetime import datetime, timezone
from typing import Dict, Literal, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.exceptions import HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, model_validator

from findway.core.dependencies import OrchestratorRegistry, get_orchestrator_registry
from findway.core.exceptions import (
    AssessmentException,
    AssessmentValidationError,
    InvalidTransitionError,
)
from findway.models.profile import UserProfile
from findway.models.question import Answer, Question
from findway.models.report import ReportData
from findway.pipelines.assessment_state import AssessmentStage
from findway.pipelines.orchestrator import AssessmentOrchestrator

router = APIRouter(prefix="/api/v1/assessments", tags=["Assessments"])


#  Schemas


class SessionSnapshot(BaseModel):
    session_id: str
    stage: AssessmentStage
    generation: int
    last_error: Optional[str] = None
    profile: Optional[UserProfile] = None
    current_index: int = 0
    total_questions: int = 0
    answered: int = 0
    current_question: Optional[Question] = None
    current_answer: Optional[int] = None
    scores: Optional[Dict[str, int]] = None
    raw_scores: Optional[Dict[str, Dict[str, int]]] = None
    report: Optional[ReportData] = None


class NavigateRequest(BaseModel):
    direction: Optional[Literal["next", "previous"]] = None
    index: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def validate_one_target(self):
        if (self.direction is None) == (self.index is None):
            raise ValueError("Provide exactly one of 'direction' or 'index'")
        return self


class ScoresResponse(BaseModel):
    session_id: str
    scores: Dict[str, int]
    raw_scores: Dict[str, Dict[str, int]]


#  Exception handlers (registered in main.py)


def _error(status_code: int, error_code: str, message: str, details: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


async def assessment_exception_handler(request: Request, exc: AssessmentException):
    if isinstance(exc, AssessmentValidationError):
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, "VALIDATION_ERROR", exc.message, exc.details)
    if isinstance(exc, InvalidTransitionError):
        return _error(
            status.HTTP_409_CONFLICT,
            "INVALID_TRANSITION",
            exc.message,
            {"stage": exc.stage, "operation": exc.operation},
        )
    return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "SERVICE_UNAVAILABLE", exc.message)


#  Helpers


def _snapshot(session_id: str, orch: AssessmentOrchestrator) -> SessionSnapshot:
    question = orch.current_question
    current_answer = None
    if question is not None:
        current_answer = next((a.value for a in orch.answers if a.question_id == question.id), None)
    scores = orch.scores
    raw = orch.raw_scores if orch.stage == AssessmentStage.REPORT_READY else None
    return SessionSnapshot(
        session_id=session_id,
        stage=orch.stage,
        generation=orch.generation,
        last_error=orch.last_error,
        profile=orch.profile,
        current_index=orch.current_index,
        total_questions=len(orch.questions),
        answered=len(orch.answers),
        current_question=question,
        current_answer=current_answer,
        scores=scores.model_dump(mode="json") if scores else None,
        raw_scores=raw.model_dump(mode="json") if raw else None,
        report=orch.report,
    )


def _get_session(session_id: str, registry: OrchestratorRegistry) -> AssessmentOrchestrator:
    orch = registry.get(session_id)
    if orch is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Assessment session {session_id} not found",
        )
    return orch


#  Endpoints


@router.post(
    "/sessions",
    response_model=SessionSnapshot,
    status_code=status.HTTP_201_CREATED,
    summary="Create an assessment session (restores the last report if one is stored)",
)
async def create_session(
    session_id: Optional[str] = Query(
        default=None,
        min_length=1,
        max_length=128,
        description="Reattach to an existing session id (e.g. a user id) instead of creating a new one",
    ),
    registry: OrchestratorRegistry = Depends(get_orchestrator_registry),
):
    session_id, orch = registry.create(session_id)
    return _snapshot(session_id, orch)


@router.get("/sessions/{session_id}", response_model=SessionSnapshot)
async def get_session(session_id: str, registry: OrchestratorRegistry = Depends(get_orchestrator_registry)):
    return _snapshot(session_id, _get_session(session_id, registry))


@router.delete(
    "/sessions/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Close a session (the last report stays in the session cache)",
)
async def close_session(session_id: str, registry: OrchestratorRegistry = Depends(get_orchestrator_registry)):
    orch = _get_session(session_id, registry)
    orch.abandon()
    registry.discard(session_id)


@router.post("/sessions/{session_id}/start", response_model=SessionSnapshot, summary="Start or retake")
async def start_assessment(session_id: str, registry: OrchestratorRegistry = Depends(get_orchestrator_registry)):
    orch = _get_session(session_id, registry)
    orch.start()
    return _snapshot(session_id, orch)


@router.post(
    "/sessions/{session_id}/profile",
    response_model=SessionSnapshot,
    summary="Submit the profile and generate questions",
)
async def submit_profile(
    session_id: str,
    profile: UserProfile,
    registry: OrchestratorRegistry = Depends(get_orchestrator_registry),
):
    orch = _get_session(session_id, registry)
    await orch.submit_profile(profile)
    return _snapshot(session_id, orch)


@router.put("/sessions/{session_id}/answers", response_model=SessionSnapshot)
async def record_answer(
    session_id: str,
    answer: Answer,
    registry: OrchestratorRegistry = Depends(get_orchestrator_registry),
):
    orch = _get_session(session_id, registry)
    orch.answer(answer.question_id, answer.value)
    return _snapshot(session_id, orch)


@router.post("/sessions/{session_id}/navigate", response_model=SessionSnapshot)
async def navigate(
    session_id: str,
    body: NavigateRequest,
    registry: OrchestratorRegistry = Depends(get_orchestrator_registry),
):
    orch = _get_session(session_id, registry)
    if body.index is not None:
        orch.go_to(body.index)
    elif body.direction == "next":
        orch.next_question()
    else:
        orch.previous_question()
    return _snapshot(session_id, orch)


@router.post(
    "/sessions/{session_id}/complete",
    response_model=SessionSnapshot,
    summary="Score the answers and generate the report",
)
async def complete_test(session_id: str, registry: OrchestratorRegistry = Depends(get_orchestrator_registry)):
    orch = _get_session(session_id, registry)
    await orch.complete_test()
    return _snapshot(session_id, orch)


@router.post("/sessions/{session_id}/abandon", response_model=SessionSnapshot)
async def abandon(session_id: str, registry: OrchestratorRegistry = Depends(get_orchestrator_registry)):
    orch = _get_session(session_id, registry)
    orch.abandon()
    return _snapshot(session_id, orch)


@router.post(
    "/sessions/{session_id}/restore",
    response_model=SessionSnapshot,
    summary="Reload the last completed report from the session cache",
)
async def restore(session_id: str, registry: OrchestratorRegistry = Depends(get_orchestrator_registry)):
    orch = _get_session(session_id, registry)
    if not orch.rehydrate():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No previous report found. Please take the assessment first.",
        )
    return _snapshot(session_id, orch)


@router.get("/sessions/{session_id}/scores", response_model=ScoresResponse)
async def get_scores(session_id: str, registry: OrchestratorRegistry = Depends(get_orchestrator_registry)):
    orch = _get_session(session_id, registry)
    scores = orch.scores
    if scores is None:
        raise InvalidTransitionError(orch.stage.value, "read scores")
    return ScoresResponse(
        session_id=session_id,
        scores=scores.model_dump(mode="json"),
        raw_scores=orch.raw_scores.model_dump(mode="json"),
    )
