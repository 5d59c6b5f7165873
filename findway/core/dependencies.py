"""
Dependencies - FindWay Assessment Engine
findway/core/dependencies.py

FastAPI dependency injection for the session cache, AI service and the
per-session orchestrator registry.
"""

from functools import lru_cache
from typing import Dict, Optional
from uuid import uuid4

from findway.config import get_settings
from findway.pipelines.orchestrator import AssessmentOrchestrator
from findway.scoring.aggregator import ScoreAggregator
from findway.scoring.normalizer import ScoreNormalizer
from findway.services.ai_service import get_ai_service
from findway.services.cache import SessionCache, get_cache
from findway.services.session_store import LastSessionStore


class OrchestratorRegistry:
    """Holds one AssessmentOrchestrator per assessment session id."""

    def __init__(self, cache: SessionCache, ai_service=None):
        self.cache = cache
        self.ai_service = ai_service
        self._sessions: Dict[str, AssessmentOrchestrator] = {}

    def create(self, session_id: Optional[str] = None) -> tuple:
        """
        Create (or reattach to) a session and rehydrate its last report.

        Returns:
            (session_id, orchestrator)
        """
        session_id = session_id or uuid4().hex
        orchestrator = self._sessions.get(session_id)
        if orchestrator is None:
            orchestrator = self._build(session_id)
            orchestrator.rehydrate()
            self._sessions[session_id] = orchestrator
        return session_id, orchestrator

    def get(self, session_id: str) -> Optional[AssessmentOrchestrator]:
        return self._sessions.get(session_id)

    def discard(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)

    def _build(self, session_id: str) -> AssessmentOrchestrator:
        settings = get_settings()
        ai_service = self.ai_service or get_ai_service()
        return AssessmentOrchestrator(
            question_generator=ai_service.questions,
            report_generator=ai_service.reports,
            store=LastSessionStore(self.cache, session_id, prefix=settings.SESSION_KEY_PREFIX),
            aggregator=ScoreAggregator(forced_choice_points=settings.FORCED_CHOICE_POINTS),
            normalizer=ScoreNormalizer(settings.category_max_scores),
            required_profile_fields=settings.REQUIRED_PROFILE_FIELDS,
        )


@lru_cache()
def get_orchestrator_registry() -> OrchestratorRegistry:
    """Get cached OrchestratorRegistry instance."""
    return OrchestratorRegistry(get_cache())
