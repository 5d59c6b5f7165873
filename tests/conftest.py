# tests/conftest.py

"""
Pytest Fixtures - Shared test configurations and data for models, scoring,
the orchestrator and the API.

QUESTION ID REFERENCE (sample_questions):
- 1, 2   orientationStyle forced choice / interest forced choice
- 3, 4   personality likert (resilience, teamwork)
- 5      aptitude multiple choice (logical)
- 6      eq likert (empathy)
"""

import asyncio
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from findway.core.dependencies import OrchestratorRegistry, get_orchestrator_registry
from findway.models.enumerations import Category, QuestionType
from findway.models.profile import UserProfile
from findway.models.question import Option, Question
from findway.models.report import ReportData
from findway.models.scores import RawScores
from findway.pipelines.orchestrator import AssessmentOrchestrator
from findway.services.cache import InMemoryCache
from findway.services.session_store import LastSessionStore


# =============================================================================
# FAKE EXTERNAL SERVICES
# =============================================================================

class FakeQuestionGenerator:
    """Returns canned questions, raises a canned error, or waits on a gate."""

    def __init__(self, questions=None, error: Optional[Exception] = None):
        self.questions = questions or []
        self.error = error
        self.gate: Optional[asyncio.Event] = None
        self.calls: List[UserProfile] = []

    async def generate(self, profile: UserProfile) -> List[Question]:
        self.calls.append(profile)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return list(self.questions)


class FakeReportGenerator:
    def __init__(self, report=None, error: Optional[Exception] = None):
        self.report = report
        self.error = error
        self.gate: Optional[asyncio.Event] = None
        self.calls: List[tuple] = []

    async def generate(self, scores: RawScores, profile: UserProfile) -> ReportData:
        self.calls.append((scores, profile))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.report


class FakeAIService:
    def __init__(self, questions_gen: FakeQuestionGenerator, reports_gen: FakeReportGenerator):
        self.questions = questions_gen
        self.reports = reports_gen


# =============================================================================
# MODEL FIXTURES
# =============================================================================

def likert(qid: int, category: Category, sub: Optional[str]) -> Question:
    return Question(id=qid, text=f"Likert statement {qid}", type=QuestionType.LIKERT,
                    category=category, sub_category=sub)


def forced_choice(qid: int, category: Category, n_options: int) -> Question:
    return Question(
        id=qid,
        text=f"Which do you prefer? ({qid})",
        type=QuestionType.MULTIPLE_CHOICE,
        category=category,
        options=[Option(text=f"choice {i}", value=i) for i in range(1, n_options + 1)],
    )


def aptitude(qid: int, sub: str = "logical") -> Question:
    return Question(
        id=qid,
        text=f"What comes next: 2, 4, 8, ...? ({qid})",
        type=QuestionType.MULTIPLE_CHOICE,
        category=Category.APTITUDE,
        sub_category=sub,
        options=[
            Option(text="10", value=0),
            Option(text="16", value=5),
            Option(text="12", value=0),
        ],
    )


@pytest.fixture
def sample_questions() -> List[Question]:
    return [
        forced_choice(1, Category.ORIENTATION_STYLE, 4),
        forced_choice(2, Category.INTEREST, 5),
        likert(3, Category.PERSONALITY, "resilience"),
        likert(4, Category.PERSONALITY, "teamwork"),
        aptitude(5),
        likert(6, Category.EMOTIONAL_QUOTIENT, "empathy"),
    ]


@pytest.fixture
def sample_profile() -> UserProfile:
    return UserProfile(
        name="Asha Verma",
        age="19",
        contact="asha@example.com",
        education="Undergraduate",
        degree="B.Sc",
        department="Physics",
        skills=["python", "public speaking"],
        interests=["astronomy", "teaching"],
    )


@pytest.fixture
def sample_report_data() -> dict:
    """Report payload in the camelCase wire format."""
    return {
        "profileSummary": "A curious, analytical learner with strong people skills.",
        "strengths": [{"title": "Analytical Prowess", "description": "Scores high on logic."}],
        "careerMatches": [
            {
                "title": "Data Scientist",
                "description": "Combines analysis and communication.",
                "trends": "Growing demand.",
                "education": "B.Sc + certifications",
                "compatibility": 88,
            }
        ],
        "developmentPlan": {
            "areasForImprovement": [{"title": "Delegation", "description": "Share work early."}],
            "recommendations": [{"type": "Habit", "description": "Weekly reflection journal."}],
        },
        "detailedAnalyses": {
            "orientationStyle": "Creative orientation.",
            "interest": "Tech leaning.",
            "personality": "Resilient.",
            "aptitude": "Strong logic.",
            "eq": "Empathetic.",
        },
        "concludingRemarks": "Keep exploring.",
    }


@pytest.fixture
def sample_report(sample_report_data) -> ReportData:
    return ReportData.model_validate(sample_report_data)


# =============================================================================
# ORCHESTRATOR FIXTURES
# =============================================================================

@pytest.fixture
def memory_cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def session_store(memory_cache) -> LastSessionStore:
    return LastSessionStore(memory_cache, "user-1")


@pytest.fixture
def question_generator(sample_questions) -> FakeQuestionGenerator:
    return FakeQuestionGenerator(questions=sample_questions)


@pytest.fixture
def report_generator(sample_report) -> FakeReportGenerator:
    return FakeReportGenerator(report=sample_report)


@pytest.fixture
def orchestrator(question_generator, report_generator, session_store) -> AssessmentOrchestrator:
    return AssessmentOrchestrator(question_generator, report_generator, session_store)


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture
def registry(question_generator, report_generator, memory_cache) -> OrchestratorRegistry:
    return OrchestratorRegistry(memory_cache, FakeAIService(question_generator, report_generator))


@pytest.fixture
def client(registry):
    """TestClient with the registry wired to fakes and an in-memory cache."""
    from findway.main import app

    app.dependency_overrides[get_orchestrator_registry] = lambda: registry
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
