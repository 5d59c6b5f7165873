"""
AI Service - FindWay Assessment Engine
findway/services/ai_service.py

Question-generation and report-generation contracts, plus the Gemini
implementation over the generateContent REST endpoint.
"""
import json
import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional, Protocol

import httpx
from pydantic import TypeAdapter, ValidationError

from findway.config import Settings, get_settings
from findway.core.exceptions import GenerationError
from findway.models.profile import UserProfile
from findway.models.question import Question
from findway.models.report import ReportData
from findway.models.scores import RawScores
from findway.services.prompts import create_question_prompt, create_report_prompt

logger = logging.getLogger(__name__)

_QUESTIONS = TypeAdapter(List[Question])


class QuestionGenerator(Protocol):
    async def generate(self, profile: UserProfile) -> List[Question]: ...


class ReportGenerator(Protocol):
    async def generate(self, scores: RawScores, profile: UserProfile) -> ReportData: ...


class GeminiClient:
    """Minimal async client for Gemini generateContent in JSON mode."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise GenerationError("Gemini API key is not configured. Please set GEMINI_API_KEY.")
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def generate_json(self, prompt: str) -> Any:
        """Send a prompt and return the decoded JSON reply."""
        url = f"{self.base_url}/models/{self.model}:generateContent"
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"responseMimeType": "application/json"},
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(
                url,
                json=payload,
                headers={"x-goog-api-key": self.api_key},
            )
            response.raise_for_status()
            body = response.json()

        try:
            text = body["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise ValueError(f"Unexpected Gemini response shape: {str(body)[:200]}") from e
        return json.loads(text.strip())


class GeminiAssessmentService:
    """Implements both QuestionGenerator and ReportGenerator on Gemini."""

    def __init__(self, client: GeminiClient, settings: Optional[Settings] = None):
        self.client = client
        self.settings = settings or get_settings()
        self.questions = _QuestionEndpoint(self)
        self.reports = _ReportEndpoint(self)

    async def generate_questions(self, profile: UserProfile) -> List[Question]:
        prompt = create_question_prompt(profile, self.settings.category_allocation)
        try:
            data = await self.client.generate_json(prompt)
            if isinstance(data, dict) and "questions" in data:
                data = data["questions"]
            questions = _QUESTIONS.validate_python(data)
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.error("Error generating assessment questions: %s", e)
            raise GenerationError(
                "Failed to generate personalized assessment questions. Please try again."
            ) from e

        ids = [q.id for q in questions]
        if len(ids) != len(set(ids)):
            logger.error("Generated questions contain duplicate ids: %s", ids)
            raise GenerationError("The AI model returned duplicate question ids. Please try again.")

        if len(questions) != self.settings.QUESTION_COUNT:
            logger.warning(
                "Expected %d questions, generator returned %d",
                self.settings.QUESTION_COUNT, len(questions),
            )
        return questions

    async def generate_report(self, scores: RawScores, profile: UserProfile) -> ReportData:
        prompt = create_report_prompt(scores, profile)
        try:
            data = await self.client.generate_json(prompt)
            return ReportData.model_validate(data)
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.error("Error generating career report: %s", e)
            raise GenerationError(
                "Failed to generate your report. The AI model did not return a valid report."
            ) from e


class _QuestionEndpoint:
    def __init__(self, service: GeminiAssessmentService):
        self._service = service

    async def generate(self, profile: UserProfile) -> List[Question]:
        return await self._service.generate_questions(profile)


class _ReportEndpoint:
    def __init__(self, service: GeminiAssessmentService):
        self._service = service

    async def generate(self, scores: RawScores, profile: UserProfile) -> ReportData:
        return await self._service.generate_report(scores, profile)


@lru_cache
def get_ai_service() -> GeminiAssessmentService:
    """Build the configured AI provider. Only Gemini is supported."""
    settings = get_settings()
    if settings.AI_PROVIDER == "gemini":
        api_key = settings.GEMINI_API_KEY.get_secret_value() if settings.GEMINI_API_KEY else ""
        client = GeminiClient(
            api_key=api_key,
            model=settings.GEMINI_MODEL,
            base_url=settings.GEMINI_BASE_URL,
            timeout=settings.AI_REQUEST_TIMEOUT,
        )
        return GeminiAssessmentService(client, settings)
    raise ValueError(f"Unsupported AI provider: {settings.AI_PROVIDER}")
