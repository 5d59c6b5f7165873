"""
Last Session Store - FindWay Assessment Engine
findway/services/session_store.py

Owns the "last session" record layout in the SessionCache: three
independently keyed records (profile, raw scores, report). All three must
be present and parse for a session to be restored.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from findway.core.exceptions import CacheCorruptionError
from findway.models.profile import UserProfile
from findway.models.report import ReportData
from findway.models.scores import RawScores
from findway.services.cache import SessionCache

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

PROFILE_RECORD = "profile"
SCORES_RECORD = "scores"
REPORT_RECORD = "report"


@dataclass(frozen=True)
class LastSession:
    profile: UserProfile
    raw_scores: RawScores
    report: ReportData


class LastSessionStore:
    """Reads and writes the last completed session for one assessment session id."""

    def __init__(self, cache: SessionCache, session_id: str = "default", prefix: str = "findway"):
        self.cache = cache
        self.session_id = session_id
        self.prefix = prefix

    def key(self, record: str) -> str:
        return f"{self.prefix}:{self.session_id}:{record}"

    def save_checkpoint(self, profile: UserProfile, raw_scores: RawScores) -> None:
        """
        Persist profile and scores before the report is requested.

        The previous report is dropped first, so a checkpoint never pairs
        with a report generated from another attempt.
        """
        self.cache.delete(self.key(REPORT_RECORD))
        self.cache.put(self.key(PROFILE_RECORD), profile)
        self.cache.put(self.key(SCORES_RECORD), raw_scores)
        logger.info("Checkpointed profile and scores for session %s", self.session_id)

    def save_report(self, report: ReportData) -> None:
        self.cache.put(self.key(REPORT_RECORD), report)
        logger.info("Stored report for session %s", self.session_id)

    def load(self) -> Optional[LastSession]:
        """
        Load the last completed session.

        Returns:
            LastSession when all three records are present and valid, None
            when any record is absent.

        Raises:
            CacheCorruptionError: a present record fails to parse.
        """
        raw_profile = self.cache.get(self.key(PROFILE_RECORD))
        raw_scores = self.cache.get(self.key(SCORES_RECORD))
        raw_report = self.cache.get(self.key(REPORT_RECORD))

        if raw_profile is None or raw_scores is None or raw_report is None:
            return None

        return LastSession(
            profile=self._parse(PROFILE_RECORD, raw_profile, UserProfile),
            raw_scores=self._parse(SCORES_RECORD, raw_scores, RawScores),
            report=self._parse(REPORT_RECORD, raw_report, ReportData),
        )

    def clear(self) -> None:
        """Delete all three records of this session."""
        for record in (PROFILE_RECORD, SCORES_RECORD, REPORT_RECORD):
            self.cache.delete(self.key(record))
        logger.info("Cleared last session for %s", self.session_id)

    def _parse(self, record: str, data: str, model: Type[T]) -> T:
        try:
            return model.model_validate_json(data)
        except ValidationError as e:
            logger.warning("Record %s failed to parse: %s", self.key(record), e.errors()[:1])
            raise CacheCorruptionError(self.key(record)) from e
