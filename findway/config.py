"""Application configuration with comprehensive validation."""
from typing import Optional, Literal, List, Dict
from functools import lru_cache
from pydantic import Field, field_validator, model_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from findway.models.enumerations import Category


# Profile fields that may appear in REQUIRED_PROFILE_FIELDS
PROFILE_FIELDS = (
    "name", "age", "contact", "education", "degree",
    "department", "skills", "interests", "language",
)


class Settings(BaseSettings):
    """Application settings with production-grade validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "FindWay Assessment Engine"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"

    # Redis (session cache)
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_TTL_SESSION: int = Field(default=2_592_000, ge=60)  # 30 days
    SESSION_KEY_PREFIX: str = "findway"

    # AI provider
    AI_PROVIDER: Literal["gemini"] = "gemini"
    GEMINI_API_KEY: Optional[SecretStr] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    AI_REQUEST_TIMEOUT: float = Field(default=120.0, gt=0)

    # Question allocation per category (drives prompts and normalization maxima)
    QUESTION_COUNT: int = Field(default=20, ge=1, le=100)
    QUESTIONS_ORIENTATION_STYLE: int = Field(default=2, ge=0)
    QUESTIONS_INTEREST: int = Field(default=5, ge=0)
    QUESTIONS_PERSONALITY: int = Field(default=4, ge=0)
    QUESTIONS_APTITUDE: int = Field(default=5, ge=0)
    QUESTIONS_EQ: int = Field(default=4, ge=0)
    MAX_POINTS_PER_QUESTION: int = Field(default=5, ge=0)
    FORCED_CHOICE_POINTS: int = Field(default=5, ge=0)

    # Profile policy
    REQUIRED_PROFILE_FIELDS: List[str] = Field(
        default=["name", "contact", "education", "skills", "interests"]
    )

    @field_validator("REQUIRED_PROFILE_FIELDS")
    @classmethod
    def validate_required_fields(cls, v: List[str]) -> List[str]:
        unknown = [f for f in v if f not in PROFILE_FIELDS]
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(unknown)}")
        return v

    @model_validator(mode="after")
    def validate_question_allocation(self):
        """Validate per-category allocation sums to QUESTION_COUNT."""
        total = sum(self.category_allocation.values())
        if total != self.QUESTION_COUNT:
            raise ValueError(
                f"Category question allocation must sum to {self.QUESTION_COUNT}, got {total}"
            )
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production has required settings."""
        if self.APP_ENV == "production":
            if self.DEBUG:
                raise ValueError("DEBUG must be False in production")
            if self.GEMINI_API_KEY is None:
                raise ValueError("GEMINI_API_KEY required in production")
        return self

    @property
    def category_allocation(self) -> Dict[Category, int]:
        """Number of questions requested per category."""
        return {
            Category.ORIENTATION_STYLE: self.QUESTIONS_ORIENTATION_STYLE,
            Category.INTEREST: self.QUESTIONS_INTEREST,
            Category.PERSONALITY: self.QUESTIONS_PERSONALITY,
            Category.APTITUDE: self.QUESTIONS_APTITUDE,
            Category.EMOTIONAL_QUOTIENT: self.QUESTIONS_EQ,
        }

    @property
    def category_max_scores(self) -> Dict[Category, int]:
        """Maximum achievable raw total per category."""
        return {
            category: count * self.MAX_POINTS_PER_QUESTION
            for category, count in self.category_allocation.items()
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()
