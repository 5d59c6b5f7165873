from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Iterable, List, Optional

from findway.core.exceptions import AssessmentValidationError


class UserProfile(BaseModel):
    """
    Biographical context supplied before question generation.

    Frozen: once the test stage begins the profile is only read, as
    generation and report context.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        str_strip_whitespace=True,
    )

    name: str = Field(default="", max_length=255)
    age: Optional[str] = Field(default=None, max_length=16)
    contact: str = Field(default="", max_length=255, description="Email or phone number")
    education: str = Field(default="", max_length=255, description="Education level")
    degree: Optional[str] = Field(default=None, max_length=255)
    department: Optional[str] = Field(default=None, max_length=255)
    skills: List[str] = Field(default_factory=list)
    interests: List[str] = Field(default_factory=list)
    language: str = Field(default="English", max_length=64)

    @field_validator("skills", "interests", mode="before")
    @classmethod
    def split_comma_separated(cls, v):
        """Accept 'python, design' as well as ['python', 'design']."""
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        return [item.strip() for item in v if isinstance(item, str) and item.strip()]


def missing_profile_fields(profile: UserProfile, required_fields: Iterable[str]) -> List[str]:
    """Return the required fields that are blank on the profile."""
    missing = []
    for field_name in required_fields:
        value = getattr(profile, field_name, None)
        if isinstance(value, list):
            if not value:
                missing.append(field_name)
        elif value is None or not str(value).strip():
            missing.append(field_name)
    return missing


def validate_profile(profile: UserProfile, required_fields: Iterable[str]) -> UserProfile:
    """
    Check a profile against the configured required-field policy.

    Raises:
        AssessmentValidationError: listing every missing field.
    """
    missing = missing_profile_fields(profile, required_fields)
    if missing:
        raise AssessmentValidationError(
            f"Please fill in all required fields: {', '.join(missing)}",
            details={"missing_fields": missing},
        )
    return profile
