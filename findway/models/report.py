from pydantic import Field, field_validator
from typing import Dict, List, Optional

from findway.models.enumerations import Category, RecommendationType
from findway.models.question import CamelModel


class Strength(CamelModel):
    title: str
    description: str


class CareerMatch(CamelModel):
    title: str
    description: str
    trends: str = ""
    education: str = ""
    compatibility: Optional[int] = Field(default=None, ge=0, le=100)
    key_responsibilities: Optional[str] = None
    required_skills: Optional[str] = None
    growth_path: Optional[str] = None


class ImprovementArea(CamelModel):
    title: str
    description: str


class Recommendation(CamelModel):
    type: RecommendationType
    description: str


class DevelopmentPlan(CamelModel):
    areas_for_improvement: List[ImprovementArea] = Field(default_factory=list)
    recommendations: List[Recommendation] = Field(default_factory=list)


class SampleQuestion(CamelModel):
    question: str
    answer_guidance: str


class CareerSpecificTips(CamelModel):
    career_title: str
    sample_questions: List[SampleQuestion] = Field(default_factory=list)


class InterviewPrep(CamelModel):
    general_tips: List[str] = Field(default_factory=list)
    career_specific_tips: List[CareerSpecificTips] = Field(default_factory=list)


class ReportData(CamelModel):
    """
    AI-generated career report.

    Opaque to scoring except that detailed_analyses has exactly one entry
    per assessment category.
    """

    profile_summary: str = Field(..., min_length=1)
    strengths: List[Strength] = Field(default_factory=list)
    career_matches: List[CareerMatch]
    development_plan: DevelopmentPlan = Field(default_factory=DevelopmentPlan)
    interview_prep: Optional[InterviewPrep] = None
    detailed_analyses: Dict[Category, str]
    concluding_remarks: str = ""

    @field_validator("detailed_analyses")
    @classmethod
    def validate_category_alignment(cls, v: Dict[Category, str]) -> Dict[Category, str]:
        missing = [c.value for c in Category if c not in v]
        if missing:
            raise ValueError(f"detailedAnalyses missing categories: {', '.join(missing)}")
        return v
