from enum import Enum
from typing import Dict, Optional, Tuple, Type


class Category(str, Enum):
    ORIENTATION_STYLE = "orientationStyle"
    INTEREST = "interest"
    PERSONALITY = "personality"
    APTITUDE = "aptitude"
    EMOTIONAL_QUOTIENT = "eq"


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "multiple-choice"
    LIKERT = "likert"


class OrientationStyle(str, Enum):
    INFORMATIVE = "informative"
    ADMINISTRATIVE = "administrative"
    CREATIVE = "creative"
    PEOPLE_ORIENTED = "peopleOriented"


class Interest(str, Enum):
    TECH = "tech"
    BUSINESS = "business"
    ARTS = "arts"
    HEALTH = "health"
    SOCIAL = "social"


class Personality(str, Enum):
    RESILIENCE = "resilience"
    TEAMWORK = "teamwork"
    DECISION_MAKING = "decisionMaking"
    OPENNESS = "openness"


class Aptitude(str, Enum):
    LOGICAL = "logical"
    NUMERICAL = "numerical"
    LANGUAGE = "language"
    GENERAL_KNOWLEDGE = "generalKnowledge"
    ATTENTION_TO_DETAIL = "attentionToDetail"


class EmotionalQuotient(str, Enum):
    EMPATHY = "empathy"
    SELF_AWARENESS = "selfAwareness"
    SOCIAL_SKILLS = "socialSkills"
    MOTIVATION = "motivation"


class RecommendationType(str, Enum):
    HABIT = "Habit"
    RESOURCE = "Resource"
    EXERCISE = "Exercise"


# Closed category -> subcategory schema
SUBCATEGORY_ENUMS: Dict[Category, Type[Enum]] = {
    Category.ORIENTATION_STYLE: OrientationStyle,
    Category.INTEREST: Interest,
    Category.PERSONALITY: Personality,
    Category.APTITUDE: Aptitude,
    Category.EMOTIONAL_QUOTIENT: EmotionalQuotient,
}

SUBCATEGORIES: Dict[Category, Tuple[str, ...]] = {
    category: tuple(member.value for member in enum_cls)
    for category, enum_cls in SUBCATEGORY_ENUMS.items()
}

# Categories whose multiple-choice options name the subcategory being credited
FORCED_CHOICE_CATEGORIES = frozenset({Category.ORIENTATION_STYLE, Category.INTEREST})


def is_valid_subcategory(category: Category, subcategory: Optional[str]) -> bool:
    """Check a subcategory name against the static schema of its category."""
    return subcategory is not None and subcategory in SUBCATEGORIES[category]
