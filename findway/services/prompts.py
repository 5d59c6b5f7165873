"""
Prompt Builders - FindWay Assessment Engine
findway/services/prompts.py

Text prompts for the question-generation and report-generation calls.
"""
from typing import Dict

from findway.models.enumerations import Category, SUBCATEGORIES
from findway.models.profile import UserProfile
from findway.models.scores import RawScores

CATEGORY_DISPLAY = {
    Category.ORIENTATION_STYLE: "Orientation Style",
    Category.INTEREST: "Interest Areas",
    Category.PERSONALITY: "Personality Traits",
    Category.APTITUDE: "Aptitude",
    Category.EMOTIONAL_QUOTIENT: "Emotional Quotient",
}

CATEGORY_FORMAT = {
    Category.ORIENTATION_STYLE: (
        'type "multiple-choice", forced choice: one option per sub-category, option value N '
        "selects the Nth sub-category in the list; omit subCategory"
    ),
    Category.INTEREST: (
        'type "multiple-choice", forced choice: one option per sub-category, option value N '
        "selects the Nth sub-category in the list; omit subCategory"
    ),
    Category.PERSONALITY: 'type "likert", first-person statement, options valued 1 (Strongly Disagree) to 5 (Strongly Agree)',
    Category.APTITUDE: 'type "multiple-choice" with a single correct answer valued 5 and every other option valued 0',
    Category.EMOTIONAL_QUOTIENT: 'type "likert", first-person statement, options valued 1 (Strongly Disagree) to 5 (Strongly Agree)',
}


def _or_default(value, default: str = "Not specified") -> str:
    if isinstance(value, list):
        value = ", ".join(value)
    return value or default


def profile_block(profile: UserProfile) -> str:
    return "\n".join([
        f"- Name: {_or_default(profile.name)}",
        f"- Age: {_or_default(profile.age)}",
        f"- Education Level: {_or_default(profile.education)}",
        f"- Degree: {_or_default(profile.degree)}",
        f"- Department: {_or_default(profile.department)}",
        f"- Stated Skills: {_or_default(profile.skills)}",
        f"- Stated Interests: {_or_default(profile.interests)}",
    ])


def create_question_prompt(profile: UserProfile, allocation: Dict[Category, int]) -> str:
    total = sum(allocation.values())
    categories = "\n".join(
        f"- **{c.value}** ({CATEGORY_DISPLAY[c]}): exactly {allocation[c]} questions; "
        f"sub-categories ({', '.join(SUBCATEGORIES[c])}); {CATEGORY_FORMAT[c]}."
        for c in Category
    )
    return f"""
You are an AI specializing in occupational psychology and psychometric assessment design.
Create a reliable, valid psychometric assessment for career guidance for this person:
{profile_block(profile)}

Instructions:
1. Create exactly {total} questions, numbered with unique ids starting from 1.
2. Frame questions around typical behaviours, preferences and reactions to situations.
   Avoid loaded language and socially desirable answers. Use simple, direct language.
3. Subtly tailor questions to the person's education, skills and interests.
4. Write every question and option in {profile.language}.
5. Distribute the questions across the categories below, using only the listed sub-category names:
{categories}

Return a JSON array of objects with the fields id, text, type, category, subCategory and
options (a list of {{"text", "value"}}). Do not include any text outside the JSON array.
"""


def create_report_prompt(scores: RawScores, profile: UserProfile) -> str:
    score_lines = []
    for category, buckets in scores.items():
        score_lines.append(f"- {CATEGORY_DISPLAY[category]} ({category.value}):")
        score_lines.extend(f"  - {sub}: {value}" for sub, value in buckets.items())
    analyses_keys = ", ".join(c.value for c in Category)
    return f"""
You are an expert career counselor AI for high school and college students. Your tone is
encouraging, professional and easy to understand.

Personal background:
{profile_block(profile)}

Psychometric assessment scores (raw point values, higher means stronger alignment):
{chr(10).join(score_lines)}

Generate a personalized career guidance report in {profile.language} as a JSON object with:
- profileSummary: string
- strengths: top 3 objects {{title, description}}
- careerMatches: top 3 objects {{title, description, trends, education, compatibility (0-100),
  keyResponsibilities, requiredSkills, growthPath}}
- developmentPlan: {{areasForImprovement: [{{title, description}}],
  recommendations: [{{type: "Habit" | "Resource" | "Exercise", description}}]}}
- interviewPrep: {{generalTips: [string], careerSpecificTips: [{{careerTitle,
  sampleQuestions: [{{question, answerGuidance}}]}}]}}
- detailedAnalyses: an object with exactly the keys {analyses_keys}, each a paragraph
- concludingRemarks: string

Do not include any text outside the JSON object.
"""
