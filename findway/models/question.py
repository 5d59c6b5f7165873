from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional

from findway.models.enumerations import Category, QuestionType

LIKERT_MIN = 1
LIKERT_MAX = 5
APTITUDE_CORRECT_VALUE = 5

LIKERT_LABELS = (
    "Strongly Disagree",
    "Disagree",
    "Neutral",
    "Agree",
    "Strongly Agree",
)


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Option(CamelModel):
    text: str = Field(..., min_length=1)
    value: int


def default_likert_options() -> List[Option]:
    return [Option(text=label, value=i) for i, label in enumerate(LIKERT_LABELS, start=LIKERT_MIN)]


class Question(CamelModel):
    """
    One generated assessment item.

    Option values follow the scoring convention of the question's type and
    category; a question that breaks it fails validation.
    """

    id: int = Field(..., gt=0, description="Unique question id")
    text: str = Field(..., min_length=1)
    type: QuestionType = Field(default=QuestionType.LIKERT)
    category: Category
    sub_category: Optional[str] = Field(
        default=None,
        description="Subcategory within category; checked against the schema at scoring time",
    )
    options: List[Option] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_option_convention(self):
        if not self.options:
            if self.type != QuestionType.LIKERT:
                raise ValueError(f"Question {self.id} has no options")
            self.options = default_likert_options()

        values = [o.value for o in self.options]

        if self.type == QuestionType.LIKERT:
            if any(v < LIKERT_MIN or v > LIKERT_MAX for v in values):
                raise ValueError(
                    f"Likert question {self.id} option values must be within {LIKERT_MIN}-{LIKERT_MAX}"
                )
        elif self.category == Category.APTITUDE:
            correct = values.count(APTITUDE_CORRECT_VALUE)
            if correct != 1 or any(v not in (0, APTITUDE_CORRECT_VALUE) for v in values):
                raise ValueError(
                    f"Aptitude question {self.id} needs exactly one option worth "
                    f"{APTITUDE_CORRECT_VALUE} and the rest worth 0"
                )
        elif self.category in (Category.ORIENTATION_STYLE, Category.INTEREST):
            # the selected option names the subcategory
            if self.sub_category is not None:
                raise ValueError(
                    f"Forced-choice question {self.id} must not set subCategory "
                    f"(got {self.sub_category!r})"
                )
            if len(set(values)) != len(values):
                raise ValueError(f"Forced-choice question {self.id} has duplicate option values")
        return self

    @property
    def option_values(self) -> List[int]:
        return [o.value for o in self.options]


class Answer(CamelModel):
    question_id: int = Field(..., description="Question.id this answer refers to")
    value: int
