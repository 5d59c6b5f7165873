from pydantic import RootModel, model_validator
from typing import Dict, Iterator, Tuple

from findway.models.enumerations import Category, SUBCATEGORIES


def empty_buckets() -> Dict[Category, Dict[str, int]]:
    """Fresh zeroed bucket structure for every (category, subcategory) pair."""
    return {
        category: {sub: 0 for sub in subcategories}
        for category, subcategories in SUBCATEGORIES.items()
    }


class RawScores(RootModel[Dict[Category, Dict[str, int]]]):
    """
    Unnormalized point totals grouped by category and subcategory.

    The shape is fixed by the category schema: every category and every
    subcategory is present and nothing else is. A mapping with a missing or
    unknown key does not validate.

    Serializes to {"orientationStyle": {"informative": 0, ...}, ...}.
    """

    @model_validator(mode="after")
    def validate_shape(self):
        data = self.root
        if set(data) != set(Category):
            missing = sorted(c.value for c in set(Category) - set(data))
            raise ValueError(f"RawScores missing categories: {missing}")
        for category, buckets in data.items():
            expected = set(SUBCATEGORIES[category])
            if set(buckets) != expected:
                raise ValueError(
                    f"RawScores[{category.value}] subcategories {sorted(buckets)} "
                    f"do not match schema {sorted(expected)}"
                )
        return self

    @classmethod
    def empty(cls) -> "RawScores":
        return cls(empty_buckets())

    def category(self, category: Category) -> Dict[str, int]:
        """Copy of one category's subcategory totals."""
        return dict(self.root[category])

    def category_total(self, category: Category) -> int:
        return sum(self.root[category].values())

    def items(self) -> Iterator[Tuple[Category, Dict[str, int]]]:
        for category in Category:
            yield category, dict(self.root[category])

    @property
    def grand_total(self) -> int:
        return sum(self.category_total(c) for c in Category)


class Scores(RootModel[Dict[Category, int]]):
    """Normalized 0-100 score per category. Always derived from RawScores."""

    @model_validator(mode="after")
    def validate_bounds(self):
        for category, value in self.root.items():
            if not 0 <= value <= 100:
                raise ValueError(f"Score for {category.value} out of range: {value}")
        return self

    def __getitem__(self, category: Category) -> int:
        return self.root[category]
