"""Schemas for rating categories and the comparison flow."""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from app.services.rating import RatingCategory


class RatingCategoryOut(BaseModel):
    key: str
    label: str
    base_rating: float
    range: tuple[float, float]
    description: str

    @classmethod
    def from_category(cls, category: RatingCategory) -> "RatingCategoryOut":
        return cls(
            key=category.name.lower(),
            label=category.label,
            base_rating=category.base_rating,
            range=category.range,
            description=category.description,
        )


class ComparisonIn(BaseModel):
    opponent_id: int
    new_city_wins: bool


class RatingStepRequest(BaseModel):
    category: str = Field(..., description="loved | enjoyed | decent | disappointed | disliked")
    comparisons: list[ComparisonIn] = Field(default_factory=list)


class OpponentOut(BaseModel):
    id: int
    name: str
    rating: float


class RatingStepResponse(BaseModel):
    done: bool
    opponent: Optional[OpponentOut] = None
    rating: Optional[float] = None
    category: Optional[RatingCategoryOut] = None


class RatingUpdate(BaseModel):
    """Explicit rating, or a category whose base rating is used."""

    rating: Optional[float] = Field(None, gt=0, le=10)
    category: Optional[str] = None

    @model_validator(mode="after")
    def _one_of(self) -> "RatingUpdate":
        if (self.rating is None) == (self.category is None):
            raise ValueError("Provide exactly one of rating or category")
        return self
