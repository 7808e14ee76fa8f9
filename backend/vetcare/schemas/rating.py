"""Module: rating."""

from pydantic import BaseModel, Field


class RatingCreate(BaseModel):
    score: int = Field(ge=1, le=5)
    author_id: int | None = None


class RatingResult(BaseModel):
    rating_id: int
    professional_id: int
    score: int
    # Professional's aggregate after this rating was counted.
    rating: float | None = None
