"""Pydantic request/response schemas for the storefront submission API.

These are separate from Protean commands (anti-corruption pattern). The
wire format is camelCase because storefront scripts and the embedded
dashboard read it directly; snake_case input is accepted as well.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class SubmitFormRequest(_WireModel):
    username: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=254)
    message: str | None = None
    rating: int | None = Field(default=None, ge=1, le=5)
    product_id: str | None = Field(default=None, max_length=255)
    product_title: str | None = Field(default=None, max_length=255)

    @field_validator("*", mode="before")
    @classmethod
    def blank_is_missing(cls, value):
        # HTML forms send unset inputs as empty strings
        if isinstance(value, str) and not value.strip():
            return None
        return value


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class SubmissionResponse(_WireModel):
    id: str = Field(alias="_id")
    shop: str
    kind: str
    username: str
    email: str | None = None
    message: str | None = None
    rating: int | None = None
    product_id: str | None = None
    product_title: str | None = None
    image_url: str | None = None
    submitted_at: datetime | None = None

    @classmethod
    def from_submission(cls, submission) -> SubmissionResponse:
        return cls(
            id=str(submission.id),
            shop=submission.shop,
            kind=submission.kind,
            username=submission.username,
            email=submission.email,
            message=submission.message,
            rating=submission.rating.score if submission.rating else None,
            product_id=str(submission.product_id) if submission.product_id else None,
            product_title=submission.product_title,
            image_url=submission.image_url,
            submitted_at=submission.submitted_at,
        )


class SubmitFormResponse(_WireModel):
    success: bool = True
    message: str
    data: SubmissionResponse


class SubmissionListResponse(_WireModel):
    success: bool = True
    data: list[SubmissionResponse]
    count: int


class AverageRatingResponse(_WireModel):
    success: bool = True
    average: float | None = None
    count: int = 0


class StatusResponse(_WireModel):
    success: bool = True
