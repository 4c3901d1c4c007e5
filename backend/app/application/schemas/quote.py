"""Pydantic DTOs (Data Transfer Objects) for the Quote feature."""

from pydantic import BaseModel, Field


class QuoteCreate(BaseModel):
    """Schema for capturing a new quote. Font and size default to the display settings."""

    text: str = Field(..., min_length=1, examples=["Be yourself; everyone else is already taken."])
    author: str = Field(..., min_length=1, examples=["Oscar Wilde"])
    font: str | None = Field(None, min_length=1, examples=['"Ballet"'])
    size: int | None = Field(None, gt=0, examples=[48])


class QuoteResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    text: str
    author: str
    slug: str
    font: str | None = None
    size: int | None = None
    created_at: str | None = None

    model_config = {"from_attributes": True}


class QuotesStateResponse(BaseModel):
    """The quotes collection together with its sync status."""

    quotes: list[QuoteResponse]
    is_loading: bool
    error: str | None = None
    bin_id: str | None = None


class SaveResultResponse(BaseModel):
    """Outcome of an explicit save."""

    saved: bool
    error: str | None = None
    bin_id: str | None = None
