"""Pydantic DTOs for display settings."""

from pydantic import BaseModel, Field


class DisplaySettingsResponse(BaseModel):
    """Current display preferences plus the values derived from them."""

    font_family: str
    font_size: int
    dark_mode: bool
    css_variables: dict[str, str]
    theme_class: str


class DisplaySettingsUpdate(BaseModel):
    """Partial update; omitted fields keep their current value."""

    font_family: str | None = Field(None, min_length=1, examples=['"Pinyon Script"'])
    font_size: int | None = Field(None, gt=0, examples=[36])
    dark_mode: bool | None = None


class FontOptionResponse(BaseModel):
    family: str
    name: str

    model_config = {"from_attributes": True}
