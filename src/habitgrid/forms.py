"""Habit form definitions."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants.colors import DEFAULT_COLOR

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


class HabitForm(BaseModel):
    """Form model for creating a habit."""

    model_config = ConfigDict(validate_default=False, str_strip_whitespace=True)

    title: str = Field(default="", description="Short label for the habit", max_length=80)
    color_hex: str = Field(default=DEFAULT_COLOR, description="Colour used on the grid")

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        """Ensure the habit title is present when validating submissions."""

        if not value or not value.strip():
            raise ValueError("Please provide a habit name.")
        return value

    @field_validator("color_hex")
    @classmethod
    def validate_color(cls, value: str) -> str:
        if not _HEX_COLOR.match(value or ""):
            raise ValueError("Colour must look like #RRGGBB.")
        return value.lower()

    def validation_errors(self) -> dict[str, list[str]]:
        """Return validation errors for the current payload."""

        try:
            HabitForm.model_validate(self.model_dump())
        except ValidationError as exc:
            structured: dict[str, list[str]] = {}
            for error in exc.errors(include_url=False):
                loc = error.get("loc", ())
                key = str(loc[0]) if loc else "__root__"
                structured.setdefault(key, []).append(error.get("msg", "Invalid value"))
            return structured
        return {}


__all__ = ["HabitForm"]
