"""Base model for spreadsheet-backed records.

Every record model inherits from :class:`SheetRecord` which provides:

* frozen, name-or-alias population so both the sheet's camelCase
  headers and the model's own ``model_dump()`` output validate;
* a ``model_validator(mode="before")`` that drops empty cells so the
  field default is used;
* a ``raw`` dict that captures the original row, including columns the
  model does not declare.
"""

from __future__ import annotations

import math
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, model_validator


def coerce_sheet_str(value: Any) -> Any:
    """Render numeric cells as strings.

    Apps Script serialises numeric-looking cells (``sn``, seat numbers,
    phone numbers) as JSON numbers.
    """
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return value


SheetStr = Annotated[str, BeforeValidator(coerce_sheet_str)]
"""Annotated type accepting both string and numeric sheet cells."""


def _require_identifier(value: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise ValueError("identifier must be non-empty")
    return stripped


SheetId = Annotated[str, BeforeValidator(coerce_sheet_str), AfterValidator(_require_identifier)]
"""Non-blank identifier cell with surrounding whitespace stripped."""


class SheetRecord(BaseModel):
    """Base for rows read from a sheet endpoint."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original row as received."""

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        """Drop empty cells (``None``, blank strings, NaN)."""
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _clean_sheet_values(cls, values: Any) -> Any:
        """Strip empty cells and stash the raw row."""
        if not isinstance(values, dict):
            return values
        original = dict(values)
        cleaned = SheetRecord._clean_dict(original)

        # Only auto-stash raw when validating a sheet row.  A dumped model
        # already carries its raw row and must round-trip unchanged.
        if "raw" not in values:
            cleaned["raw"] = original
        return cleaned
