"""Base model for case-record and report models.

Every pyohca model inherits from :class:`OhcaBaseModel` which provides:

* ``alias_generator=to_camel`` so the host's camelCase keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops ``None`` values so the
  field default is used instead.
* Frozen instances; a case snapshot is passed by value and never mutated.

Timestamp parsing needs the case date for bare ``HH:MM:SS`` readings.
Loaders pass it through pydantic's validation context under
:data:`ANCHOR_DATE_KEY`.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, model_validator
from pydantic.alias_generators import to_camel

ANCHOR_DATE_KEY = "anchor_date"


def anchor_date_from(info: ValidationInfo | None) -> date | None:
    """Return the anchor date carried in the validation context, if any."""
    if info is None or not isinstance(info.context, dict):
        return None
    anchor = info.context.get(ANCHOR_DATE_KEY)
    return anchor if isinstance(anchor, date) else None


class OhcaBaseModel(BaseModel):
    """Base for pyohca models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_none_values(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return {key: value for key, value in values.items() if value is not None}
