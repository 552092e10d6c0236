# --- File: app/schemas/common/base.py ---
"""
Schema base classes.

Request schemas validate input; response schemas are built straight from
ORM objects.
"""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict

__all__ = [
    "BaseSchema",
    "BaseCreateSchema",
    "BaseUpdateSchema",
    "BaseResponseSchema",
]


class BaseSchema(BaseModel):
    """Shared configuration: ORM attribute access, enums kept as members."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=False,
        str_strip_whitespace=True,
    )


class BaseCreateSchema(BaseSchema):
    model_config = ConfigDict(extra="forbid")


class BaseUpdateSchema(BaseSchema):
    """
    Partial update.

    Fields are Optional with ``None`` defaults; only the fields the caller
    actually sent are applied, and an explicit ``null`` does not clear a
    value.
    """

    model_config = ConfigDict(extra="forbid")

    def provided_values(self) -> Dict[str, Any]:
        """Fields sent by the caller with a non-null value."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class BaseResponseSchema(BaseSchema):
    pass
