"""
Shared schema building blocks.
"""

from typing import Any, ClassVar, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_validator


class InputSchema(BaseModel):
    """Base for request bodies. Strings arrive trimmed."""
    model_config = ConfigDict(str_strip_whitespace=True)


class PatchSchema(InputSchema):
    """
    Partial update body.

    A field the client leaves out is unset and stays untouched. A field sent
    as null clears the stored value, unless it is listed in
    ``non_nullable_fields``, in which case null is a validation error.
    """
    non_nullable_fields: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_null_for_required(self):
        for name in self.non_nullable_fields:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> Dict[str, Any]:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


def normalize_currency(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    normalized = value.strip().upper()
    if len(normalized) != 3 or not normalized.isalpha():
        raise ValueError("currency must be a 3-letter ISO 4217 code")
    return normalized
