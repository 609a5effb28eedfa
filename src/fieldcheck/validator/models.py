"""Pydantic models for fieldcheck schemas.

This module contains the Pydantic model definitions for field declarations.
"""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field, model_validator

from fieldcheck.models import FieldcheckBaseModel


class FieldSchemaInputModel(FieldcheckBaseModel):
    """Options supplied when declaring a field.

    Every option is optional: a missing ``expected_type`` is taken from the
    owner class annotation, ``required`` defaults to True and ``nullable``
    to False once the declaration is resolved.

    Attributes:
        expected_type: Explicit expected type (alias ``type``).
        element_type: Expected element type for array fields (alias
            ``array_type``).
        required: Whether the field must be present on the value.
        nullable: Whether a present field may hold ``None``.

    Example:
        >>> FieldSchemaInputModel(type=list, array_type=str, nullable=True)
        >>> FieldSchemaInputModel(required=False)
    """

    model_config = ConfigDict(populate_by_name=True)

    expected_type: Any | None = Field(default=None, alias="type")
    element_type: Any | None = Field(default=None, alias="array_type")
    required: bool | None = None
    nullable: bool | None = None


class FieldSchemaModel(FieldcheckBaseModel):
    """Resolved validation rules for one declared field.

    Attributes:
        expected_type: The type the field value is checked against.
        is_array: Whether the field holds an ordered sequence.
        element_type: Expected type of each element. Only kept when
            ``is_array`` is True; ``None`` leaves elements unchecked.
        required: Whether the field must be present on the value.
        nullable: Whether a present field may hold ``None``.

    Example:
        >>> schema = FieldSchemaModel(expected_type=list, is_array=True, element_type=str)
        >>> FieldSchemaModel(expected_type=str, element_type=int).element_type is None
        True
    """

    expected_type: Any
    is_array: bool = False
    element_type: Any | None = None
    required: bool = True
    nullable: bool = False

    @model_validator(mode="before")
    @classmethod
    def clear_element_type(cls, values: Any) -> Any:
        """Drop the element type of non-array fields."""
        if isinstance(values, dict) and not values.get("is_array"):
            values = {**values, "element_type": None}
        return values
