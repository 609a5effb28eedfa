"""Pydantic models for validator configuration."""

from pydantic import Field

from fieldcheck.models import FieldcheckBaseModel


class ValidatorConfig(FieldcheckBaseModel):
    """Settings that tune how values are walked during validation.

    Attributes:
        max_depth: Maximum number of nested validation steps before the
            walk is aborted. Guards against self-referencing value graphs.
        skip_falsy_values: When True, a present field holding a falsy value
            (``0``, ``''``, ``False``, an empty container) is not checked
            against its expected type. When False, only ``None`` skips the
            nested check.

    Example:
        >>> config = ValidatorConfig(max_depth=20, skip_falsy_values=False)
    """

    max_depth: int = Field(default=100, ge=1)
    skip_falsy_values: bool = True
