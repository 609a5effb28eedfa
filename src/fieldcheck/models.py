"""Base Pydantic models for fieldcheck.

This module provides the base model class that all fieldcheck Pydantic models
inherit from. It establishes consistent configuration across all models:

- Strict field validation (no extra fields allowed)
- Immutable instances, so schemas can be shared between threads
- Arbitrary Python types allowed as field values (schemas hold classes)

Example:
    >>> from fieldcheck.models import FieldcheckBaseModel
    >>>
    >>> class MyModel(FieldcheckBaseModel):
    ...     name: str
    >>>
    >>> MyModel(name="test").model_dump()
    {'name': 'test'}
"""

from pydantic import BaseModel, ConfigDict


class FieldcheckBaseModel(BaseModel):
    """Base model for all fieldcheck Pydantic models.

    - extra="forbid": Rejects any fields not defined in the model
    - frozen=True: Makes instances immutable
    - arbitrary_types_allowed=True: Lets models carry classes and other
      non-pydantic objects as field values
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)
