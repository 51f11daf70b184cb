"""Strict Pydantic base models shared across taskflow.

Every data contract in the package (workflow configuration, task and todo
models, error contexts, provider settings) derives from this base.
"""

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Immutable base model with strict validation.

    It enforces:
    - strict=True: Type coercion is disabled, inputs must match exact types
    - extra="forbid": No additional fields allowed
    - validate_assignment=True: Validation on all field assignments
    - frozen=True: Immutable by default
    """

    model_config = ConfigDict(
        strict=True,
        extra="forbid",
        validate_assignment=True,
        frozen=True,
        validate_default=True,
        use_enum_values=False,
        arbitrary_types_allowed=False,
    )


__all__ = [
    "StrictBaseModel",
]
