"""Base model for the structured, serializable values of the package."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StrictBaseModel(BaseModel):
    """
    An immutable pydantic model that validates without type coercion.

    Fields dump under camelCase aliases when `by_alias=True`, which is the form
    the command-line tool prints.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
        extra="forbid",
        frozen=True,
        strict=True,
    )
