"""Strict schema baselines with forbidden extras by default."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StrictModel(BaseModel):
    """Neutral strict base for internal DTOs."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class CamelResponseModel(StrictModel):
    """
    Response DTO base.

    Attribute names stay snake_case in Python and are emitted as camelCase
    on the wire (``total_pages`` -> ``totalPages``).
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
