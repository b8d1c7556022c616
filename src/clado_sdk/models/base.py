"""Base model shared by all Clado API responses."""

from pydantic import BaseModel, ConfigDict


class BaseAPIResponse(BaseModel):
    """Base model for all API responses with common fields.

    Unknown fields are kept rather than dropped, so the full wire payload
    stays reachable through ``model_extra`` and ``model_dump()`` even for
    fields not declared on a model.
    """

    model_config = ConfigDict(
        extra="allow",  # Allow extra fields from API
        populate_by_name=True,  # Allow field population by alias
    )
