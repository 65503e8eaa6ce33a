"""Common Pydantic schemas."""
from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(from_attributes=True)


class LinkSchema(BaseSchema):
    """Reference to another record by ID and detail URL."""

    id: int
    url: str


class FormDescription(BaseSchema):
    """Fields accepted by a create form that offers no choices."""

    fields: list[str]
