"""Model catalog data models."""

from pydantic import BaseModel, Field


class Model(BaseModel):
    """A model available to the account."""

    id: str
    name: str = Field(default="")
    created: int = Field(default=0)
    owned_by: str = Field(default="")


class ModelsResponse(BaseModel):
    """GET /models body."""

    data: list[Model] = Field(default_factory=list)
