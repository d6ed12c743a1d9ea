"""Request/response schemas for category endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class CategoryIn(BaseModel):
    """Body for creating or replacing a category."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Category's name.",
        examples=["Electronics"],
    )
    description: str = Field(
        ...,
        min_length=1,
        description="Category's description.",
        examples=["Electronics items for the home."],
    )


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
