"""Data models and schemas for Recipe Finder service.

Defines Pydantic models for request/response validation and transport objects.
Fields are snake_case in Python and camelCase on the wire (categoryId, imageUrl, ...).
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases, populated by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Category(CamelModel):
    """Static catalog entry."""

    id: str
    title: str
    summary: str


class Idea(CamelModel):
    """Short recipe suggestion, enriched with an image after normalization."""

    id: str
    title: str
    blurb: str = ""
    category_id: Optional[str] = None
    image_url: Optional[str] = None
    image_alt: Optional[str] = None


class RecipeDetail(CamelModel):
    """Full recipe in canonical transport shape."""

    id: str
    title: str
    category: str = ""
    servings: int = Field(2, ge=1)
    total_time_minutes: int = Field(30, ge=1)
    ingredients: List[str] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    image_alt: Optional[str] = None


def _strip_ingredients(values: Optional[List[str]]) -> Optional[List[str]]:
    if values is None:
        return None
    return [v.strip() for v in values if v and v.strip()]


class IdeasRequest(CamelModel):
    """Request schema for recipe ideas.

    All fields are optional; a direct query, a category with ingredients, or both.
    Empty input is not rejected.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    query: Optional[str] = None
    category_id: Optional[str] = None
    ingredients: Optional[List[str]] = None

    @field_validator("ingredients")
    @classmethod
    def drop_blank_ingredients(cls, values: Optional[List[str]]) -> Optional[List[str]]:
        return _strip_ingredients(values)


class RecipeDetailRequest(CamelModel):
    """Request schema for a recipe detail.

    title is required but left optional here so the route can answer
    "title is required" with HTTP 400 instead of a schema error.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = None
    category_id: Optional[str] = None
    ingredients: Optional[List[str]] = None
    query: Optional[str] = None

    @field_validator("ingredients")
    @classmethod
    def drop_blank_ingredients(cls, values: Optional[List[str]]) -> Optional[List[str]]:
        return _strip_ingredients(values)


class CategoriesResponse(BaseModel):
    categories: List[Category]


class IdeasResponse(BaseModel):
    ideas: List[Idea]


class RecipeDetailResponse(BaseModel):
    recipe: Optional[RecipeDetail] = None


class ErrorResponse(BaseModel):
    error: str
