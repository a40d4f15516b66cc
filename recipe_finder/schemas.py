import json
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Difficulty = Literal["easy", "medium", "hard"]


class RecipeBase(BaseModel):
    name: str = Field(..., json_schema_extra={"example": "Shakshuka"})
    description: str = ""
    cuisine: Optional[str] = Field(None, json_schema_extra={"example": "Middle Eastern"})
    ingredients: List[str] = Field(
        default_factory=list,
        json_schema_extra={"example": ["eggs", "tomatoes", "onion", "paprika"]},
    )
    dietary_tags: List[str] = Field(
        default_factory=list, json_schema_extra={"example": ["Vegetarian"]}
    )
    prep_time: int = Field(0, ge=0)
    cook_time: int = Field(0, ge=0)
    servings: int = Field(1, ge=0)
    calories: int = Field(0, ge=0)
    protein: float = Field(0, ge=0)
    carbs: float = Field(0, ge=0)
    fat: float = Field(0, ge=0)
    image_url: Optional[str] = None

    @field_validator("ingredients", "dietary_tags", mode="before")
    @classmethod
    def _decode_json_list(cls, value):
        # ORM rows keep list columns as JSON text
        if value is None:
            return []
        if isinstance(value, str):
            return json.loads(value or "[]")
        return value


class RecipeCreate(RecipeBase):
    difficulty: Difficulty = "easy"


class Recipe(RecipeBase):
    id: str
    # stored values are constrained, but rows are read as-is
    difficulty: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class GenerateFilters(BaseModel):
    difficulty: Optional[Difficulty] = None
    max_time: Optional[float] = Field(None, ge=0, alias="maxTime")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("difficulty", mode="before")
    @classmethod
    def _unknown_difficulty_as_any(cls, value):
        # "" and unrecognised levels mean no preference
        return value if value in ("easy", "medium", "hard") else None


class GenerateRequest(BaseModel):
    ingredients: List[str] = Field(
        ..., json_schema_extra={"example": ["chicken", "garlic", "rice"]}
    )
    dietary_preferences: List[str] = Field(
        default_factory=list, alias="dietaryPreferences"
    )
    filters: Optional[GenerateFilters] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("dietary_preferences", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value


class GenerateResponse(BaseModel):
    success: bool = True
    recipes: str
    matched_from_database: int = Field(..., alias="matchedFromDatabase")

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    error: str
