"""
Recipe model: read-only view of a catalog recipe.

Built from catalog rows via RecipeAttributes.model_validate(d). Rows in the
joined shape (``cuisine: {"name": ...}``, ``category: {"name": ...}``) are
flattened into cuisine_name / category_name.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class RecipeAttributes(BaseModel):
    """
    Recipe payload consumed by the analysis and scoring stages.

    All fields except id are optional so partial catalog rows still load;
    stages skip whatever a recipe does not carry.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    title: str = ""
    description: str = ""
    ingredients: List[str] = []
    cuisine_name: Optional[str] = None
    category_name: Optional[str] = None
    difficulty: Optional[str] = None
    total_time_minutes: Optional[float] = None
    prep_time_minutes: Optional[float] = None
    cook_time_minutes: Optional[float] = None
    dietary_restrictions: List[str] = []
    created_at: Optional[datetime] = None
    is_published: bool = True

    @model_validator(mode="before")
    @classmethod
    def _flatten_joined_names(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for joined, flat in (("cuisine", "cuisine_name"), ("category", "category_name")):
            value = data.get(joined)
            if flat not in data and isinstance(value, dict):
                data[flat] = value.get("name")
        return data

    @field_validator("ingredients", "dietary_restrictions", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (set, tuple)):
            return list(value)
        return value

    @field_validator("title", "description", mode="before")
    @classmethod
    def _none_to_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def total_time(self) -> Optional[float]:
        """total_time_minutes, else prep + cook when both are known."""
        if self.total_time_minutes is not None:
            return self.total_time_minutes
        if self.prep_time_minutes is not None and self.cook_time_minutes is not None:
            return self.prep_time_minutes + self.cook_time_minutes
        return None


def ensure_recipes(
    recipes: List[Union[Dict[str, Any], "RecipeAttributes"]],
) -> List["RecipeAttributes"]:
    """Convert list of dicts or RecipeAttributes to models for the pipeline."""
    return [
        RecipeAttributes.model_validate(r) if isinstance(r, dict) else r
        for r in recipes
    ]
