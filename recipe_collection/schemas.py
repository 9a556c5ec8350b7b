# schemas.py
# Defines the Pydantic models (schemas) for data validation and serialization.

from pydantic import BaseModel, EmailStr, ConfigDict, Field, field_validator
from typing import List, Optional
from uuid import UUID
from datetime import datetime
from recipe_collection.models import RecipeCategory

COMMON_UNITS = [
    "cups", "tbsp", "tsp", "oz", "lbs", "g", "kg", "ml", "l",
    "pieces", "slices", "cloves", "cans", "bottles", "packages",
]


# --- Ingredient Schemas ---
class IngredientBase(BaseModel):
    name: str
    amount: str = ""
    unit: str = "cups"

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Ingredient name must not be empty")
        return v

    @field_validator("amount", "unit")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class IngredientCreate(IngredientBase):
    pass


class Ingredient(IngredientBase):
    model_config = ConfigDict(from_attributes=True)


class ScaledIngredient(BaseModel):
    name: str
    amount: str
    unit: str
    original_amount: str
    original_unit: str


# --- User Schemas ---
class UserBase(BaseModel):
    email: EmailStr

class UserCreate(UserBase):
    password: str = Field(..., min_length=6)
    first_name: Optional[str] = None
    last_name: Optional[str] = None

class User(UserBase):
    id: UUID
    is_active: bool
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


# --- Recipe Schemas ---
class RecipeBase(BaseModel):
    name: str
    ingredients: List[IngredientCreate] = []
    instructions: str
    prep_time_minutes: int = Field(default=0, ge=0)
    category: RecipeCategory = RecipeCategory.MAIN_COURSE
    servings: Optional[int] = Field(default=None, ge=1)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Recipe name must not be empty")
        return v

    @field_validator("instructions")
    @classmethod
    def instructions_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Instructions must not be empty")
        return v


class RecipeCreate(RecipeBase):
    pass


class RecipeUpdate(RecipeBase):
    pass


class Recipe(BaseModel):
    id: UUID
    name: str
    ingredients: List[Ingredient]
    instructions: str
    prep_time_minutes: int
    category: RecipeCategory
    servings: Optional[int] = None
    rating: Optional[int] = None
    is_favorite: bool = False
    is_public: bool = False
    owner_id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PublicRecipe(BaseModel):
    """Shared view of a recipe; personal fields are left out."""
    id: UUID
    name: str
    ingredients: List[Ingredient]
    instructions: str
    prep_time_minutes: int
    category: RecipeCategory
    servings: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ScaledRecipe(BaseModel):
    id: UUID
    name: str
    factor: float
    servings: Optional[int] = None
    original_servings: Optional[int] = None
    unit_system: Optional[str] = None
    ingredients: List[ScaledIngredient]
    instructions: str


# --- Personal Flag Schemas ---
class RatingUpdate(BaseModel):
    rating: Optional[int] = Field(default=None, ge=1, le=5)


class VisibilityUpdate(BaseModel):
    is_public: bool


class ShareLink(BaseModel):
    recipe_id: UUID
    share_url: str
    is_public: bool


# --- Token Schemas ---
class Token(BaseModel):
    access_token: str
    token_type: str

class TokenData(BaseModel):
    email: Optional[str] = None
