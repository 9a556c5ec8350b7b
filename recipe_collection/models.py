# models.py
# Defines the SQLAlchemy ORM models for the database tables.

import uuid
from sqlalchemy import (
    Boolean, Column, ForeignKey, Integer, String, Text, Enum, DateTime, Index, func
)
from sqlalchemy.orm import relationship
from sqlalchemy.types import Uuid
from recipe_collection.db.session import Base
import enum


class RecipeCategory(str, enum.Enum):
    APPETIZER = "Appetizer"
    MAIN_COURSE = "Main Course"
    DESSERT = "Dessert"
    BEVERAGE = "Beverage"
    SNACK = "Snack"


class User(Base):
    """
    User model for the 'users' table.
    """
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    is_active = Column(Boolean, default=True)

    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)

    recipes = relationship("Recipe", back_populates="owner", cascade="all, delete-orphan")


class Recipe(Base):
    """
    Recipe model for the 'recipes' table.
    """
    __tablename__ = "recipes"
    __table_args__ = (
        Index("ix_recipes_owner_favorite", "owner_id", "is_favorite"),
        Index("ix_recipes_owner_rating", "owner_id", "rating"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)

    name = Column(String, index=True, nullable=False)
    instructions = Column(Text, nullable=False)
    prep_time_minutes = Column(Integer, nullable=False, default=0)
    category = Column(
        Enum(RecipeCategory, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=RecipeCategory.MAIN_COURSE,
        index=True,
    )
    servings = Column(Integer, nullable=True)

    # Personal flags
    rating = Column(Integer, nullable=True)
    is_favorite = Column(Boolean, nullable=False, default=False)
    is_public = Column(Boolean, nullable=False, default=False)

    owner_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)

    # Audit
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    owner = relationship("User", back_populates="recipes")

    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.position",
    )


class RecipeIngredient(Base):
    """
    A single ingredient line of a recipe. Amount is kept as entered.
    """
    __tablename__ = "recipe_ingredients"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    recipe_id = Column(Uuid(as_uuid=True), ForeignKey("recipes.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    name = Column(String, nullable=False)
    amount = Column(String, nullable=False, default="")
    unit = Column(String, nullable=False, default="cups")

    recipe = relationship("Recipe", back_populates="ingredients")
