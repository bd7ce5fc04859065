"""
Input validation schemas using Pydantic for request bodies.
"""
from datetime import date
from typing import List

from pydantic import BaseModel, Field, field_validator


class BatchInput(BaseModel):
    """Schema for a new batch."""
    amount: float = Field(..., gt=0)
    unit_price: float = Field(0, ge=0)
    expiration_date: date


class ItemInput(BaseModel):
    """Schema for a new inventory item with its first batch."""
    name: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1, max_length=50)
    unit: str = Field(..., min_length=1, max_length=20)
    batch: BatchInput

    @field_validator('name', 'category', 'unit')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace and reject blank values."""
        v = v.strip()
        if not v:
            raise ValueError('Value cannot be blank')
        return v


class ConsumeInput(BaseModel):
    """Schema for consuming part of an item."""
    amount: float = Field(..., gt=0)


class IngredientInput(BaseModel):
    """Schema for ingredient input validation."""
    name: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1, max_length=50)
    unit: str = Field(..., min_length=1, max_length=20)
    amount: float = Field(..., gt=0)

    @field_validator('name', 'category', 'unit')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        return v.strip()


class RecipeInput(BaseModel):
    """Schema for recipe input validation."""
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    instructions: str = Field(..., min_length=1)
    servings: int = Field(..., ge=1, le=100)
    ingredients: List[IngredientInput] = Field(default_factory=list)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate recipe name."""
        if not v.strip():
            raise ValueError('Recipe name cannot be empty')
        return v.strip()
