from decimal import Decimal
from typing import Optional
from sqlmodel import SQLModel, Field
from core.repository.entity import Entity


class ProductBase(SQLModel):
    name: str = Field(max_length=255, description="Product name")
    price: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2, description="Unit price")


class Product(ProductBase, Entity, table=True):
    """Product (table "Products")."""


class CategoryBase(SQLModel):
    name: str = Field(max_length=255, description="Category name")
    description: Optional[str] = Field(default=None, max_length=1000)


class Category(CategoryBase, Entity, table=True):
    """Category (table "Categorys")."""
