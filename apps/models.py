"""
Model registration: import every table model here so it is part of SQLModel.metadata
(used by DB_CREATE_TABLES on startup and by the test fixtures).
"""
from apps.catalog.models import Product, Category

__all__ = ["Product", "Category"]
