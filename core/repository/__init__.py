"""
Repository pattern: one five-operation interface, ORM-backed and raw SQL implementations.
"""

from .base import IRepository
from .entity import Entity
from .factory import RepositoryFactory
from .mapping import EntityMapping, FieldDescriptor, derive_table_name, mapping_for
from .orm import OrmRepository
from .raw_sql import RawSqlRepository

__all__ = [
    "IRepository",
    "Entity",
    "RepositoryFactory",
    "EntityMapping",
    "FieldDescriptor",
    "derive_table_name",
    "mapping_for",
    "OrmRepository",
    "RawSqlRepository",
]
