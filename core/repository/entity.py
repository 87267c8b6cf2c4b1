"""Base class for entity shapes persisted by the repositories."""

from typing import Optional
from sqlalchemy.orm import declared_attr
from sqlmodel import SQLModel, Field
from .mapping import derive_table_name


class Entity(SQLModel):
    """Integer identifier plus the naming rule shared by every entity table.

    Subclass with ``table=True``; the table is named after the class plus "s".
    """

    @declared_attr
    def __tablename__(cls) -> str:
        return derive_table_name(cls)

    id: Optional[int] = Field(default=None, primary_key=True)
