"""
ORM-backed repository: delegates to a SQLModel session opened per operation.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, List, Optional, Type

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from core.exceptions.handler import InvalidEntityError, StorageError
from .base import IRepository, T
from .mapping import mapping_for


class OrmRepository(IRepository[T]):
    """Generic repository implementation on SQLModel; the session generates the SQL."""

    def __init__(self, session_factory: Callable[[], AsyncSession], model: Type[T]):
        """Initialize repository with a session factory and model."""
        self.session_factory = session_factory
        self.model = model
        self.mapping = mapping_for(model)

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self.session_factory() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error(f"{self.mapping.table_name}: session operation failed: {e}")
            raise StorageError(f"Storage operation on '{self.mapping.table_name}' failed") from e

    async def list_all(self) -> List[T]:
        async with self._session() as session:
            result = await session.exec(select(self.model))
            return list(result.all())

    async def get_by_id(self, id: int) -> Optional[T]:
        async with self._session() as session:
            return await session.get(self.model, id)

    async def add(self, entity: T) -> None:
        """Insert entity as a new row; a caller-supplied ID is ignored and the store assigns one.

        A fresh instance is inserted so entities loaded earlier (or added before) are never
        treated as existing rows. The caller's ``id`` is only set once the commit succeeded.
        """
        row = self.model(**self.mapping.values(entity))
        async with self._session() as session:
            session.add(row)
            await session.commit()
            await session.refresh(row)
        self.mapping.identifier.set(entity, self.mapping.identity_of(row))

    async def update(self, entity: T) -> None:
        id_value = self.mapping.identity_of(entity)
        if id_value is None:
            raise InvalidEntityError(f"{self.model.__name__} must have an id to be updated")

        async with self._session() as session:
            current = await session.get(self.model, id_value)
            if current is None:
                logger.debug(f"{self.mapping.table_name}: no row with id={id_value}, nothing updated")
                return
            for field in self.mapping.fields:
                field.set(current, field.get(entity))
            await session.commit()

    async def delete(self, id: int) -> None:
        async with self._session() as session:
            current = await session.get(self.model, id)
            if current is None:
                return
            await session.delete(current)
            await session.commit()
