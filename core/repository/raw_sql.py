"""
Raw SQL repository: parameterized statements on a direct connection, rows mapped
back to entities through the shape's field descriptors.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Type

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from core.exceptions.handler import InvalidEntityError, StorageError
from .base import IRepository, T
from .mapping import mapping_for
from .statements import build_statements


class RawSqlRepository(IRepository[T]):
    """Generic repository that writes its own SQL; one connection per operation."""

    def __init__(self, engine: AsyncEngine, model: Type[T], table_name: Optional[str] = None):
        self.engine = engine
        self.model = model
        self.mapping = mapping_for(model, table_name)
        self.statements = build_statements(self.mapping, engine.dialect)

    @asynccontextmanager
    async def _connection(self, write: bool = False) -> AsyncIterator[AsyncConnection]:
        """Open a connection for one operation; writes commit on success and roll back on error."""
        try:
            if write:
                async with self.engine.begin() as conn:
                    yield conn
            else:
                async with self.engine.connect() as conn:
                    yield conn
        except SQLAlchemyError as e:
            logger.error(f"{self.mapping.table_name}: statement failed: {e}")
            raise StorageError(f"Storage operation on '{self.mapping.table_name}' failed") from e

    def _materialize(self, row) -> T:
        try:
            return self.mapping.materialize(row._mapping)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Cannot map row of '{self.mapping.table_name}' to {self.model.__name__}") from e

    async def list_all(self) -> List[T]:
        async with self._connection() as conn:
            logger.debug("Executing: {}", self.statements.select_all)
            result = await conn.execute(self.statements.select_all)
            return [self._materialize(row) for row in result]

    async def get_by_id(self, id: int) -> Optional[T]:
        async with self._connection() as conn:
            logger.debug("Executing: {}", self.statements.select_by_id)
            result = await conn.execute(
                self.statements.select_by_id, {self.mapping.identifier.name: id}
            )
            row = result.first()
            return self._materialize(row) if row is not None else None

    async def add(self, entity: T) -> None:
        # The identifier column is never part of the insert; the store assigns it
        async with self._connection(write=True) as conn:
            logger.debug("Executing: {}", self.statements.insert)
            result = await conn.execute(self.statements.insert, self.mapping.values(entity))
            new_id = result.lastrowid
        if new_id:
            self.mapping.identifier.set(entity, new_id)

    async def update(self, entity: T) -> None:
        id_value = self.mapping.identity_of(entity)
        if id_value is None:
            raise InvalidEntityError(f"{self.model.__name__} must have an id to be updated")
        if self.statements.update is None:
            return

        params = self.mapping.values(entity)
        params[self.mapping.identifier.name] = id_value
        async with self._connection(write=True) as conn:
            logger.debug("Executing: {}", self.statements.update)
            result = await conn.execute(self.statements.update, params)
            if result.rowcount == 0:
                logger.debug(f"{self.mapping.table_name}: no row with id={id_value}, nothing updated")

    async def delete(self, id: int) -> None:
        async with self._connection(write=True) as conn:
            logger.debug("Executing: {}", self.statements.delete)
            await conn.execute(self.statements.delete, {self.mapping.identifier.name: id})
