"""
Repository factory: chooses the ORM or raw SQL implementation once, at startup.
"""

from typing import Dict, Type

from loguru import logger

from core.database.sql_driver import SQLDriver
from .base import IRepository, T
from .orm import OrmRepository
from .raw_sql import RawSqlRepository


class RepositoryFactory:
    """Creates (and caches) one stateless repository per entity shape."""

    def __init__(self, driver: SQLDriver, use_raw_sql: bool = False):
        self.driver = driver
        self.use_raw_sql = use_raw_sql
        self._repositories: Dict[type, IRepository] = {}

    @classmethod
    def from_settings(cls, settings, driver: SQLDriver) -> "RepositoryFactory":
        implementation = "raw SQL" if settings.USE_RAW_SQL else "ORM"
        logger.info(f"Repository implementation: {implementation}")
        return cls(driver, use_raw_sql=settings.USE_RAW_SQL)

    def create(self, model: Type[T]) -> IRepository[T]:
        """Get or create the repository for a model."""
        if model not in self._repositories:
            if self.use_raw_sql:
                repository = RawSqlRepository(self.driver.engine, model)
            else:
                repository = OrmRepository(self.driver.session_factory, model)
            self._repositories[model] = repository
        return self._repositories[model]
