from sqlmodel import SQLModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession


class SQLDriver:
    """Owns the async engine and the session factory for one database."""

    def __init__(self, url: str, echo: bool = False, **engine_options):
        if not url:
            raise ValueError("Database connection string must not be empty")
        self.url = url
        self.engine = create_async_engine(url, echo=echo, future=True, **engine_options)
        self.session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    async def connect(self):
        """Check connectivity (the engine manages the pool itself)."""
        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))

    async def disconnect(self):
        """Dispose the engine and its pooled connections."""
        await self.engine.dispose()

    async def create_all(self):
        """Create tables for every registered table model."""
        import apps.models  # noqa: F401
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def drop_all(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)
