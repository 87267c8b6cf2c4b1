from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from loguru import logger
from core.config import Settings, settings
from core.database.manager import DatabaseManager
from core.middleware.logging_md import LoggingMiddleware
from core.logging.logger import LogConfig
from core.exceptions.handler import BusinessException, RepositoryError, global_exception_handler
from core.repository.factory import RepositoryFactory
from apps.catalog.api.router import product_router, category_router


def create_app(app_settings: Settings = settings) -> FastAPI:
    manager = DatabaseManager.get_instance(app_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app_settings.DB_CREATE_TABLES:
            await manager.db.create_all()
            logger.info("Database tables created")
        yield
        await DatabaseManager.shutdown()

    docs = app_settings.DOCS_ENABLED
    app = FastAPI(
        title=app_settings.APP_NAME,
        description=app_settings.APP_DESCRIPTION,
        version=app_settings.APP_VERSION,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        openapi_url="/openapi.json" if docs else None,
        lifespan=lifespan,
    )

    # Initialize logging configuration
    LogConfig.setup_logging()

    # Repository implementation is chosen once here and injected through dependencies
    app.state.repository_factory = RepositoryFactory.from_settings(app_settings, manager.db)

    # Register global exception handlers
    app.add_exception_handler(BusinessException, global_exception_handler)
    app.add_exception_handler(RepositoryError, global_exception_handler)
    app.add_exception_handler(RequestValidationError, global_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.add_middleware(LoggingMiddleware)

    # Mount routers (prefix from config)
    app.include_router(
        product_router,
        prefix=app_settings.API_V1_PRODUCTS_PREFIX,
        tags=["Products"]
    )
    app.include_router(
        category_router,
        prefix=app_settings.API_V1_CATEGORIES_PREFIX,
        tags=["Categories"]
    )
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
