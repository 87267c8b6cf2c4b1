from typing import Callable, Type
from fastapi import APIRouter, Depends, Request
from sqlmodel import SQLModel
from core.exceptions.handler import BusinessException
from core.repository.base import IRepository
from core.repository.factory import RepositoryFactory
from core.response import ResponseModel
from ..models import Product, ProductBase, Category, CategoryBase


def get_repository_factory(request: Request) -> RepositoryFactory:
    """Dependency: repository factory built at startup (see main.create_app)."""
    return request.app.state.repository_factory


def repository_dependency(model: Type[SQLModel]) -> Callable[..., IRepository]:
    def _get_repository(factory: RepositoryFactory = Depends(get_repository_factory)) -> IRepository:
        return factory.create(model)
    return _get_repository


get_product_repository = repository_dependency(Product)
get_category_repository = repository_dependency(Category)


def build_crud_router(
    model: Type[SQLModel],
    payload_schema: Type[SQLModel],
    get_repository: Callable[..., IRepository],
) -> APIRouter:
    """List/get/create/update/delete endpoints for one entity shape."""
    router = APIRouter()
    label = model.__name__

    @router.get("")
    async def list_entities(repo: IRepository = Depends(get_repository)):
        entities = await repo.list_all()
        return ResponseModel.success(data=[e.model_dump() for e in entities])

    @router.get("/{id}")
    async def get_entity(id: int, repo: IRepository = Depends(get_repository)):
        entity = await repo.get_by_id(id)
        if entity is None:
            raise BusinessException(f"{label} not found", status_code=404, code=404)
        return ResponseModel.success(data=entity.model_dump())

    @router.post("")
    async def create_entity(payload: payload_schema, repo: IRepository = Depends(get_repository)):
        entity = model(**payload.model_dump())
        await repo.add(entity)
        return ResponseModel.success(data=entity.model_dump(), message="created")

    @router.put("/{id}")
    async def update_entity(id: int, payload: payload_schema, repo: IRepository = Depends(get_repository)):
        entity = model(id=id, **payload.model_dump())
        await repo.update(entity)
        return ResponseModel.success(data=entity.model_dump())

    @router.delete("/{id}")
    async def delete_entity(id: int, repo: IRepository = Depends(get_repository)):
        await repo.delete(id)
        return ResponseModel.success(data={"id": id})

    return router


product_router = build_crud_router(Product, ProductBase, get_product_repository)
category_router = build_crud_router(Category, CategoryBase, get_category_repository)
