"""
Service and service type endpoints for API v1.

Both catalogs expose the same CRUD routes, so the routers are built by
``build_catalog_router`` from the matching ``CatalogService``
subclass.  The routers are mounted under ``/services`` and
``/service-types``.
"""

from typing import List, Type

from fastapi import APIRouter, status

from cable_network_api.app.schemas.catalog import (
    CatalogItemCreate,
    CatalogItemRead,
    CatalogItemUpdate,
)
from cable_network_api.app.services.catalog_service import (
    CatalogService,
    ServiceCatalog,
    ServiceTypeCatalog,
)


def build_catalog_router(catalog: Type[CatalogService]) -> APIRouter:
    router = APIRouter()
    read_model = catalog.read_model

    @router.get("", response_model=List[read_model])
    async def list_items() -> List[CatalogItemRead]:
        return await catalog.list_all()

    @router.get("/{item_id}", response_model=read_model)
    async def get_item(item_id: int) -> CatalogItemRead:
        return await catalog.get(item_id)

    @router.post("", response_model=read_model, status_code=status.HTTP_201_CREATED)
    async def create_item(payload: CatalogItemCreate) -> CatalogItemRead:
        return await catalog.create(payload)

    @router.put("/{item_id}", response_model=read_model)
    async def update_item(item_id: int, payload: CatalogItemUpdate) -> CatalogItemRead:
        return await catalog.update(item_id, payload)

    @router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_item(item_id: int) -> None:
        await catalog.delete(item_id)

    return router


services_router = build_catalog_router(ServiceCatalog)
service_types_router = build_catalog_router(ServiceTypeCatalog)
