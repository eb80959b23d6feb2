from typing import Optional, Type

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from tracker.api.deps import get_gateway
from tracker.schemas.common import SuccessResponse
from tracker.services.gateway import OwnedResourceGateway
from tracker.services.resources import ResourceConfig


def build_resource_router(
    resource: ResourceConfig,
    out_schema: Type[BaseModel],
    create_schema: Type[BaseModel],
    update_schema: Optional[Type[BaseModel]] = None,
) -> APIRouter:
    """List/create/get/update/delete routes for one owned entity type."""
    router = APIRouter()

    @router.get("", response_model=list[out_schema], name=f"list_{resource.key}")
    def list_items(gateway: OwnedResourceGateway = Depends(get_gateway)):
        return gateway.list(resource)

    @router.post("", response_model=out_schema, name=f"create_{resource.key}")
    def create_item(payload: create_schema, gateway: OwnedResourceGateway = Depends(get_gateway)):
        return gateway.create(resource, payload.model_dump())

    @router.get("/{entity_id}", response_model=out_schema, name=f"get_{resource.key}")
    def get_item(entity_id: str, gateway: OwnedResourceGateway = Depends(get_gateway)):
        return gateway.get(resource, entity_id)

    if update_schema is not None:

        @router.patch("/{entity_id}", response_model=out_schema, name=f"update_{resource.key}")
        def update_item(
            entity_id: str,
            payload: update_schema,
            gateway: OwnedResourceGateway = Depends(get_gateway),
        ):
            return gateway.update(resource, entity_id, payload.model_dump(exclude_unset=True))

    @router.delete("/{entity_id}", response_model=SuccessResponse, name=f"delete_{resource.key}")
    def delete_item(entity_id: str, gateway: OwnedResourceGateway = Depends(get_gateway)) -> SuccessResponse:
        gateway.delete(resource, entity_id)
        return SuccessResponse()

    return router
