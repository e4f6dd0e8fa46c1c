"""Item Routes — REST surface of the Item aggregate."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from foodlist.infrastructure.database import get_db
from foodlist.schemas.item import ItemCreate, ItemDisplay, ItemResponse, ItemUpdate
from foodlist.services.item_service import ItemService

router = APIRouter(prefix="/api/v1/items", tags=["items"])


def get_item_service(db: AsyncSession = Depends(get_db)) -> ItemService:
    return ItemService(db)


@router.get("", response_model=list[ItemDisplay])
async def list_items(service: ItemService = Depends(get_item_service)):
    return await service.get_all()


@router.get("/{item_id}", response_model=ItemDisplay)
async def get_item(item_id: int, service: ItemService = Depends(get_item_service)):
    return await service.get_by_id(item_id)


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(body: ItemCreate, service: ItemService = Depends(get_item_service)):
    return await service.add(body)


@router.put("/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: int, body: ItemUpdate, service: ItemService = Depends(get_item_service),
):
    body.id = item_id
    return await service.update(body)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(item_id: int, service: ItemService = Depends(get_item_service)):
    await service.delete_by_id(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
