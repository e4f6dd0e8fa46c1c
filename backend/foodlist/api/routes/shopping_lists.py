"""ShoppingList Routes — REST surface of the ShoppingList aggregate.

Invariants:
    - Reads embed the list's items (flat records) and the household name
    - DELETE removes the list's items in the same transaction
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from foodlist.infrastructure.database import get_db
from foodlist.schemas.shopping_list import (
    ShoppingListCreate, ShoppingListDisplay, ShoppingListResponse, ShoppingListUpdate,
)
from foodlist.services.shopping_list_service import ShoppingListService

router = APIRouter(prefix="/api/v1/shoppinglists", tags=["shoppinglists"])


def get_shopping_list_service(db: AsyncSession = Depends(get_db)) -> ShoppingListService:
    return ShoppingListService(db)


@router.get("", response_model=list[ShoppingListDisplay])
async def list_shopping_lists(
    service: ShoppingListService = Depends(get_shopping_list_service),
):
    return await service.get_all()


@router.get("/{shopping_list_id}", response_model=ShoppingListDisplay)
async def get_shopping_list(
    shopping_list_id: int,
    service: ShoppingListService = Depends(get_shopping_list_service),
):
    return await service.get_by_id(shopping_list_id)


@router.post(
    "", response_model=ShoppingListResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_shopping_list(
    body: ShoppingListCreate,
    service: ShoppingListService = Depends(get_shopping_list_service),
):
    return await service.add(body)


@router.put("/{shopping_list_id}", response_model=ShoppingListResponse)
async def update_shopping_list(
    shopping_list_id: int, body: ShoppingListUpdate,
    service: ShoppingListService = Depends(get_shopping_list_service),
):
    body.id = shopping_list_id
    return await service.update(body)


@router.delete("/{shopping_list_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shopping_list(
    shopping_list_id: int,
    service: ShoppingListService = Depends(get_shopping_list_service),
):
    await service.delete_by_id(shopping_list_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
