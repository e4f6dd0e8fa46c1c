"""User Routes — REST surface of the User aggregate.

Invariants:
    - Reads return the display view (householdName); writes return the plain record
    - No response ever carries a password or its hash
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from foodlist.infrastructure.database import get_db
from foodlist.schemas.user import UserCreate, UserDisplay, UserResponse, UserUpdate
from foodlist.services.user_service import UserService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


@router.get("", response_model=list[UserDisplay])
async def list_users(service: UserService = Depends(get_user_service)):
    return await service.get_all()


@router.get("/{user_id}", response_model=UserDisplay)
async def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    return await service.get_by_id(user_id)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(body: UserCreate, service: UserService = Depends(get_user_service)):
    return await service.add(body)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int, body: UserUpdate, service: UserService = Depends(get_user_service),
):
    body.id = user_id
    return await service.update(body)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    """Delete a user; items they added stay, without an adder."""
    await service.delete_by_id(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
