"""Household Routes — REST surface of the Household aggregate.

Invariants:
    - Responses serialize camelCase (response_model + alias generator)
    - PUT takes the id from the path; a body id is overwritten
    - DELETE cascades synchronously and returns 204 with no body
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from foodlist.infrastructure.database import get_db
from foodlist.schemas.household import HouseholdCreate, HouseholdResponse, HouseholdUpdate
from foodlist.services.household_service import HouseholdService

router = APIRouter(prefix="/api/v1/households", tags=["households"])


def get_household_service(db: AsyncSession = Depends(get_db)) -> HouseholdService:
    return HouseholdService(db)


@router.get("", response_model=list[HouseholdResponse])
async def list_households(service: HouseholdService = Depends(get_household_service)):
    return await service.get_all()


@router.get("/{household_id}", response_model=HouseholdResponse)
async def get_household(
    household_id: int, service: HouseholdService = Depends(get_household_service),
):
    return await service.get_by_id(household_id)


@router.post(
    "", response_model=HouseholdResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_household(
    body: HouseholdCreate, service: HouseholdService = Depends(get_household_service),
):
    """Create a household, optionally adopting existing users and lists."""
    return await service.add(body)


@router.put("/{household_id}", response_model=HouseholdResponse)
async def update_household(
    household_id: int, body: HouseholdUpdate,
    service: HouseholdService = Depends(get_household_service),
):
    body.id = household_id
    return await service.update(body)


@router.delete("/{household_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_household(
    household_id: int, service: HouseholdService = Depends(get_household_service),
):
    """Delete a household with its lists, their items, and its users."""
    await service.delete_by_id(household_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
