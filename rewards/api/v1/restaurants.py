"""
Restaurant endpoints.
"""

from fastapi import APIRouter

from rewards.api.dependencies import UnitOfWorkFactoryDep
from rewards.exceptions import RestaurantNotFound
from rewards.schemas.error import ErrorResponse
from rewards.schemas.restaurant import RestaurantResponse

router = APIRouter(tags=["restaurants"])


@router.get(
    "/restaurants/{merchant_number}",
    response_model=RestaurantResponse,
    summary="Get a restaurant's benefit terms",
    responses={404: {"model": ErrorResponse}},
)
async def get_restaurant(merchant_number: str, uow_factory: UnitOfWorkFactoryDep) -> RestaurantResponse:
    async with uow_factory() as uow:
        restaurant = await uow.restaurants.find_by_merchant_number(merchant_number)
    if restaurant is None:
        raise RestaurantNotFound(merchant_number)
    return RestaurantResponse.model_validate(restaurant)
