"""
Reward endpoints.

Thin adapter over the reward network: converts requests into ``Dining``
objects and confirmations into responses. Errors are rendered by the
handlers in ``rewards.api.errors``.
"""

from fastapi import APIRouter, status

from rewards.api.dependencies import RewardNetworkDep
from rewards.schemas.error import ErrorResponse
from rewards.schemas.reward import DiningRequest, RewardConfirmationResponse

router = APIRouter(tags=["rewards"])


@router.post(
    "/rewards",
    response_model=RewardConfirmationResponse,
    status_code=status.HTTP_200_OK,
    summary="Reward a dining",
    description=(
        "Computes the reward for a dining, credits the account's beneficiaries "
        "and returns the confirmation. Idempotent per transaction_id."
    ),
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def reward_dining(
    request: DiningRequest,
    reward_network: RewardNetworkDep,
) -> RewardConfirmationResponse:
    confirmation = await reward_network.reward(request.to_dining())
    return RewardConfirmationResponse.model_validate(confirmation)


@router.get(
    "/rewards/{transaction_id}",
    response_model=RewardConfirmationResponse,
    summary="Get the reward confirmation of a transaction",
    responses={404: {"model": ErrorResponse}},
)
async def get_reward(
    transaction_id: str,
    reward_network: RewardNetworkDep,
) -> RewardConfirmationResponse:
    confirmation = await reward_network.find_confirmation(transaction_id)
    return RewardConfirmationResponse.model_validate(confirmation)
