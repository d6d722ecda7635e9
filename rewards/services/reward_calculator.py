"""
Reward calculation.

Turns a dining and the restaurant's benefit terms into a reward amount.
The result is rounded half-up to the minor unit; the allocation step splits
exactly this rounded total, so the rounding rule must not change.
"""

from decimal import Decimal

from rewards.core.logging_config import get_logger
from rewards.domain.dining import Dining
from rewards.domain.money import to_money
from rewards.domain.restaurant import Restaurant
from rewards.exceptions import PolicyViolation

logger = get_logger(__name__)


def calculate_reward(dining: Dining, restaurant: Restaurant) -> Decimal:
    """
    Compute the reward earned by a dining.

    Args:
        dining: The dining transaction (amount must be positive)
        restaurant: The restaurant identified by ``dining.merchant_number``

    Returns:
        ``dining.amount * restaurant.benefit_percentage`` rounded half-up
        to the minor unit

    Raises:
        ValueError: If the dining amount is not positive or the restaurant
            is not the one the dining took place at
        PolicyViolation: If the restaurant's policy excludes this dining

    Example:
        >>> calculate_reward(dining_of_100, restaurant_at_8_percent)
        Decimal('8.00')
    """
    if dining.amount <= 0:
        raise ValueError(f"Dining amount must be positive, got {dining.amount}")
    if restaurant.merchant_number != dining.merchant_number:
        raise ValueError(
            f"Restaurant '{restaurant.merchant_number}' does not match dining "
            f"merchant '{dining.merchant_number}'"
        )

    policy = restaurant.benefit_availability_policy
    if not policy.is_benefit_available_for(dining):
        raise PolicyViolation(
            f"Restaurant '{restaurant.merchant_number}' policy "
            f"{policy.name} excludes transaction '{dining.transaction_id}'"
        )

    reward = to_money(dining.amount * restaurant.benefit_percentage)
    logger.debug(
        f"Reward for transaction {dining.transaction_id}: "
        f"{dining.amount} x {restaurant.benefit_percentage} = {reward}"
    )
    return reward
