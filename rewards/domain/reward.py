"""
Reward confirmations: the durable record of a rewarded dining.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Mapping

from rewards.domain.dining import Dining
from rewards.domain.money import to_money


@dataclass(frozen=True)
class RewardConfirmation:
    """
    Proof that a dining produced a reward. Created once, never mutated.

    Attributes:
        confirmation_number: Generated identifier
        transaction_id: The rewarded dining, at most one confirmation each
        account_number: Account that was credited
        amount: Total reward
        allocations: Beneficiary name to share, in split order
        merchant_number: Restaurant of the dining
        dining_amount: Amount of the dining
        dining_date: When the dining happened
        created_at: When the reward was computed
    """

    confirmation_number: str
    transaction_id: str
    account_number: str
    amount: Decimal
    allocations: Dict[str, Decimal]
    merchant_number: str
    dining_amount: Decimal
    dining_date: datetime
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def for_dining(
        cls,
        dining: Dining,
        account_number: str,
        amount: Decimal,
        allocations: Mapping[str, Decimal],
    ) -> "RewardConfirmation":
        return cls(
            confirmation_number=str(uuid.uuid4()),
            transaction_id=dining.transaction_id,
            account_number=account_number,
            amount=to_money(amount),
            allocations={name: to_money(share) for name, share in allocations.items()},
            merchant_number=dining.merchant_number,
            dining_amount=dining.amount,
            dining_date=dining.date,
        )
