"""
Dining transactions, the input of the reward pipeline.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from rewards.domain.money import to_money


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Dining:
    """
    A completed purchase at a participating restaurant.

    Attributes:
        amount: Positive amount, rounded to the minor unit
        merchant_number: Restaurant where the dining took place
        credit_card_number: Card used; identifies the account
        transaction_id: Unique id, used to make rewarding idempotent
        date: When the dining happened
    """

    amount: Decimal
    merchant_number: str
    credit_card_number: str
    transaction_id: str
    date: datetime = field(default_factory=_utc_now)

    def __post_init__(self):
        object.__setattr__(self, "amount", to_money(self.amount))
        if self.amount <= 0:
            raise ValueError(f"Dining amount must be positive, got {self.amount}")
        if not self.transaction_id:
            raise ValueError("Dining transaction_id is required")
