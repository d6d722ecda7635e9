"""
Reward request and response schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from rewards.domain.dining import Dining


class DiningRequest(BaseModel):
    """
    Request schema for rewarding a dining.

    Attributes:
        amount: Dining amount, positive, at most two decimal places
        credit_card_number: Card used to pay
        merchant_number: Restaurant merchant number
        transaction_id: Unique transaction id (retries must reuse it)
        date: When the dining happened (defaults to now)
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "amount": "100.00",
                "credit_card_number": "1234123412341234",
                "merchant_number": "1234567890",
                "transaction_id": "tx-20261019-0001",
                "date": "2026-10-19T19:30:00Z",
            }
        }
    )

    amount: Decimal = Field(..., gt=0, decimal_places=2, description="Dining amount")
    credit_card_number: str = Field(..., min_length=1, max_length=32)
    merchant_number: str = Field(..., min_length=1, max_length=32)
    transaction_id: str = Field(..., min_length=1, max_length=64)
    date: Optional[datetime] = Field(default=None, description="Dining time (ISO 8601)")

    def to_dining(self) -> Dining:
        extra = {"date": self.date} if self.date is not None else {}
        return Dining(
            amount=self.amount,
            credit_card_number=self.credit_card_number,
            merchant_number=self.merchant_number,
            transaction_id=self.transaction_id,
            **extra,
        )


class RewardConfirmationResponse(BaseModel):
    """
    Response schema for a reward confirmation.

    Monetary values are serialized as decimal strings.
    """
    model_config = ConfigDict(from_attributes=True)

    confirmation_number: str
    transaction_id: str
    account_number: str
    amount: Decimal
    allocations: Dict[str, Decimal]
    merchant_number: str
    dining_amount: Decimal
    dining_date: datetime
    created_at: datetime
