"""
Account response schemas.
"""

from decimal import Decimal
from typing import List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class BeneficiaryResponse(BaseModel):
    """
    Beneficiary of an account.

    Attributes:
        name: Beneficiary name
        allocation_percentage: Fraction of each reward (0.5 = 50%)
        savings: Cumulative rewards credited
    """
    model_config = ConfigDict(from_attributes=True)

    name: str
    allocation_percentage: Decimal
    savings: Decimal


class AccountSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    number: str
    name: str


class AccountResponse(BaseModel):
    """
    Account with its beneficiaries.

    Credit card numbers are deliberately not exposed.
    """
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "number": "123456789",
                "name": "Keith and Keri Donald",
                "valid": True,
                "beneficiaries": [
                    {"name": "Annabelle", "allocation_percentage": "0.5", "savings": "4.00"},
                    {"name": "Corgan", "allocation_percentage": "0.5", "savings": "4.00"},
                ],
            }
        },
    )

    number: str
    name: str
    valid: bool = Field(
        ...,
        validation_alias=AliasChoices("is_valid", "valid"),
        description="Allocations sum to 100%",
    )
    beneficiaries: List[BeneficiaryResponse]
