"""
Account aggregate: an account and the beneficiaries that share its rewards.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Mapping

from rewards.domain.money import ZERO, Number, to_money, to_percentage
from rewards.exceptions import InvalidAllocation

# Allocation percentages of an account must sum to 1 within this tolerance
ALLOCATION_TOLERANCE = Decimal("0.0001")


@dataclass
class Beneficiary:
    """
    A named party entitled to a share of an account's rewards.

    Attributes:
        name: Unique within the owning account
        allocation_percentage: Fraction of every reward, 0 < p <= 1
        savings: Cumulative rewards credited so far
    """

    name: str
    allocation_percentage: Decimal
    savings: Decimal = ZERO

    def __post_init__(self):
        self.allocation_percentage = to_percentage(self.allocation_percentage)
        self.savings = to_money(self.savings)
        if not (0 < self.allocation_percentage <= 1):
            raise InvalidAllocation(
                f"Beneficiary '{self.name}' has allocation "
                f"{self.allocation_percentage}, expected 0 < p <= 1"
            )

    def credit(self, amount: Number) -> None:
        amount = to_money(amount)
        if amount < 0:
            raise ValueError(f"Cannot credit a negative amount ({amount})")
        self.savings += amount


@dataclass
class Account:
    """
    A member account in the reward network.

    Beneficiary order is significant: it is the stable order used when a
    reward is split, and the last beneficiary absorbs rounding residue.

    Attributes:
        number: Unique account number
        name: Owning entity name
        beneficiaries: Ordered beneficiaries
        credit_card_numbers: Cards whose dinings are rewarded to this account
        version: Optimistic concurrency token, bumped on every save
    """

    number: str
    name: str
    beneficiaries: List[Beneficiary] = field(default_factory=list)
    credit_card_numbers: List[str] = field(default_factory=list)
    version: int = 0

    def __post_init__(self):
        names = [b.name for b in self.beneficiaries]
        if len(names) != len(set(names)):
            raise InvalidAllocation(
                f"Account '{self.number}' has duplicate beneficiary names"
            )

    @property
    def allocation_total(self) -> Decimal:
        return sum((b.allocation_percentage for b in self.beneficiaries), Decimal("0"))

    @property
    def is_valid(self) -> bool:
        """True when the account has beneficiaries whose shares sum to 100%."""
        return bool(self.beneficiaries) and (
            abs(self.allocation_total - 1) <= ALLOCATION_TOLERANCE
        )

    def validate_allocations(self) -> None:
        """
        Check the beneficiary allocation invariant.

        Raises:
            InvalidAllocation: If there are no beneficiaries or the
                percentages do not add up to 100%
        """
        if not self.beneficiaries:
            raise InvalidAllocation(f"Account '{self.number}' has no beneficiaries")
        if not self.is_valid:
            raise InvalidAllocation(
                f"Account '{self.number}' allocations sum to "
                f"{self.allocation_total}, expected 1"
            )

    def get_beneficiary(self, name: str) -> Beneficiary:
        for beneficiary in self.beneficiaries:
            if beneficiary.name == name:
                return beneficiary
        raise KeyError(name)

    def add_beneficiary(self, name: str, allocation_percentage: Number) -> Beneficiary:
        if any(b.name == name for b in self.beneficiaries):
            raise InvalidAllocation(
                f"Account '{self.number}' already has a beneficiary named '{name}'"
            )
        beneficiary = Beneficiary(name=name, allocation_percentage=allocation_percentage)
        self.beneficiaries.append(beneficiary)
        return beneficiary

    def credit(self, allocations: Mapping[str, Decimal]) -> None:
        """
        Add each allocated share to the matching beneficiary's savings.

        All names are resolved before anything is credited, so an unknown
        name leaves the account untouched.
        """
        targets: Dict[str, Beneficiary] = {
            name: self.get_beneficiary(name) for name in allocations
        }
        for name, amount in allocations.items():
            targets[name].credit(amount)
