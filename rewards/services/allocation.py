"""
Allocation splitter.

Distributes a reward across an account's beneficiaries by percentage.
Shares are rounded independently, so the last beneficiary in account order
takes whatever is left. The shares therefore always add up to the total.
"""

from decimal import Decimal
from typing import Dict, Sequence

from rewards.domain.account import ALLOCATION_TOLERANCE, Beneficiary
from rewards.domain.money import to_money
from rewards.exceptions import InvalidAllocation


def _check_beneficiaries(beneficiaries: Sequence[Beneficiary]) -> None:
    if not beneficiaries:
        raise InvalidAllocation("Cannot allocate a reward without beneficiaries")

    seen = set()
    total = Decimal("0")
    for beneficiary in beneficiaries:
        if beneficiary.name in seen:
            raise InvalidAllocation(f"Duplicate beneficiary '{beneficiary.name}'")
        seen.add(beneficiary.name)
        if not (0 < beneficiary.allocation_percentage <= 1):
            raise InvalidAllocation(
                f"Beneficiary '{beneficiary.name}' has allocation "
                f"{beneficiary.allocation_percentage}"
            )
        total += beneficiary.allocation_percentage

    if abs(total - 1) > ALLOCATION_TOLERANCE:
        raise InvalidAllocation(f"Allocations sum to {total}, expected 1")


def allocate(total_amount: Decimal, beneficiaries: Sequence[Beneficiary]) -> Dict[str, Decimal]:
    """
    Split ``total_amount`` across beneficiaries.

    Each beneficiary but the last gets ``total * percentage`` rounded
    half-up, capped at what is still unallocated. The last gets the
    remainder.

    Args:
        total_amount: Amount to split, >= 0
        beneficiaries: Beneficiaries in their stable account order

    Returns:
        Ordered mapping of beneficiary name to share; the values sum to
        ``total_amount`` exactly

    Raises:
        ValueError: If ``total_amount`` is negative
        InvalidAllocation: If the beneficiaries are empty, duplicated or
            their percentages do not sum to 100%

    Example:
        >>> allocate(Decimal("8.00"), [a_at_60_percent, b_at_40_percent])
        {'A': Decimal('4.80'), 'B': Decimal('3.20')}
    """
    total = to_money(total_amount)
    if total < 0:
        raise ValueError(f"Cannot allocate a negative amount ({total})")
    _check_beneficiaries(beneficiaries)

    shares: Dict[str, Decimal] = {}
    remaining = total
    *leading, last = beneficiaries
    for beneficiary in leading:
        share = min(to_money(total * beneficiary.allocation_percentage), remaining)
        shares[beneficiary.name] = share
        remaining -= share

    shares[last.name] = remaining
    return shares
