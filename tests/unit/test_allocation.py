"""
Unit tests for the allocation splitter.

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

from decimal import Decimal

import pytest

from rewards.domain import Beneficiary
from rewards.exceptions import InvalidAllocation
from rewards.services.allocation import allocate


def beneficiaries(*shares: str):
    return [
        Beneficiary(name=f"B{index}", allocation_percentage=Decimal(share))
        for index, share in enumerate(shares)
    ]


class TestAllocate:
    """Tests for allocate()."""

    def test_even_split(self):
        """
        Arrange: Annabelle and Corgan at 50% each
        Act: Allocate $8.00
        Assert: $4.00 each
        """
        # Arrange
        people = [
            Beneficiary(name="Annabelle", allocation_percentage=Decimal("0.5")),
            Beneficiary(name="Corgan", allocation_percentage=Decimal("0.5")),
        ]

        # Act
        shares = allocate(Decimal("8.00"), people)

        # Assert
        assert shares == {"Annabelle": Decimal("4.00"), "Corgan": Decimal("4.00")}

    def test_sixty_forty_split(self):
        shares = allocate(Decimal("8.00"), beneficiaries("0.6", "0.4"))

        assert shares == {"B0": Decimal("4.80"), "B1": Decimal("3.20")}

    def test_last_beneficiary_absorbs_rounding_residue(self):
        """
        Arrange: Three beneficiaries at 33.33%, 33.33%, 33.34%
        Act: Allocate $10.00
        Assert: 3.33, 3.33, 3.34 summing to exactly 10.00
        """
        # Act
        shares = allocate(Decimal("10.00"), beneficiaries("0.3333", "0.3333", "0.3334"))

        # Assert
        assert list(shares.values()) == [Decimal("3.33"), Decimal("3.33"), Decimal("3.34")]
        assert sum(shares.values()) == Decimal("10.00")

    def test_one_cent_across_two_beneficiaries(self):
        shares = allocate(Decimal("0.01"), beneficiaries("0.5", "0.5"))

        # 0.005 rounds up for the first; the last gets what is left
        assert shares == {"B0": Decimal("0.01"), "B1": Decimal("0.00")}

    def test_leading_shares_are_capped_at_remaining(self):
        """
        Arrange: Four beneficiaries at 25%, where each 0.005 share rounds up
        Act: Allocate $0.02
        Assert: Leading shares stop at the total, the last is zero not negative
        """
        # Act
        shares = allocate(Decimal("0.02"), beneficiaries("0.25", "0.25", "0.25", "0.25"))

        # Assert
        assert list(shares.values()) == [
            Decimal("0.01"), Decimal("0.01"), Decimal("0.00"), Decimal("0.00"),
        ]
        assert sum(shares.values()) == Decimal("0.02")

    def test_order_is_preserved(self):
        people = [
            Beneficiary(name="Zed", allocation_percentage=Decimal("0.25")),
            Beneficiary(name="Amy", allocation_percentage=Decimal("0.75")),
        ]

        shares = allocate(Decimal("1.00"), people)

        assert list(shares) == ["Zed", "Amy"]

    def test_single_beneficiary_takes_everything(self):
        shares = allocate(Decimal("8.00"), beneficiaries("1"))

        assert shares == {"B0": Decimal("8.00")}

    def test_zero_total(self):
        shares = allocate(Decimal("0.00"), beneficiaries("0.5", "0.5"))

        assert shares == {"B0": Decimal("0.00"), "B1": Decimal("0.00")}

    @pytest.mark.parametrize(
        "total",
        ["0.01", "0.07", "1.99", "8.00", "13.37", "100.01", "9999.99"],
    )
    def test_shares_always_sum_to_total(self, total):
        shares = allocate(Decimal(total), beneficiaries("0.1", "0.2", "0.3", "0.4"))

        assert sum(shares.values()) == Decimal(total)
        assert all(share >= 0 for share in shares.values())


class TestAllocateRejects:
    """Invalid inputs for allocate()."""

    def test_no_beneficiaries(self):
        with pytest.raises(InvalidAllocation):
            allocate(Decimal("8.00"), [])

    def test_percentages_not_summing_to_one(self):
        with pytest.raises(InvalidAllocation, match="sum to"):
            allocate(Decimal("8.00"), beneficiaries("0.5", "0.4"))

    def test_duplicate_names(self):
        people = [
            Beneficiary(name="Annabelle", allocation_percentage=Decimal("0.5")),
            Beneficiary(name="Annabelle", allocation_percentage=Decimal("0.5")),
        ]

        with pytest.raises(InvalidAllocation, match="Duplicate"):
            allocate(Decimal("8.00"), people)

    def test_negative_total(self):
        with pytest.raises(ValueError):
            allocate(Decimal("-1.00"), beneficiaries("1"))

    def test_within_tolerance_is_accepted(self):
        shares = allocate(Decimal("9.00"), beneficiaries("0.3333", "0.3333", "0.3333"))

        assert sum(shares.values()) == Decimal("9.00")
