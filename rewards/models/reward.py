"""
Reward confirmation tables.
"""

from sqlalchemy import Column, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from rewards.models.base import Base, DecimalString, ModelMixin, UUIDMixin, utc_now_iso


class RewardRecord(Base, UUIDMixin, ModelMixin):
    """
    Reward confirmation. Append-only.

    The primary key is the confirmation number.

    Attributes:
        transaction_id: Rewarded dining (unique: one reward per dining)
        account_number: Credited account
        amount: Total reward
        merchant_number: Restaurant of the dining
        dining_amount: Amount of the dining
        dining_date: ISO timestamp of the dining
        created_at: ISO timestamp of the reward
        allocations: Per-beneficiary shares in split order
    """

    __tablename__ = "rewards"

    transaction_id = Column(String(64), nullable=False, unique=True)

    account_number = Column(String(32), nullable=False)

    amount = Column(DecimalString, nullable=False)

    merchant_number = Column(String(32), nullable=False)

    dining_amount = Column(DecimalString, nullable=False)

    dining_date = Column(String, nullable=False)

    created_at = Column(String, nullable=False, default=utc_now_iso)

    allocations = relationship(
        "RewardAllocationRecord",
        back_populates="reward",
        cascade="all, delete-orphan",
        order_by="RewardAllocationRecord.position",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_reward_account", "account_number"),
    )


class RewardAllocationRecord(Base, UUIDMixin, ModelMixin):
    """
    One beneficiary's share of a reward.
    """

    __tablename__ = "reward_allocations"

    reward_id = Column(
        String,
        ForeignKey("rewards.id", ondelete="CASCADE"),
        nullable=False,
    )

    position = Column(Integer, nullable=False)

    beneficiary_name = Column(String(255), nullable=False)

    amount = Column(DecimalString, nullable=False)

    reward = relationship("RewardRecord", back_populates="allocations")
