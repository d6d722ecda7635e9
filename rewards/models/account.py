"""
Account, beneficiary and credit card tables.
"""

from sqlalchemy import Column, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from rewards.models.base import Base, DecimalString, ModelMixin, TimestampMixin, UUIDMixin


class AccountRecord(Base, UUIDMixin, TimestampMixin, ModelMixin):
    """
    Member account.

    Attributes:
        id: UUID primary key
        number: Account number (unique)
        name: Owning entity name
        version: Optimistic concurrency token, incremented on every save
        beneficiaries: Beneficiaries in split order
        credit_cards: Cards that identify the account
    """

    __tablename__ = "accounts"

    number = Column(
        String(32),
        nullable=False,
        unique=True,
        doc="Account number"
    )

    name = Column(
        String(255),
        nullable=False,
        doc="Owning entity name"
    )

    version = Column(
        Integer,
        nullable=False,
        default=0,
        doc="Optimistic concurrency token"
    )

    # Relationships are eagerly loaded; async sessions cannot lazy-load
    beneficiaries = relationship(
        "BeneficiaryRecord",
        back_populates="account",
        cascade="all, delete-orphan",
        order_by="BeneficiaryRecord.position",
        lazy="selectin",
    )

    credit_cards = relationship(
        "CreditCardRecord",
        back_populates="account",
        cascade="all, delete-orphan",
        order_by="CreditCardRecord.number",
        lazy="selectin",
    )


class BeneficiaryRecord(Base, UUIDMixin, ModelMixin):
    """
    Beneficiary of an account.

    Attributes:
        account_id: Owning account
        position: Split order within the account
        name: Unique within the account
        allocation_percentage: Fraction of each reward (0 < p <= 1)
        savings: Cumulative rewards
    """

    __tablename__ = "account_beneficiaries"

    account_id = Column(
        String,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        doc="Foreign key to AccountRecord"
    )

    position = Column(Integer, nullable=False, default=0)

    name = Column(String(255), nullable=False)

    allocation_percentage = Column(DecimalString, nullable=False)

    savings = Column(DecimalString, nullable=False, default="0.00")

    account = relationship("AccountRecord", back_populates="beneficiaries")

    __table_args__ = (
        UniqueConstraint("account_id", "name", name="uq_account_beneficiary_name"),
        Index("idx_beneficiary_account", "account_id"),
    )


class CreditCardRecord(Base, UUIDMixin, ModelMixin):
    """
    Credit card owned by an account.
    """

    __tablename__ = "account_credit_cards"

    account_id = Column(
        String,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        doc="Foreign key to AccountRecord"
    )

    number = Column(
        String(32),
        nullable=False,
        unique=True,
        doc="Card number (format validated upstream)"
    )

    account = relationship("AccountRecord", back_populates="credit_cards")
