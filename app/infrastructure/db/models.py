"""
Database Models (SQLAlchemy ORM)
Investments and ledger entries are insert-only - NO UPDATES, NO DELETES
"""

from sqlalchemy import (
    Column, Integer, String, Numeric, DateTime, ForeignKey, Text, Index
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.infrastructure.db.database import Base


class AccountModel(Base):
    """User cash account"""
    __tablename__ = "accounts"

    id = Column(String(128), primary_key=True)
    balance = Column(Numeric(18, 2), nullable=False, default=0)
    total_invested = Column(Numeric(18, 2), nullable=False, default=0)
    investment_returns = Column(Numeric(18, 2), nullable=False, default=0)

    # Bumped on every balance write; guards against stale read-modify-write
    version = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    investments = relationship("InvestmentModel", back_populates="owner")
    ledger_transactions = relationship("LedgerTransactionModel", back_populates="account")


class InvestmentModel(Base):
    """Placed investment - AUDIT RECORD"""
    __tablename__ = "investments"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(String(128), ForeignKey("accounts.id"), nullable=False)

    category = Column(String(32), nullable=False)
    amount = Column(Numeric(18, 2), nullable=False)
    status = Column(String(16), nullable=False)
    return_rate = Column(Numeric(6, 4), nullable=False)
    expected_return = Column(Numeric(18, 2), nullable=False)

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships
    owner = relationship("AccountModel", back_populates="investments")

    # Indexes
    __table_args__ = (
        Index('ix_investments_owner_created', 'owner_id', 'created_at'),
    )


class LedgerTransactionModel(Base):
    """Balance-affecting event - AUDIT RECORD"""
    __tablename__ = "ledger_transactions"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(String(128), ForeignKey("accounts.id"), nullable=False)

    kind = Column(String(32), nullable=False)
    subkind = Column(String(32), nullable=False)
    amount = Column(Numeric(18, 2), nullable=False)  # signed, debits negative
    status = Column(String(16), nullable=False)
    description = Column(Text, nullable=True)
    balance_after = Column(Numeric(18, 2), nullable=False)
    category = Column(String(32), nullable=False)

    timestamp = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships
    account = relationship("AccountModel", back_populates="ledger_transactions")

    # Indexes
    __table_args__ = (
        Index('ix_ledger_transactions_account_ts', 'account_id', 'timestamp'),
    )
