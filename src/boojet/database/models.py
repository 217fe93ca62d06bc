"""SQLAlchemy models for boojet database."""

from datetime import datetime, UTC
from decimal import Decimal

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import Session, declarative_base, relationship, sessionmaker
from sqlalchemy.types import TypeDecorator

from boojet.domain.errors import InvalidAmountError
from boojet.domain.money import MAX_STORED_AMOUNT, Money

Base = declarative_base()

MAX_STORED_CENTS = int(MAX_STORED_AMOUNT.scaleb(2))


class MoneyType(TypeDecorator):
    """Money stored as a whole number of cents.

    SQLite has no exact decimal column, so amounts are kept as integers and
    come back as Money. The range is that of a signed 64-bit integer.
    """

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        cents = int(Money.of(value).amount.scaleb(2))
        if abs(cents) > MAX_STORED_CENTS:
            raise InvalidAmountError(f"Amount {Money.of(value)} is too large to store")
        return cents

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Money.of(Decimal(value).scaleb(-2))


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, nullable=False, default=1)
    name = Column(String(100), nullable=False)
    type = Column(String(16), nullable=False, default="CHEQUING")
    opening_balance = Column(MoneyType, nullable=False)
    created_at = Column(Date, nullable=False)
    closed_at = Column(Date, nullable=True)

    # Account names are unique per owner
    __table_args__ = (UniqueConstraint("owner_id", "name", name="uq_account_owner_name"),)

    # Relationships
    transactions = relationship("Transaction", back_populates="account")


class Category(Base):
    """Category model; parent is referenced by code."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    code = Column(String(64), unique=True, nullable=False)
    name = Column(String(64), nullable=False)
    type = Column(String(16), nullable=False)
    parent_code = Column(String(64), ForeignKey("categories.code"), nullable=True)
    essential = Column(Boolean, nullable=True)
    is_system = Column(Boolean, default=True, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    date = Column(Date, nullable=False)
    amount = Column(MoneyType, nullable=False)
    category = Column(String(64), ForeignKey("categories.code"), nullable=False)
    income = Column(Boolean, default=False, nullable=False)
    description = Column(String, nullable=False)

    # Relationships
    account = relationship("Account", back_populates="transactions")


class IncomePlan(Base):
    """Income plan model."""

    __tablename__ = "income_plans"

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, nullable=False, default=1)
    source_name = Column(String(100), nullable=False)
    pay_type = Column(String(16), nullable=False)
    amount = Column(MoneyType, nullable=False)
    hours_per_week = Column(Numeric(9, 2), nullable=True)
    effective_from = Column(Date, nullable=False)
    effective_to = Column(Date, nullable=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
