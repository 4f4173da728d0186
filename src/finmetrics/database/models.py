"""SQLAlchemy models for finmetrics database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class TransactionRecord(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    type = Column(String, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    currency = Column(String, default="USD", nullable=False)
    category = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=True)
    is_recurring = Column(Boolean, default=False, nullable=False)
    user_id = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class BudgetRecord(Base):
    """Budget model."""

    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    method = Column(String, nullable=False)
    frequency = Column(String, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    user_id = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    categories = relationship(
        "BudgetCategoryRecord",
        back_populates="budget",
        cascade="all, delete-orphan",
        order_by="BudgetCategoryRecord.position",
    )


class BudgetCategoryRecord(Base):
    """Budget category model."""

    __tablename__ = "budget_categories"

    id = Column(Integer, primary_key=True)
    budget_id = Column(Integer, ForeignKey("budgets.id"), nullable=False)
    key = Column(String, nullable=False)
    name = Column(String, nullable=False)
    category_type = Column(String, nullable=False)
    allocated = Column(Numeric(14, 4), nullable=False)
    allow_rollover = Column(Boolean, default=False, nullable=False)
    rollover_amount = Column(Numeric(14, 4), default=0, nullable=False)
    position = Column(Integer, default=0, nullable=False)

    # Unique constraint on budget_id + key
    __table_args__ = (UniqueConstraint("budget_id", "key", name="uq_budget_category_key"),)

    # Relationships
    budget = relationship("BudgetRecord", back_populates="categories")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
