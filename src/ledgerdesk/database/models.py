"""SQLAlchemy models for the ledgerdesk store.

Tables mirror the sheets the back office keeps: the customer ledger, the
transfer log, the product catalog, closed customers and the discount
tracker.
"""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class LedgerEntry(Base):
    """Customer ledger line."""

    __tablename__ = "ledger_rows"

    id = Column(Integer, primary_key=True)
    customer_name = Column(String, nullable=False, index=True)
    sales_rep = Column(String, nullable=False, default="")
    date = Column(String, nullable=False, default="")
    due_date = Column(String, nullable=True)
    number = Column(String, nullable=False, default="")
    debit = Column(Numeric(14, 2), nullable=False, default=0)
    credit = Column(Numeric(14, 2), nullable=False, default=0)
    matching = Column(String, nullable=True)
    imported_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Transfer(Base):
    """Inventory transfer log line."""

    __tablename__ = "transfers"

    id = Column(Integer, primary_key=True)
    user = Column(String, nullable=True)
    number = Column(String, nullable=False, default="")
    date = Column(String, nullable=False, default="")
    loc_from = Column(String, nullable=False, default="MAIN")
    loc_to = Column(String, nullable=False, default="MAIN")
    customer_name = Column(String, nullable=True)
    receiver_name = Column(String, nullable=True)
    barcode = Column(String, nullable=False, index=True)
    product_name = Column(String, nullable=False, default="")
    qty_pcs = Column(Integer, nullable=False, default=0)
    description = Column(String, nullable=True)
    imported_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Product(Base):
    """Product catalog entry."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    barcode = Column(String, unique=True, nullable=False)
    product_name = Column(String, nullable=False)
    qty_pcs = Column(Integer, nullable=False, default=0)
    pcs_in_ctn = Column(Integer, nullable=False, default=1)
    price = Column(Numeric(14, 2), nullable=False, default=0)


class ClosedCustomer(Base):
    """Customer whose account is closed."""

    __tablename__ = "closed_customers"

    id = Column(Integer, primary_key=True)
    customer_name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class DiscountEntry(Base):
    """Discount tracker line; reconciliation holds month tokens like "JAN25, FEB25"."""

    __tablename__ = "discount_entries"

    id = Column(Integer, primary_key=True)
    customer_name = Column(String, unique=True, nullable=False)
    reconciliation = Column(String, nullable=False, default="")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
