"""Shared pytest fixtures for ledgerdesk tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from ledgerdesk.database.factories import create_sqlite_database
from ledgerdesk.domain.analysis import AnalysisService
from ledgerdesk.domain.closed_customers import ClosedCustomerService
from ledgerdesk.domain.csv_import import CSVImportService
from ledgerdesk.domain.entities import LedgerRow, Product, TransferRow
from ledgerdesk.domain.reconciliation import ReconciliationService

AS_OF = date(2024, 6, 30)


def make_row(
    customer="Acme Co",
    number="SAL001",
    debit=0,
    credit=0,
    date="2024-06-01",
    sales_rep="Omar",
    matching=None,
):
    """Build a ledger row with money given as plain numbers."""
    return LedgerRow(
        customer_name=customer,
        sales_rep=sales_rep,
        date=date,
        number=number,
        debit=Decimal(str(debit)),
        credit=Decimal(str(credit)),
        matching=matching,
    )


def make_transfer(loc_from, loc_to, qty, barcode="123", number="", date="2024-06-01"):
    """Build a transfer row."""
    return TransferRow(
        date=date,
        loc_from=loc_from,
        loc_to=loc_to,
        barcode=barcode,
        product_name=f"Product {barcode}",
        qty_pcs=qty,
        number=number,
    )


@pytest.fixture
def as_of():
    """Fixed evaluation date."""
    return AS_OF


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def analysis_service(temp_db):
    """Create an AnalysisService with a temporary database."""
    return AnalysisService(temp_db)


@pytest.fixture
def closed_customer_service(temp_db):
    """Create a ClosedCustomerService with a temporary database."""
    return ClosedCustomerService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create a CSVImportService with a temporary database."""
    return CSVImportService(temp_db, current_user="tester")


@pytest.fixture
def reconciliation_service(temp_db):
    """Create a ReconciliationService pinned to 2025."""
    return ReconciliationService(temp_db, today=date(2025, 3, 1))


@pytest.fixture
def sample_ledger(temp_db):
    """Store a small ledger for two customers and two reps."""
    rows = [
        make_row("Acme Co", "SAL001", debit=1000, date="2024-06-01", sales_rep="Omar"),
        make_row("Acme Co", "BNK001", credit=1000, date="2024-06-20", sales_rep="Omar", matching="M1"),
        make_row("Acme Co", "SAL002", debit=500, date="2024-06-25", sales_rep="Sara"),
        make_row("Beta Trading", "SAL010", debit=30000, date="2023-01-10", sales_rep="Sara"),
        make_row("Beta Trading", "BNK010", credit=1000, date="2023-02-10", sales_rep="Sara"),
    ]
    for row in rows:
        temp_db.add_ledger_row(row)
    return rows


@pytest.fixture
def sample_products(temp_db):
    """Store a two-product catalog."""
    products = [
        Product(barcode="123", product_name="Chips Salt", qty_pcs=480, pcs_in_ctn=24, price=Decimal("1.50")),
        Product(barcode="456", product_name="Chips Chili", qty_pcs=100, pcs_in_ctn=10, price=Decimal("1.75")),
    ]
    for product in products:
        temp_db.upsert_product(product)
    return products


@pytest.fixture
def sample_transfers(temp_db):
    """Store transfers moving stock to and from Ali."""
    rows = [
        make_transfer("Main Inventory", "Ali", 50, number="TRX-0001"),
        make_transfer("Ali", "Main Inventory", 20, number="TRX-0002"),
        make_transfer("Ali", "Customer", 10, barcode="123", number="TRX-0003"),
        make_transfer("Main Inventory", "Ali", 24, barcode="456", number="TRX-0004"),
    ]
    for row in rows:
        temp_db.add_transfer(row)
    return rows


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
