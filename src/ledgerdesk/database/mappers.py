"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the storage schema can follow
the sheets while the domain keeps its own shapes.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerdesk.domain import entities as domain
from ledgerdesk.database.models import (
    LedgerEntry as ORMLedgerEntry,
    Transfer as ORMTransfer,
    Product as ORMProduct,
    DiscountEntry as ORMDiscountEntry,
)
from ledgerdesk.utils.month_keys import parse_month_cell


def ledger_row_to_domain(orm_row: ORMLedgerEntry) -> domain.LedgerRow:
    """Convert SQLAlchemy LedgerEntry model to domain LedgerRow."""
    return domain.LedgerRow(
        customer_name=orm_row.customer_name,
        sales_rep=orm_row.sales_rep or "",
        date=orm_row.date or "",
        number=orm_row.number or "",
        debit=Decimal(orm_row.debit or 0),
        credit=Decimal(orm_row.credit or 0),
        matching=orm_row.matching or None,
        due_date=orm_row.due_date or None,
    )


def ledger_row_to_orm(row: domain.LedgerRow) -> ORMLedgerEntry:
    """Build a SQLAlchemy LedgerEntry from a domain LedgerRow."""
    return ORMLedgerEntry(
        customer_name=row.customer_name,
        sales_rep=row.sales_rep or "",
        date=row.date or "",
        due_date=row.due_date,
        number=row.number or "",
        debit=row.debit,
        credit=row.credit,
        matching=row.matching,
    )


def transfer_to_domain(orm_transfer: ORMTransfer) -> domain.TransferRow:
    """Convert SQLAlchemy Transfer model to domain TransferRow."""
    return domain.TransferRow(
        date=orm_transfer.date or "",
        loc_from=orm_transfer.loc_from,
        loc_to=orm_transfer.loc_to,
        barcode=orm_transfer.barcode,
        product_name=orm_transfer.product_name or "",
        qty_pcs=orm_transfer.qty_pcs or 0,
        number=orm_transfer.number or "",
        customer_name=orm_transfer.customer_name or None,
        receiver_name=orm_transfer.receiver_name or None,
        description=orm_transfer.description or None,
        user=orm_transfer.user or None,
    )


def transfer_to_orm(row: domain.TransferRow) -> ORMTransfer:
    """Build a SQLAlchemy Transfer from a domain TransferRow."""
    return ORMTransfer(
        user=row.user,
        number=row.number or "",
        date=row.date or "",
        loc_from=row.loc_from,
        loc_to=row.loc_to,
        customer_name=row.customer_name,
        receiver_name=row.receiver_name,
        barcode=row.barcode,
        product_name=row.product_name or "",
        qty_pcs=row.qty_pcs,
        description=row.description,
    )


def product_to_domain(orm_product: ORMProduct) -> domain.Product:
    """Convert SQLAlchemy Product model to domain Product."""
    return domain.Product(
        barcode=orm_product.barcode,
        product_name=orm_product.product_name,
        qty_pcs=orm_product.qty_pcs or 0,
        pcs_in_ctn=orm_product.pcs_in_ctn or 1,
        price=Decimal(orm_product.price or 0),
    )


def discount_entry_to_domain(
    orm_entry: ORMDiscountEntry, fallback_year: Optional[int] = None
) -> domain.DiscountEntry:
    """Convert SQLAlchemy DiscountEntry model to domain DiscountEntry.

    Bare month tokens like "JAN" take fallback_year, defaulting to the current year.
    """
    if fallback_year is None:
        fallback_year = date.today().year
    return domain.DiscountEntry(
        customer_name=orm_entry.customer_name,
        reconciliation_months=tuple(
            parse_month_cell(orm_entry.reconciliation, fallback_year)
        ),
    )
