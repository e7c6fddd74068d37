"""CSV import domain service.

Each file kind has fixed headers, matched case-insensitively. Rows that fail
to parse are reported and skipped; the rest of the file is still imported.
"""

import csv
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

from ledgerdesk.database.base import Database
from ledgerdesk.domain.entities import LedgerRow, Product, TransferRow
from ledgerdesk.domain.errors import ValidationError, missing_columns
from ledgerdesk.domain.ledger import normalize_customer_name
from ledgerdesk.utils.amount_parser import parse_amount, parse_quantity

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

LEDGER_COLUMNS = {"customer name", "date", "number"}
TRANSFER_COLUMNS = {"barcode", "qty"}
PRODUCT_COLUMNS = {"barcode", "product"}
CUSTOMER_COLUMNS = {"customer name"}


def _normalize_header(name: Optional[str]) -> str:
    return " ".join((name or "").strip().lower().split())


class CSVImportService:
    """Service for importing sheet exports."""

    def __init__(self, db: Database, current_user: Optional[str] = None):
        """Initialize CSV import service.

        Args:
            db: Database instance
            current_user: Recorded on transfers whose file has no user column
        """
        self.db = db
        self.current_user = current_user

    def _read_rows(
        self, csv_file_path: str, kind: str, required: set[str]
    ) -> Iterator[tuple[int, dict[str, str]]]:
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            sample = f.read(1024)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
            except csv.Error:
                delimiter = ","

            reader = csv.DictReader(f, delimiter=delimiter)
            if reader.fieldnames is None:
                raise ValidationError(f"{kind} CSV file has no columns")

            headers = {_normalize_header(name) for name in reader.fieldnames}
            missing = required - headers
            if missing:
                raise ValidationError(missing_columns(kind, missing))

            # Header is row 1
            for row_num, raw in enumerate(reader, start=2):
                values = {
                    _normalize_header(key): (value or "").strip()
                    for key, value in raw.items()
                    if key is not None and isinstance(value, str)
                }
                if not any(values.values()):
                    continue
                yield row_num, values

    def _import(
        self,
        csv_file_path: str,
        kind: str,
        required: set[str],
        handle_row: Callable[[dict[str, str]], bool],
    ) -> dict[str, Any]:
        imported = 0
        skipped = 0
        errors = []

        for row_num, values in self._read_rows(csv_file_path, kind, required):
            try:
                if handle_row(values):
                    imported += 1
                else:
                    skipped += 1
            except ValueError as e:
                logger.warning("%s import, row %d skipped: %s", kind, row_num, e)
                errors.append(f"Row {row_num}: {e}")

        logger.info(
            "%s import of %s: %d imported, %d skipped, %d errors",
            kind, csv_file_path, imported, skipped, len(errors),
        )
        return {"imported": imported, "skipped": skipped, "errors": errors}

    def import_ledger(self, csv_file_path: str) -> dict[str, Any]:
        """Import customer ledger lines.

        Columns: Customer Name, Date, Number (required), Sales Rep, Debit,
        Credit, Matching, Due Date.

        Returns:
            Dict with import statistics:
            - imported: number of rows imported
            - skipped: number of rows skipped
            - errors: list of error messages

        Raises:
            ValidationError: If required columns are missing
            FileNotFoundError: If CSV file doesn't exist
        """

        def handle(values: dict[str, str]) -> bool:
            customer_name = values.get("customer name")
            if not customer_name:
                raise ValueError("Missing customer name")
            self.db.add_ledger_row(
                LedgerRow(
                    customer_name=customer_name,
                    sales_rep=values.get("sales rep", ""),
                    date=values.get("date", ""),
                    number=values.get("number", ""),
                    debit=parse_amount(values.get("debit"), default=ZERO),
                    credit=parse_amount(values.get("credit"), default=ZERO),
                    matching=values.get("matching") or None,
                    due_date=values.get("due date") or None,
                )
            )
            return True

        return self._import(csv_file_path, "Ledger", LEDGER_COLUMNS, handle)

    def import_transfers(self, csv_file_path: str) -> dict[str, Any]:
        """Import inventory transfer lines.

        Columns: Barcode, Qty (required), User, Number, Date, Loc From,
        Loc To, Customer, Receiver, Product, Description. Blank locations
        are stored as MAIN.
        """

        def handle(values: dict[str, str]) -> bool:
            barcode = values.get("barcode")
            if not barcode:
                raise ValueError("Missing barcode")
            self.db.add_transfer(
                TransferRow(
                    date=values.get("date", ""),
                    loc_from=values.get("loc from") or "MAIN",
                    loc_to=values.get("loc to") or "MAIN",
                    barcode=barcode,
                    product_name=values.get("product", ""),
                    qty_pcs=parse_quantity(values.get("qty")),
                    number=values.get("number", ""),
                    customer_name=values.get("customer") or None,
                    receiver_name=values.get("receiver") or None,
                    description=values.get("description") or None,
                    user=values.get("user") or self.current_user,
                )
            )
            return True

        return self._import(csv_file_path, "Transfer", TRANSFER_COLUMNS, handle)

    def import_products(self, csv_file_path: str) -> dict[str, Any]:
        """Import the product catalog; existing barcodes are updated.

        Columns: Barcode, Product (required), Qty Pcs, Pcs In Ctn, Price.
        Updated products count as skipped.
        """

        def handle(values: dict[str, str]) -> bool:
            barcode = values.get("barcode")
            if not barcode:
                raise ValueError("Missing barcode")
            pcs_in_ctn = parse_quantity(values.get("pcs in ctn")) or 1
            return self.db.upsert_product(
                Product(
                    barcode=barcode,
                    product_name=values.get("product", ""),
                    qty_pcs=parse_quantity(values.get("qty pcs")),
                    pcs_in_ctn=pcs_in_ctn,
                    price=parse_amount(values.get("price"), default=ZERO),
                )
            )

        return self._import(csv_file_path, "Product", PRODUCT_COLUMNS, handle)

    def import_closed_customers(self, csv_file_path: str) -> dict[str, Any]:
        """Import closed customers; names already closed are skipped.

        Columns: Customer Name.
        """
        seen = {normalize_customer_name(n) for n in self.db.list_closed_customers()}

        def handle(values: dict[str, str]) -> bool:
            name = values.get("customer name")
            if not name:
                raise ValueError("Missing customer name")
            key = normalize_customer_name(name)
            if key in seen:
                return False
            self.db.add_closed_customer(name)
            seen.add(key)
            return True

        return self._import(csv_file_path, "Closed customer", CUSTOMER_COLUMNS, handle)

    def import_discount_entries(self, csv_file_path: str) -> dict[str, Any]:
        """Import discount tracker lines; existing customers are skipped.

        Columns: Customer Name (required), Reconciliation (month tokens).
        """

        def handle(values: dict[str, str]) -> bool:
            name = values.get("customer name")
            if not name:
                raise ValueError("Missing customer name")
            if self.db.get_discount_entry(name) is not None:
                return False
            self.db.add_discount_entry(name, values.get("reconciliation", ""))
            return True

        return self._import(csv_file_path, "Discount", CUSTOMER_COLUMNS, handle)
