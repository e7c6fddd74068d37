"""Inventory movement ledger.

Transfers move stock between the main inventory, persons (drivers, sales
staff) and customers. Older sheet rows use the sentinels IN, OUT, MAIN and
CUSTOMER instead of location labels; normalize_locations is the single
place that maps them.
"""

import re
from dataclasses import replace
from typing import Iterable, Mapping, Optional, Sequence, Union

from ledgerdesk.domain.entities import (
    PersonLedger,
    Product,
    ProductBalance,
    StockSummary,
    TransferRow,
)

MAIN_INVENTORY = "Main Inventory"
CUSTOMER = "Customer"
ONLY_TRANSFER = "Only Transfer"
FROZEN = "Frozen"

NON_PERSON_LOCATIONS = frozenset({MAIN_INVENTORY, CUSTOMER})

_SENTINELS = {"MAIN": MAIN_INVENTORY, "CUSTOMER": CUSTOMER}

Catalog = Union[Mapping[str, Product], Iterable[Product]]


def _canonical(location: str) -> str:
    return _SENTINELS.get(location, location)


def normalize_locations(loc_from: Optional[str], loc_to: Optional[str]) -> tuple[str, str]:
    """Map legacy sentinels to canonical location labels.

    IN rows came from the main inventory. OUT rows were single-direction
    issues: the stored destination is the real source and the goods went
    to a customer. Blank locations read as MAIN.

    Returns:
        Tuple of (loc_from, loc_to)
    """
    src = (loc_from or "").strip() or "MAIN"
    dst = (loc_to or "").strip() or "MAIN"

    if src == "IN":
        src = MAIN_INVENTORY
    elif src == "OUT":
        src, dst = dst, CUSTOMER

    return _canonical(src), _canonical(dst)


def is_stock_bypass(loc_from: str, loc_to: str) -> bool:
    """Paperwork-only transfers that never move real stock.

    Expects normalized locations.
    """
    return loc_from == ONLY_TRANSFER or loc_to == FROZEN


def is_person(location: str) -> bool:
    """True for a normalized location naming a person."""
    return bool(location) and location not in NON_PERSON_LOCATIONS


def _catalog_index(products: Catalog) -> dict[str, Product]:
    if isinstance(products, Mapping):
        return dict(products)
    return {p.barcode: p for p in products}


def pcs_per_carton(barcode: str, catalog: Mapping[str, Product]) -> int:
    """Pieces per carton from the catalog, 1 when unknown or zero."""
    product = catalog.get(barcode)
    if product is None or not product.pcs_in_ctn:
        return 1
    return product.pcs_in_ctn


def _entry(ledgers: dict[str, PersonLedger], name: str, barcode: str) -> ProductBalance:
    ledger = ledgers.get(name)
    if ledger is None:
        ledger = PersonLedger(name=name)
        ledgers[name] = ledger
    balance = ledger.products.get(barcode)
    if balance is None:
        balance = ProductBalance()
        ledger.products[barcode] = balance
    return balance


def resolve_person_ledgers(
    transfers: Sequence[TransferRow], products: Catalog = ()
) -> list[PersonLedger]:
    """Fold a transfer log into per-person stock ledgers.

    A row credits its destination and debits its source whenever that end
    is a person, so a person-to-person row touches two ledgers. Stock
    bypass rows are skipped entirely. Persons whose products all have zero
    received, distributed and balance are dropped.

    Args:
        transfers: Flat transfer log
        products: Catalog as a list or a barcode mapping, for carton totals

    Returns:
        Person ledgers sorted by total pieces held, highest first
    """
    catalog = _catalog_index(products)
    ledgers: dict[str, PersonLedger] = {}

    for row in transfers:
        loc_from, loc_to = normalize_locations(row.loc_from, row.loc_to)
        if is_stock_bypass(loc_from, loc_to):
            continue
        if is_person(loc_to):
            entry = _entry(ledgers, loc_to, row.barcode)
            entry.received += row.qty_pcs
            entry.balance += row.qty_pcs
        if is_person(loc_from):
            entry = _entry(ledgers, loc_from, row.barcode)
            entry.distributed += row.qty_pcs
            entry.balance -= row.qty_pcs

    result = []
    for ledger in ledgers.values():
        if ledger.is_empty():
            continue
        for barcode, entry in ledger.products.items():
            if entry.balance == 0:
                continue
            ledger.product_count += 1
            ledger.total_pcs += entry.balance
            ledger.total_ctns += entry.balance / pcs_per_carton(barcode, catalog)
        result.append(ledger)

    return sorted(result, key=lambda p: (-p.total_pcs, p.name))


def person_transfers(transfers: Sequence[TransferRow], name: str) -> list[TransferRow]:
    """Transfers where either normalized end is the given person."""
    target = name.strip()
    matched = []
    for row in transfers:
        loc_from, loc_to = normalize_locations(row.loc_from, row.loc_to)
        if target in (loc_from, loc_to):
            matched.append(row)
    return matched


def main_inventory_stock(
    products: Iterable[Product], transfers: Sequence[TransferRow] = ()
) -> list[Product]:
    """Catalog products with their live main inventory piece counts.

    The catalog quantity is the opening stock. Each transfer into the main
    inventory adds to it and each transfer out of it subtracts, using the
    same location normalization as the person ledgers. Stock bypass rows
    and transfers of barcodes missing from the catalog are ignored.
    """
    products = list(products)
    stock = {p.barcode: p.qty_pcs for p in products}
    for row in transfers:
        if row.barcode not in stock:
            continue
        loc_from, loc_to = normalize_locations(row.loc_from, row.loc_to)
        if is_stock_bypass(loc_from, loc_to) or loc_from == loc_to:
            continue
        if loc_to == MAIN_INVENTORY:
            stock[row.barcode] += row.qty_pcs
        elif loc_from == MAIN_INVENTORY:
            stock[row.barcode] -= row.qty_pcs
    return [replace(p, qty_pcs=stock[p.barcode]) for p in products]


def summarize_stock(products: Iterable[Product]) -> StockSummary:
    """Piece, carton and item totals of the given product stock."""
    total_pcs = 0
    total_ctns = 0.0
    total_items = 0
    for product in products:
        total_pcs += product.qty_pcs
        total_ctns += product.qty_pcs / (product.pcs_in_ctn or 1)
        total_items += 1
    return StockSummary(total_pcs=total_pcs, total_ctns=total_ctns, total_items=total_items)


def next_transaction_number(transfers: Iterable[TransferRow], prefix: str = "TRX") -> str:
    """Next "PREFIX-NNNN" number after the highest one already used."""
    pattern = re.compile(rf"^{re.escape(prefix)}-(\d+)$")
    highest = 0
    for row in transfers:
        match = pattern.match(row.number or "")
        if match:
            highest = max(highest, int(match.group(1)))
    return f"{prefix}-{highest + 1:04d}"
