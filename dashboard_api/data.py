"""
Read operations for the invoice dashboard.

Each function takes the DatabaseClient to query, fetches from the store
and shapes the rows into display records. A failed store call is logged
and re-raised as a DataAccessError naming the operation; nothing is
returned partially.
"""

import math
from concurrent.futures import ThreadPoolExecutor
from functools import wraps
from typing import List, Optional

from .database import DatabaseClient
from .errors import DataAccessError
from .formatting import format_currency
from .logs import logger
from .models import (
    CardData,
    CustomerField,
    CustomersTableRow,
    InvoiceForm,
    InvoicesTableRow,
    InvoiceStatus,
    LatestInvoice,
    Revenue,
)

log = logger(__name__)

ITEMS_PER_PAGE = 6
LATEST_INVOICES_LIMIT = 5


def _fails_with(message: str):
    """Log any error raised by the wrapped read and raise DataAccessError(message) instead."""

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except Exception as e:
                log.exception("Database Error: %s", e)
                raise DataAccessError(message) from e

        return wrapper

    return decorator


@_fails_with("Failed to fetch revenue data.")
def fetch_revenue(db: DatabaseClient) -> List[Revenue]:
    log.info("Fetching revenue data...")
    revenue = [Revenue(**row) for row in db.list_revenue()]
    log.info("Fetched %d revenue rows", len(revenue))
    return revenue


@_fails_with("Failed to fetch the latest invoices.")
def fetch_latest_invoices(db: DatabaseClient) -> List[LatestInvoice]:
    """
    The five most recently dated invoices with their customer.

    Invoices sharing a date come back in whatever order the store returns
    them, so which of them make the cut at the boundary is not fixed.
    """
    rows = db.latest_invoices(LATEST_INVOICES_LIMIT)
    return [
        LatestInvoice(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            image_url=row.get("image_url"),
            amount=format_currency(row["amount"]),
        )
        for row in rows
    ]


@_fails_with("Failed to fetch card data.")
def fetch_card_data(db: DatabaseClient) -> CardData:
    """
    Totals for the dashboard cards.

    The four queries run side by side and are not a snapshot: under
    concurrent writes the counts may disagree slightly.
    """
    with ThreadPoolExecutor(max_workers=4) as pool:
        invoice_count = pool.submit(db.count_invoices)
        customer_count = pool.submit(db.count_customers)
        paid = pool.submit(db.sum_invoice_amounts, InvoiceStatus.PAID.value)
        pending = pool.submit(db.sum_invoice_amounts, InvoiceStatus.PENDING.value)

        return CardData(
            number_of_invoices=int(invoice_count.result() or 0),
            number_of_customers=int(customer_count.result() or 0),
            total_paid_invoices=format_currency(paid.result() or 0),
            total_pending_invoices=format_currency(pending.result() or 0),
        )


@_fails_with("Failed to fetch invoices.")
def fetch_filtered_invoices(db: DatabaseClient, query: str, current_page: int) -> List[InvoicesTableRow]:
    offset = (max(current_page, 1) - 1) * ITEMS_PER_PAGE
    rows = db.search_invoices(query or "", ITEMS_PER_PAGE, offset)
    return [InvoicesTableRow(**row) for row in rows[:ITEMS_PER_PAGE]]


@_fails_with("Failed to fetch total number of invoices.")
def fetch_invoices_pages(db: DatabaseClient, query: str) -> int:
    count = db.count_matching_invoices(query or "")
    return math.ceil(int(count) / ITEMS_PER_PAGE)


@_fails_with("Failed to fetch invoice.")
def fetch_invoice_by_id(db: DatabaseClient, invoice_id: str) -> Optional[InvoiceForm]:
    # Amount stays in cents; the edit form converts it for display
    row = db.get_invoice(invoice_id)
    if row is None:
        return None
    return InvoiceForm(**row)


@_fails_with("Failed to fetch all customers.")
def fetch_customers(db: DatabaseClient) -> List[CustomerField]:
    return [CustomerField(**row) for row in db.list_customers()]


@_fails_with("Failed to fetch customer table.")
def fetch_filtered_customers(db: DatabaseClient, query: str) -> List[CustomersTableRow]:
    return [
        CustomersTableRow(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            image_url=row.get("image_url"),
            total_invoices=int(row.get("total_invoices") or 0),
            total_pending=format_currency(row.get("total_pending") or 0),
            total_paid=format_currency(row.get("total_paid") or 0),
        )
        for row in db.search_customers(query or "")
    ]
