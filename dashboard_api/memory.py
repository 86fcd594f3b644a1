"""
In-memory implementation of DatabaseClient.

Useful for:
- Tests that exercise the query and mutation layers without Supabase
- Running the API locally against sample data

Filtering, ordering and paging follow the SQL functions in sql/schema.sql:
case-insensitive substring matching with % and _ taken literally, newest
date first, and id order among invoices sharing a date.
"""

import threading
import uuid
from typing import Iterable, List, Optional

from .database import DatabaseClient, Row
from .models import Customer, Invoice


class InMemoryDatabaseClient(DatabaseClient):

    def __init__(
        self,
        customers: Optional[Iterable[Row]] = None,
        invoices: Optional[Iterable[Row]] = None,
        revenue: Optional[Iterable[Row]] = None,
    ) -> None:
        self._lock = threading.Lock()
        self.customers: List[Row] = [Customer(**c).model_dump() for c in customers or []]
        self.invoices: List[Row] = [Invoice(**i).model_dump(mode="json") for i in invoices or []]
        self.revenue: List[Row] = [dict(r) for r in revenue or []]

    def list_revenue(self) -> List[Row]:
        with self._lock:
            return [dict(r) for r in self.revenue]

    def latest_invoices(self, limit: int) -> List[Row]:
        with self._lock:
            rows = self._joined_invoices()
        return [
            {key: row[key] for key in ("id", "amount", "date", "name", "email", "image_url")}
            for row in rows[:limit]
        ]

    def count_invoices(self) -> int:
        with self._lock:
            return len(self.invoices)

    def count_customers(self) -> int:
        with self._lock:
            return len(self.customers)

    def sum_invoice_amounts(self, status: str) -> int:
        with self._lock:
            return sum(i["amount"] for i in self.invoices if i["status"] == status)

    def search_invoices(self, query: str, limit: int, offset: int) -> List[Row]:
        with self._lock:
            rows = self._matching_invoices(query)
        return rows[offset:offset + limit]

    def count_matching_invoices(self, query: str) -> int:
        with self._lock:
            return len(self._matching_invoices(query))

    def get_invoice(self, invoice_id: str) -> Optional[Row]:
        with self._lock:
            for invoice in self.invoices:
                if invoice["id"] == invoice_id:
                    return {key: invoice[key] for key in ("id", "customer_id", "amount", "status")}
        return None

    def list_customers(self) -> List[Row]:
        with self._lock:
            customers = sorted(self.customers, key=lambda c: c["name"])
            return [{"id": c["id"], "name": c["name"]} for c in customers]

    def search_customers(self, query: str) -> List[Row]:
        needle = (query or "").lower()
        results = []
        with self._lock:
            for customer in sorted(self.customers, key=lambda c: c["name"]):
                if needle not in customer["name"].lower() and needle not in customer["email"].lower():
                    continue
                owned = [i for i in self.invoices if i["customer_id"] == customer["id"]]
                results.append({
                    "id": customer["id"],
                    "name": customer["name"],
                    "email": customer["email"],
                    "image_url": customer.get("image_url"),
                    "total_invoices": len(owned),
                    "total_pending": sum(i["amount"] for i in owned if i["status"] == "pending"),
                    "total_paid": sum(i["amount"] for i in owned if i["status"] == "paid"),
                })
        return results

    def insert_invoice(self, row: Row) -> None:
        # Same constraints the invoices table enforces
        invoice = Invoice(**{"id": str(uuid.uuid4()), **row}).model_dump(mode="json")
        with self._lock:
            self.invoices.append(invoice)

    def update_invoice(self, invoice_id: str, changes: Row) -> None:
        with self._lock:
            for invoice in self.invoices:
                if invoice["id"] == invoice_id:
                    invoice.update(changes)

    def delete_invoice(self, invoice_id: str) -> None:
        with self._lock:
            self.invoices = [i for i in self.invoices if i["id"] != invoice_id]

    def _joined_invoices(self) -> List[Row]:
        # Inner join: invoices whose customer is unknown are left out
        customers = {c["id"]: c for c in self.customers}
        rows = []
        for invoice in self.invoices:
            customer = customers.get(invoice["customer_id"])
            if customer is None:
                continue
            rows.append({
                "id": invoice["id"],
                "customer_id": invoice["customer_id"],
                "name": customer["name"],
                "email": customer["email"],
                "image_url": customer.get("image_url"),
                "date": invoice["date"],
                "amount": invoice["amount"],
                "status": invoice["status"],
            })
        # Ties on date by id, as search_invoices orders them
        rows.sort(key=lambda r: r["id"])
        return sorted(rows, key=lambda r: r["date"], reverse=True)

    def _matching_invoices(self, query: str) -> List[Row]:
        needle = (query or "").lower()
        return [
            row for row in self._joined_invoices()
            if any(
                needle in str(row[field]).lower()
                for field in ("name", "email", "amount", "date", "status")
            )
        ]
