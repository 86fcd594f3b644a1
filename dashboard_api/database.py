"""
Store access for the invoice dashboard.

DatabaseClient is the contract the query and mutation layers talk to.
Rows go in and come out as plain dicts keyed by column name; joined reads
return the customer columns flattened next to the invoice columns.

Implementations:
- SupabaseDatabaseClient: hosted Postgres through supabase-py
- InMemoryDatabaseClient (dashboard_api.memory): lists of dicts, for tests
  and local demos
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from supabase import create_client, Client

from .config import Settings

Row = Dict[str, Any]


class DatabaseClient(ABC):

    @abstractmethod
    def list_revenue(self) -> List[Row]:
        """All revenue rows as stored"""

    @abstractmethod
    def latest_invoices(self, limit: int) -> List[Row]:
        """Newest invoices by date, joined with customer name, email and image"""

    @abstractmethod
    def count_invoices(self) -> int:
        ...

    @abstractmethod
    def count_customers(self) -> int:
        ...

    @abstractmethod
    def sum_invoice_amounts(self, status: str) -> int:
        """Total amount in cents of invoices with the given status"""

    @abstractmethod
    def search_invoices(self, query: str, limit: int, offset: int) -> List[Row]:
        """
        Invoices joined with their customer whose customer name, customer
        email, amount, date or status contains ``query`` (case-insensitive),
        newest first.
        """

    @abstractmethod
    def count_matching_invoices(self, query: str) -> int:
        """Number of rows search_invoices would match without paging"""

    @abstractmethod
    def get_invoice(self, invoice_id: str) -> Optional[Row]:
        ...

    @abstractmethod
    def list_customers(self) -> List[Row]:
        """Id and name of every customer, by name"""

    @abstractmethod
    def search_customers(self, query: str) -> List[Row]:
        """
        Customers whose name or email contains ``query`` with their invoice
        count and pending/paid totals in cents, by name.
        """

    @abstractmethod
    def insert_invoice(self, row: Row) -> None:
        ...

    @abstractmethod
    def update_invoice(self, invoice_id: str, changes: Row) -> None:
        ...

    @abstractmethod
    def delete_invoice(self, invoice_id: str) -> None:
        ...


class SupabaseDatabaseClient(DatabaseClient):
    """
    Supabase-backed store.

    Single-table reads and writes go through the table query builder.
    Joined searches and aggregates call the Postgres functions defined in
    sql/schema.sql via rpc, so every value reaches SQL as a named
    parameter.
    """

    def __init__(self, supabase: Client):
        self.supabase = supabase

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseDatabaseClient":
        return cls(create_client(settings.supabase_url, settings.supabase_key))

    def list_revenue(self) -> List[Row]:
        result = self.supabase.table("revenue").select("*").execute()
        return result.data or []

    def latest_invoices(self, limit: int) -> List[Row]:
        result = (
            self.supabase.table("invoices")
            .select("id, amount, date, customers(name, email, image_url)")
            .order("date", desc=True)
            .order("id")
            .limit(limit)
            .execute()
        )
        return [self._flatten_customer(row) for row in result.data or []]

    def count_invoices(self) -> int:
        result = self.supabase.table("invoices").select("id", count="exact", head=True).execute()
        return result.count or 0

    def count_customers(self) -> int:
        result = self.supabase.table("customers").select("id", count="exact", head=True).execute()
        return result.count or 0

    def sum_invoice_amounts(self, status: str) -> int:
        result = self.supabase.rpc("sum_invoice_amounts", {"invoice_status": status}).execute()
        return int(self._scalar(result.data) or 0)

    def search_invoices(self, query: str, limit: int, offset: int) -> List[Row]:
        result = self.supabase.rpc(
            "search_invoices",
            {"query": query, "page_size": limit, "page_offset": offset},
        ).execute()
        return result.data or []

    def count_matching_invoices(self, query: str) -> int:
        result = self.supabase.rpc("count_invoices_matching", {"query": query}).execute()
        return int(self._scalar(result.data) or 0)

    def get_invoice(self, invoice_id: str) -> Optional[Row]:
        result = (
            self.supabase.table("invoices")
            .select("id, customer_id, amount, status")
            .eq("id", invoice_id)
            .execute()
        )
        if result.data and len(result.data) > 0:
            return result.data[0]
        return None

    def list_customers(self) -> List[Row]:
        result = self.supabase.table("customers").select("id, name").order("name").execute()
        return result.data or []

    def search_customers(self, query: str) -> List[Row]:
        result = self.supabase.rpc("search_customers", {"query": query}).execute()
        return result.data or []

    def insert_invoice(self, row: Row) -> None:
        self.supabase.table("invoices").insert(row).execute()

    def update_invoice(self, invoice_id: str, changes: Row) -> None:
        self.supabase.table("invoices").update(changes).eq("id", invoice_id).execute()

    def delete_invoice(self, invoice_id: str) -> None:
        self.supabase.table("invoices").delete().eq("id", invoice_id).execute()

    @staticmethod
    def _flatten_customer(row: Row) -> Row:
        """Lift the embedded ``customers`` object up into the invoice row"""
        flat = {key: value for key, value in row.items() if key != "customers"}
        customer = row.get("customers") or {}
        if isinstance(customer, list):
            customer = customer[0] if customer else {}
        flat.update(customer)
        return flat

    @staticmethod
    def _scalar(data: Any) -> Any:
        # Scalar functions come back bare; set-returning ones as [{name: value}]
        if isinstance(data, list):
            if not data:
                return None
            first = data[0]
            return next(iter(first.values())) if isinstance(first, dict) else first
        return data
