import pytest

from conftest import CUSTOMERS
from dashboard_api import data
from dashboard_api.errors import DataAccessError
from dashboard_api.memory import InMemoryDatabaseClient


def test_fetch_revenue_returns_rows_unchanged(db):
    revenue = data.fetch_revenue(db)

    assert [(r.month, r.revenue) for r in revenue] == [("Jan", 2000), ("Feb", 1800), ("Mar", 4500)]


def test_fetch_latest_invoices_newest_first_with_customer(db):
    latest = data.fetch_latest_invoices(db)

    assert [i.id for i in latest] == ["i3", "i2", "i1"]
    assert latest[0].name == "Delba de Oliveira"
    assert latest[0].email == "delba@oliveira.com"
    assert latest[0].image_url == "/customers/delba.png"
    assert latest[0].amount == "$5.00"


def test_fetch_latest_invoices_limited_to_five(make_invoices):
    db = InMemoryDatabaseClient(customers=CUSTOMERS, invoices=make_invoices(9))

    latest = data.fetch_latest_invoices(db)

    assert [i.id for i in latest] == [f"gen-c1-{n}" for n in range(8, 3, -1)]


def test_fetch_card_data(db):
    cards = data.fetch_card_data(db)

    assert cards.number_of_invoices == 3
    assert cards.number_of_customers == 3
    assert cards.total_paid_invoices == "$30.00"
    assert cards.total_pending_invoices == "$5.00"


def test_fetch_card_data_empty_store():
    cards = data.fetch_card_data(InMemoryDatabaseClient())

    assert cards.number_of_invoices == 0
    assert cards.total_paid_invoices == "$0.00"
    assert cards.total_pending_invoices == "$0.00"


def test_fetch_invoices_pages_rounds_up(make_invoices):
    db = InMemoryDatabaseClient(customers=CUSTOMERS, invoices=make_invoices(13))

    assert data.fetch_invoices_pages(db, "acme") == 3


def test_fetch_invoices_pages_zero_when_nothing_matches(db):
    assert data.fetch_invoices_pages(db, "no such customer") == 0


@pytest.mark.parametrize("count, pages", [(0, 0), (1, 1), (6, 1), (7, 2), (12, 2), (13, 3)])
def test_fetch_invoices_pages_matches_count(make_invoices, count, pages):
    db = InMemoryDatabaseClient(customers=CUSTOMERS, invoices=make_invoices(count))

    assert data.fetch_invoices_pages(db, "") == pages


def test_filtered_invoice_pages_tile_the_result_set(make_invoices):
    invoices = make_invoices(13) + make_invoices(4, customer_id="c2")
    db = InMemoryDatabaseClient(customers=CUSTOMERS, invoices=invoices)

    pages = [data.fetch_filtered_invoices(db, "acme", page) for page in (1, 2, 3, 4)]

    assert [len(p) for p in pages] == [6, 6, 1, 0]
    seen = [row.id for page in pages for row in page]
    assert seen == [f"gen-c1-{n}" for n in range(12, -1, -1)]


def test_filtered_invoice_pages_tile_when_dates_tie():
    invoices = [
        {"id": f"tie-{n:02d}", "customer_id": "c1", "amount": 100, "status": "paid", "date": "2024-05-01"}
        for n in (7, 2, 9, 0, 5, 1, 8, 3)
    ] + [{"id": "older", "customer_id": "c1", "amount": 100, "status": "paid", "date": "2024-04-01"}]
    db = InMemoryDatabaseClient(customers=CUSTOMERS, invoices=invoices)

    first = [r.id for r in data.fetch_filtered_invoices(db, "acme", 1)]
    second = [r.id for r in data.fetch_filtered_invoices(db, "acme", 2)]

    assert first == ["tie-00", "tie-01", "tie-02", "tie-03", "tie-05", "tie-07"]
    assert second == ["tie-08", "tie-09", "older"]
    assert data.fetch_invoices_pages(db, "acme") == 2


@pytest.mark.parametrize("query", ["%", "_", "a%c", "2024_01"])
def test_filtered_invoices_take_wildcards_literally(db, query):
    assert data.fetch_filtered_invoices(db, query, 1) == []
    assert data.fetch_invoices_pages(db, query) == 0


def test_filtered_invoices_newest_first(db):
    rows = data.fetch_filtered_invoices(db, "", 1)

    assert [r.date for r in rows] == ["2024-03-01", "2024-02-15", "2024-01-10"]
    assert rows[0].name == "Delba de Oliveira"
    assert rows[0].amount == 500


@pytest.mark.parametrize(
    "query, expected",
    [
        ("ACME", {"i1", "i2"}),
        ("oliveira.com", {"i3"}),
        ("2000", {"i2"}),
        ("2024-01", {"i1"}),
        ("PEND", {"i3"}),
        ("paid", {"i1", "i2"}),
    ],
)
def test_filtered_invoices_match_each_field(db, query, expected):
    rows = data.fetch_filtered_invoices(db, query, 1)

    assert {r.id for r in rows} == expected


def test_filtered_invoices_page_below_one_is_first_page(db):
    assert data.fetch_filtered_invoices(db, "", 0) == data.fetch_filtered_invoices(db, "", 1)


def test_fetch_invoice_by_id_keeps_cents(db):
    invoice = data.fetch_invoice_by_id(db, "i2")

    assert invoice.id == "i2"
    assert invoice.customer_id == "c1"
    assert invoice.amount == 2000
    assert invoice.status.value == "paid"


def test_fetch_invoice_by_id_missing(db):
    assert data.fetch_invoice_by_id(db, "nope") is None


def test_fetch_customers_by_name():
    db = InMemoryDatabaseClient(customers=list(reversed(CUSTOMERS)))

    customers = data.fetch_customers(db)

    assert [c.name for c in customers] == ["Acme Corp", "Delba de Oliveira", "Lee Robinson"]
    assert customers[0].id == "c1"


def test_fetch_filtered_customers_totals(db):
    customers = {c.id: c for c in data.fetch_filtered_customers(db, "")}

    assert customers["c1"].total_invoices == 2
    assert customers["c1"].total_paid == "$30.00"
    assert customers["c1"].total_pending == "$0.00"
    assert customers["c2"].total_pending == "$5.00"
    assert customers["c3"].total_invoices == 0
    assert customers["c3"].total_paid == "$0.00"


def test_fetch_filtered_customers_matches_name_or_email(db):
    assert [c.id for c in data.fetch_filtered_customers(db, "ROBINSON.com")] == ["c3"]
    assert [c.id for c in data.fetch_filtered_customers(db, "de oli")] == ["c2"]
    assert data.fetch_filtered_customers(db, "paid") == []


@pytest.mark.parametrize(
    "fetch, args, message",
    [
        (data.fetch_revenue, (), "Failed to fetch revenue data."),
        (data.fetch_latest_invoices, (), "Failed to fetch the latest invoices."),
        (data.fetch_card_data, (), "Failed to fetch card data."),
        (data.fetch_filtered_invoices, ("acme", 1), "Failed to fetch invoices."),
        (data.fetch_invoices_pages, ("acme",), "Failed to fetch total number of invoices."),
        (data.fetch_invoice_by_id, ("i1",), "Failed to fetch invoice."),
        (data.fetch_customers, (), "Failed to fetch all customers."),
        (data.fetch_filtered_customers, ("acme",), "Failed to fetch customer table."),
    ],
)
def test_read_failures_name_the_operation(broken_db, caplog, fetch, args, message):
    with pytest.raises(DataAccessError, match=message) as excinfo:
        fetch(broken_db, *args)

    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert "connection refused" in caplog.text
