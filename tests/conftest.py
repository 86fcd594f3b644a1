from unittest.mock import create_autospec

import pytest
from fastapi.testclient import TestClient

from dashboard_api.database import DatabaseClient
from dashboard_api.main import create_app
from dashboard_api.memory import InMemoryDatabaseClient
from dashboard_api.revalidation import ViewRevalidator

CUSTOMERS = [
    {"id": "c1", "name": "Acme Corp", "email": "billing@acme.com", "image_url": "/customers/acme.png"},
    {"id": "c2", "name": "Delba de Oliveira", "email": "delba@oliveira.com", "image_url": "/customers/delba.png"},
    {"id": "c3", "name": "Lee Robinson", "email": "lee@robinson.com", "image_url": "/customers/lee.png"},
]

INVOICES = [
    {"id": "i1", "customer_id": "c1", "amount": 1000, "status": "paid", "date": "2024-01-10"},
    {"id": "i2", "customer_id": "c1", "amount": 2000, "status": "paid", "date": "2024-02-15"},
    {"id": "i3", "customer_id": "c2", "amount": 500, "status": "pending", "date": "2024-03-01"},
]

REVENUE = [
    {"month": "Jan", "revenue": 2000},
    {"month": "Feb", "revenue": 1800},
    {"month": "Mar", "revenue": 4500},
]


class RecordingViewRevalidator(ViewRevalidator):
    def __init__(self):
        self.paths = []

    def revalidate_path(self, path):
        self.paths.append(path)


@pytest.fixture
def db():
    return InMemoryDatabaseClient(customers=CUSTOMERS, invoices=INVOICES, revenue=REVENUE)


@pytest.fixture
def revalidator():
    return RecordingViewRevalidator()


@pytest.fixture
def broken_db():
    """A store whose every call fails"""
    mock = create_autospec(DatabaseClient, instance=True)
    for name in DatabaseClient.__abstractmethods__:
        getattr(mock, name).side_effect = RuntimeError("connection refused")
    return mock


@pytest.fixture
def client(db, revalidator):
    return TestClient(create_app(db=db, revalidator=revalidator))


@pytest.fixture
def make_invoices():
    """Builds ``count`` invoices on distinct dates, oldest first"""

    def build(count, customer_id="c1", status="pending"):
        return [
            {
                "id": f"gen-{customer_id}-{n}",
                "customer_id": customer_id,
                "amount": 100 * (n + 1),
                "status": status,
                "date": f"2023-{(n // 28) + 1:02d}-{(n % 28) + 1:02d}",
            }
            for n in range(count)
        ]

    return build