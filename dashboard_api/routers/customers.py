from fastapi import APIRouter, Depends, Query
from typing import List
from .. import data
from ..database import DatabaseClient
from ..dependencies import get_db
from ..models import CustomerField, CustomersTableRow

router = APIRouter(
    prefix="/api/customers",
    tags=["customers"]
)

@router.get("", response_model=List[CustomerField])
def list_customers(db: DatabaseClient = Depends(get_db)):
    """Customers for the invoice form's customer picker"""
    return data.fetch_customers(db)

@router.get("/search", response_model=List[CustomersTableRow])
def search_customers(
    query: str = Query("", description="Match customer name or email"),
    db: DatabaseClient = Depends(get_db)
):
    return data.fetch_filtered_customers(db, query)
