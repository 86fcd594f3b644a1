from fastapi import APIRouter, Depends
from typing import List
from .. import data
from ..database import DatabaseClient
from ..dependencies import get_db
from ..formatting import generate_y_axis
from ..models import CardData, LatestInvoice, RevenueChart

router = APIRouter(
    prefix="/api/dashboard",
    tags=["dashboard"]
)

@router.get("/revenue", response_model=RevenueChart)
def get_revenue(db: DatabaseClient = Depends(get_db)):
    revenue = data.fetch_revenue(db)
    labels, top_label = generate_y_axis(revenue)
    return RevenueChart(revenue=revenue, y_axis_labels=labels, top_label=top_label)

@router.get("/latest-invoices", response_model=List[LatestInvoice])
def get_latest_invoices(db: DatabaseClient = Depends(get_db)):
    return data.fetch_latest_invoices(db)

@router.get("/cards", response_model=CardData)
def get_card_data(db: DatabaseClient = Depends(get_db)):
    return data.fetch_card_data(db)
