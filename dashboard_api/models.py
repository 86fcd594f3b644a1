from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Union
from decimal import Decimal
from enum import Enum

class InvoiceStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"

class Invoice(BaseModel):
    id: str
    customer_id: str
    amount: int = Field(ge=0)
    status: InvoiceStatus
    date: str

class Customer(BaseModel):
    id: str
    name: str
    email: str
    image_url: Optional[str] = None

class Revenue(BaseModel):
    month: str
    revenue: float

class RevenueChart(BaseModel):
    revenue: List[Revenue]
    y_axis_labels: List[str]
    top_label: int

class LatestInvoice(BaseModel):
    id: str
    name: str
    email: str
    image_url: Optional[str] = None
    amount: str

class InvoicesTableRow(BaseModel):
    id: str
    customer_id: str
    name: str
    email: str
    image_url: Optional[str] = None
    date: str
    amount: int
    status: InvoiceStatus

class CustomersTableRow(BaseModel):
    id: str
    name: str
    email: str
    image_url: Optional[str] = None
    total_invoices: int
    total_pending: str
    total_paid: str

class CustomerField(BaseModel):
    id: str
    name: str

class InvoiceForm(BaseModel):
    id: str
    customer_id: str
    amount: int
    status: InvoiceStatus

class CardData(BaseModel):
    number_of_invoices: int
    number_of_customers: int
    total_paid_invoices: str
    total_pending_invoices: str

# Largest amount whose cents fit the invoices.amount integer column
MAX_AMOUNT = Decimal("21474836.47")

class InvoiceFormInput(BaseModel):
    """Submitted create/update form fields, as named by the form"""
    model_config = ConfigDict(str_strip_whitespace=True)

    customer_id: str = Field(alias="customerId", min_length=1)
    amount: Decimal = Field(ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    status: InvoiceStatus

class InvoicesPage(BaseModel):
    invoices: List[InvoicesTableRow]
    page: int
    total_pages: int
    pagination: List[Union[int, str]]

class ActionResult(BaseModel):
    success: bool
    message: str
    redirect_to: Optional[str] = None
    errors: Dict[str, List[str]] = Field(default_factory=dict)

class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: Optional[str] = None
    errors: Dict[str, List[str]] = Field(default_factory=dict)
