from fastapi import APIRouter, Depends, Form, HTTPException, Query, Path
from fastapi.responses import RedirectResponse
from typing import Optional
from .. import actions, data
from ..database import DatabaseClient
from ..dependencies import get_db, get_revalidator
from ..formatting import generate_pagination
from ..models import ActionResult, InvoiceForm, InvoicesPage
from ..revalidation import ViewRevalidator

router = APIRouter(
    prefix="/api/invoices",
    tags=["invoices"]
)

def _finish(result: ActionResult):
    """Redirect on success; surface a failed write instead of hiding it"""
    if not result.success:
        raise HTTPException(status_code=500, detail=result.message)
    if result.redirect_to:
        return RedirectResponse(result.redirect_to, status_code=303)
    return result

@router.get("", response_model=InvoicesPage)
def list_invoices(
    query: str = Query("", description="Match customer name, email, amount, date or status"),
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    db: DatabaseClient = Depends(get_db)
):
    invoices = data.fetch_filtered_invoices(db, query, page)
    total_pages = data.fetch_invoices_pages(db, query)
    return InvoicesPage(
        invoices=invoices,
        page=page,
        total_pages=total_pages,
        pagination=generate_pagination(page, total_pages)
    )

@router.get("/pages", response_model=int)
def get_invoices_pages(
    query: str = Query("", description="Same filter as the invoice listing"),
    db: DatabaseClient = Depends(get_db)
):
    return data.fetch_invoices_pages(db, query)

@router.get("/{invoice_id}", response_model=InvoiceForm)
def get_invoice(
    invoice_id: str = Path(..., description="Invoice ID"),
    db: DatabaseClient = Depends(get_db)
):
    invoice = data.fetch_invoice_by_id(db, invoice_id)
    if not invoice:
        raise HTTPException(
            status_code=404,
            detail=f"Invoice {invoice_id} not found"
        )
    return invoice

@router.post("")
def create_invoice(
    customerId: Optional[str] = Form(None),
    amount: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    db: DatabaseClient = Depends(get_db),
    revalidator: ViewRevalidator = Depends(get_revalidator)
):
    form = {"customerId": customerId, "amount": amount, "status": status}
    return _finish(actions.create_invoice(db, revalidator, form))

@router.post("/{invoice_id}")
def update_invoice(
    invoice_id: str = Path(..., description="Invoice ID to update"),
    customerId: Optional[str] = Form(None),
    amount: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    db: DatabaseClient = Depends(get_db),
    revalidator: ViewRevalidator = Depends(get_revalidator)
):
    form = {"customerId": customerId, "amount": amount, "status": status}
    return _finish(actions.update_invoice(db, revalidator, invoice_id, form))

@router.post("/{invoice_id}/delete")
def delete_invoice(
    invoice_id: str = Path(..., description="Invoice ID to delete"),
    db: DatabaseClient = Depends(get_db),
    revalidator: ViewRevalidator = Depends(get_revalidator)
):
    result = actions.delete_invoice(db, revalidator, invoice_id)
    if not result.success:
        raise HTTPException(status_code=500, detail=result.message)
    return RedirectResponse(actions.INVOICES_PATH, status_code=303)
