"""
Invoice mutations behind the dashboard's create, edit and delete forms.

Each action validates the submitted form, writes to the store, marks the
invoice listing stale and reports back with an ActionResult. Invalid input
raises InvoiceValidationError before anything is written. A failed write
is logged and returned as an unsuccessful result without revalidating or
redirecting, so the form can show the failure.
"""

from datetime import date
from typing import Any, Dict, List, Mapping

from pydantic import ValidationError

from .database import DatabaseClient
from .errors import InvoiceValidationError, RevalidationError
from .formatting import to_minor_units
from .logs import logger
from .models import ActionResult, InvoiceFormInput
from .revalidation import ViewRevalidator

log = logger(__name__)

INVOICES_PATH = "/dashboard/invoices"

FIELD_MESSAGES = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount between $0 and $21,474,836.47.",
    "status": "Please select an invoice status.",
}


def _parse_form(form_data: Mapping[str, Any], verb: str) -> InvoiceFormInput:
    raw = {field: form_data.get(field) for field in FIELD_MESSAGES}
    try:
        return InvoiceFormInput.model_validate(raw)
    except ValidationError as e:
        errors: Dict[str, List[str]] = {}
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "form"
            message = FIELD_MESSAGES.get(field, error["msg"])
            if message not in errors.setdefault(field, []):
                errors[field].append(message)
        raise InvoiceValidationError(f"Missing Fields. Failed to {verb} Invoice.", errors) from e


def _revalidate(revalidator: ViewRevalidator) -> None:
    try:
        revalidator.revalidate_path(INVOICES_PATH)
    except RevalidationError as e:
        # The write already happened; a stale listing is not worth failing it
        log.warning("%s", e)


def create_invoice(db: DatabaseClient, revalidator: ViewRevalidator, form_data: Mapping[str, Any]) -> ActionResult:
    fields = _parse_form(form_data, "Create")
    row = {
        "customer_id": fields.customer_id,
        "amount": to_minor_units(fields.amount),
        "status": fields.status.value,
        "date": date.today().isoformat(),
    }

    try:
        db.insert_invoice(row)
    except Exception as e:
        log.exception("Error creating invoice for customer %s: %s", fields.customer_id, e)
        return ActionResult(success=False, message="Database Error: Failed to Create Invoice.")

    log.info("Created invoice for customer %s (%d cents, %s)", row["customer_id"], row["amount"], row["status"])
    _revalidate(revalidator)
    return ActionResult(success=True, message="Created Invoice.", redirect_to=INVOICES_PATH)


def update_invoice(
    db: DatabaseClient,
    revalidator: ViewRevalidator,
    invoice_id: str,
    form_data: Mapping[str, Any],
) -> ActionResult:
    """Change an invoice's customer, amount and status; its id and date stay as created."""
    fields = _parse_form(form_data, "Update")
    changes = {
        "customer_id": fields.customer_id,
        "amount": to_minor_units(fields.amount),
        "status": fields.status.value,
    }

    try:
        db.update_invoice(invoice_id, changes)
    except Exception as e:
        log.exception("Error updating invoice %s: %s", invoice_id, e)
        return ActionResult(success=False, message="Database Error: Failed to Update Invoice.")

    log.info("Updated invoice %s", invoice_id)
    _revalidate(revalidator)
    return ActionResult(success=True, message="Updated Invoice.", redirect_to=INVOICES_PATH)


def delete_invoice(db: DatabaseClient, revalidator: ViewRevalidator, invoice_id: str) -> ActionResult:
    # Unknown ids delete nothing and still succeed
    try:
        db.delete_invoice(invoice_id)
    except Exception as e:
        log.exception("Error deleting invoice %s: %s", invoice_id, e)
        return ActionResult(success=False, message="Database Error: Failed to Delete Invoice.")

    log.info("Deleted invoice %s", invoice_id)
    _revalidate(revalidator)
    return ActionResult(success=True, message="Deleted Invoice.")
