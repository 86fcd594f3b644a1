from typing import Dict, List, Optional


class DashboardError(Exception):
    """Base class for errors raised by the dashboard data layer"""


class ConfigurationError(DashboardError):
    """Required environment configuration is missing"""


class DataAccessError(DashboardError):
    """A read against the store failed; the message names the operation"""


class RevalidationError(DashboardError):
    """The downstream view cache could not be told to refresh"""


class InvoiceValidationError(DashboardError):
    """Submitted invoice form data is missing fields or malformed.

    ``errors`` maps each offending form field to its messages so the form
    can render them next to the input.
    """

    def __init__(self, message: str, errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}
