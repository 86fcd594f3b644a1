"""Display helpers shared by the query layer and the dashboard views."""

from decimal import Decimal, ROUND_HALF_UP
from typing import List, Sequence, Tuple, Union

from .models import Revenue

Number = Union[int, float, Decimal, str]


def format_currency(amount: Number) -> str:
    """Format an amount in cents as US dollars, e.g. 123456 -> "$1,234.56"."""
    dollars = (Decimal(str(amount or 0)) / 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"


def to_minor_units(amount: Number) -> int:
    """Convert a dollar amount to whole cents, rounding half up."""
    cents = Decimal(str(amount)) * 100
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def generate_y_axis(revenue: Sequence[Revenue]) -> Tuple[List[str], int]:
    """
    Build the labels for the revenue chart's y axis.

    The highest revenue is rounded up to the next thousand and labels step
    down from there to $0K. Returns the labels and that top value.
    """
    highest = max((r.revenue for r in revenue), default=0)
    top_label = int(-(-highest // 1000) * 1000)
    labels = [f"${i // 1000}K" for i in range(top_label, -1, -1000)]
    return labels, top_label


def generate_pagination(current_page: int, total_pages: int) -> List[Union[int, str]]:
    """
    Page numbers for the invoice table's pagination control.

    Up to seven pages are all listed; past that, ellipses stand in for
    the pages away from the start, the end and the current page.
    """
    if total_pages <= 7:
        return list(range(1, total_pages + 1))

    if current_page <= 3:
        return [1, 2, 3, "...", total_pages - 1, total_pages]

    if current_page >= total_pages - 2:
        return [1, 2, "...", total_pages - 2, total_pages - 1, total_pages]

    return [
        1,
        "...",
        current_page - 1,
        current_page,
        current_page + 1,
        "...",
        total_pages,
    ]
