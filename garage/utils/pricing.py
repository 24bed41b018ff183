from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, NamedTuple

from garage.config import settings

WHOLE_UNIT = Decimal("1")


class InvoiceTotals(NamedTuple):
    garage_stay: Decimal
    subtotal:    Decimal
    tax:         Decimal
    total:       Decimal


def to_decimal(value) -> Decimal:
    """Numeric columns come back as Decimal; request values may be int or str."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def apply_tax(subtotal, tax_rate=None) -> tuple[Decimal, Decimal]:
    """Return (tax, total). Tax is rounded half-up to whole currency units."""
    rate = to_decimal(settings.TAX_RATE if tax_rate is None else tax_rate)
    subtotal = to_decimal(subtotal)
    tax = (subtotal * rate).quantize(WHOLE_UNIT, rounding=ROUND_HALF_UP)
    return tax, subtotal + tax


def compute_totals(
    item_totals: Iterable,
    days_in_garage: int,
    garage_stay_rate,
    tax_rate=None,
) -> InvoiceTotals:
    """
    subtotal = sum(line totals) + days_in_garage * garage_stay_rate
    tax      = round(subtotal * tax_rate)
    total    = subtotal + tax
    """
    items_total = sum((to_decimal(t) for t in item_totals), Decimal("0"))
    garage_stay = Decimal(int(days_in_garage or 0)) * to_decimal(garage_stay_rate)
    subtotal = items_total + garage_stay
    tax, total = apply_tax(subtotal, tax_rate)
    return InvoiceTotals(garage_stay=garage_stay, subtotal=subtotal, tax=tax, total=total)


def format_currency(value, currency: str | None = None) -> str:
    """RWF has no minor unit: 'RWF 17,700'."""
    amount = to_decimal(value).quantize(WHOLE_UNIT, rounding=ROUND_HALF_UP)
    return f"{currency or settings.CURRENCY} {amount:,.0f}"


def format_amount(value) -> str:
    """Plain amount with two decimals, used on payment reports: '12,500.00'."""
    return f"{to_decimal(value):,.2f}"
