"""Monetary & Tax Math

Pure functions over integer minor units (cents). Quantities and tax rates
are Decimals; every conversion back to minor units rounds half-up.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Protocol, Union

Number = Union[int, Decimal, str]


class TaxableLine(Protocol):
    """Anything carrying computed line amounts (InvoiceLine, LineAmounts)"""

    tax_rate: Decimal
    subtotal_minor: int
    tax_minor: int


@dataclass(frozen=True)
class LineAmounts:
    """Computed amounts for one line"""
    tax_rate: Decimal
    subtotal_minor: int
    tax_minor: int

    @property
    def total_minor(self) -> int:
        return self.subtotal_minor + self.tax_minor


@dataclass(frozen=True)
class TaxBreakdownEntry:
    """Taxable amount and tax collected at one rate"""
    rate: Decimal
    taxable_amount_minor: int
    tax_minor: int

    def to_dict(self) -> dict:
        return {
            "rate": str(self.rate),
            "taxable_amount_minor": self.taxable_amount_minor,
            "tax_minor": self.tax_minor,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TaxBreakdownEntry":
        return cls(
            rate=Decimal(str(data["rate"])),
            taxable_amount_minor=int(data["taxable_amount_minor"]),
            tax_minor=int(data["tax_minor"]),
        )


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal_minor: int = 0
    tax_minor: int = 0
    tax_breakdown: List[TaxBreakdownEntry] = field(default_factory=list)

    @property
    def total_minor(self) -> int:
        return self.subtotal_minor + self.tax_minor


def round_minor(amount: Decimal) -> int:
    """Round a fractional minor-unit amount half-up to an integer"""
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def line_subtotal(quantity: Number, unit_price_minor: int) -> int:
    return round_minor(Decimal(str(quantity)) * Decimal(unit_price_minor))


def line_tax(subtotal_minor: int, tax_applicable: bool, rate: Number) -> int:
    rate = Decimal(str(rate))
    if not tax_applicable or rate <= 0:
        return 0
    return round_minor(Decimal(subtotal_minor) * rate)


def line_total(subtotal_minor: int, tax_minor: int) -> int:
    return subtotal_minor + tax_minor


def compute_line(
    quantity: Number, unit_price_minor: int, tax_applicable: bool, rate: Number
) -> LineAmounts:
    """
    Compute subtotal, tax and effective tax rate for one line

    The effective rate is 0 when tax does not apply, so the line drops out
    of the tax breakdown.
    """
    rate = Decimal(str(rate))
    effective_rate = rate if tax_applicable and rate > 0 else Decimal("0")
    subtotal = line_subtotal(quantity, unit_price_minor)
    return LineAmounts(
        tax_rate=effective_rate,
        subtotal_minor=subtotal,
        tax_minor=line_tax(subtotal, tax_applicable, effective_rate),
    )


def aggregate_totals(lines: Iterable[TaxableLine]) -> InvoiceTotals:
    """
    Sum line amounts and group tax by distinct rate

    Groups keep the order in which each rate first appears. Untaxed lines
    count toward the subtotal only.
    """
    subtotal = 0
    tax = 0
    by_rate: dict = {}

    for line in lines:
        subtotal += line.subtotal_minor
        tax += line.tax_minor

        rate = Decimal(str(line.tax_rate or 0)).normalize()
        if rate > 0:
            taxable, collected = by_rate.get(rate, (0, 0))
            by_rate[rate] = (taxable + line.subtotal_minor, collected + line.tax_minor)

    breakdown = [
        TaxBreakdownEntry(rate=rate, taxable_amount_minor=taxable, tax_minor=collected)
        for rate, (taxable, collected) in by_rate.items()
    ]
    return InvoiceTotals(subtotal_minor=subtotal, tax_minor=tax, tax_breakdown=breakdown)


def balance_due(total_minor: int, amount_paid_minor: int) -> int:
    return total_minor - amount_paid_minor


def format_minor_units(minor_units: int, currency: str = "AUD") -> str:
    """Format minor units for display, e.g. 123456 -> '$1,234.56'"""
    symbols = {"AUD": "$", "USD": "$", "NZD": "$", "EUR": "€", "GBP": "£"}
    sign = "-" if minor_units < 0 else ""
    major = Decimal(abs(minor_units)) / Decimal(100)
    symbol = symbols.get(currency, f"{currency} ")
    return f"{sign}{symbol}{major:,.2f}"


def format_tax_rate(rate: Number) -> str:
    """0.1 -> '10%'"""
    percent = Decimal(str(rate)) * 100
    return f"{percent.quantize(Decimal('1'), rounding=ROUND_HALF_UP)}%"
