"""Report building: join investments to companies and serialize to CSV."""
from __future__ import annotations

import csv
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_HALF_UP, Decimal, localcontext
from io import StringIO
from typing import Iterable, List
from urllib.parse import quote

from .models import Company, Investment, ReportRow

CSV_HEADER = ("User", "First Name", "Last Name", "Date", "Holding", "Value")
VALUE_PRECISION = Decimal("0.01")
# Upper bound on the magnitude of a reportable value (1e400); JSON floats top out near 1.8e308.
MAX_VALUE_EXPONENT = 400

# Characters encodeURIComponent leaves untouched besides ASCII alphanumerics.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def investment_value(investment: Investment) -> Decimal:
    """Return ``investmentTotal * investmentPercentage`` rounded to cents."""

    with localcontext() as ctx:
        # Unbounded precision keeps the product and its quantized form exact.
        ctx.prec = MAX_PREC
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        product = investment.investment_total * investment.investment_percentage
        if product.adjusted() > MAX_VALUE_EXPONENT:
            raise ValueError(
                f"investmentTotal * investmentPercentage is too large to report: {product}"
            )
        return product.quantize(VALUE_PRECISION, rounding=ROUND_HALF_UP)


def build_report_rows(
    investments: Iterable[Investment], companies: Iterable[Company]
) -> List[ReportRow]:
    """Join each investment to the first company sharing its company id.

    Investments without a matching company get an empty ``holding``.
    """

    holdings: dict[str, str] = {}
    for company in companies:
        holdings.setdefault(company.id, company.name)

    return [
        ReportRow(
            user=investment.user_id,
            first_name=investment.first_name,
            last_name=investment.last_name,
            date=investment.date,
            holding=holdings.get(investment.financial_company_id, ""),
            value=investment_value(investment),
        )
        for investment in investments
    ]


def serialize_csv(rows: Iterable[ReportRow]) -> str:
    """Render rows as CSV text with every field quoted."""

    buffer = StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\r\n")
    writer.writerow(CSV_HEADER)
    for row in rows:
        writer.writerow(
            [row.user, row.first_name, row.last_name, row.date, row.holding, str(row.value)]
        )
    return buffer.getvalue()


def encode_for_export(csv_content: str) -> str:
    """Percent-encode CSV text the way JavaScript's encodeURIComponent does."""

    return quote(csv_content, safe=_URI_COMPONENT_SAFE)


__all__ = [
    "CSV_HEADER",
    "build_report_rows",
    "encode_for_export",
    "investment_value",
    "serialize_csv",
]
