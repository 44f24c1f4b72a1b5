"""Client for the upstream investments service."""
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping
from urllib.parse import quote

from ..models import Investment
from .base import UpstreamClient
from .utils import parse_decimal, parse_text

LOGGER = logging.getLogger(__name__)


def investment_from_payload(payload: Mapping[str, Any]) -> Investment:
    """Build an :class:`Investment` from one upstream JSON object."""

    return Investment(
        id=parse_text(payload.get("id")),
        user_id=parse_text(payload.get("userId")),
        first_name=parse_text(payload.get("firstName")),
        last_name=parse_text(payload.get("lastName")),
        financial_company_id=parse_text(payload.get("financialCompanyId")),
        date=parse_text(payload.get("date")),
        investment_total=parse_decimal(payload.get("investmentTotal"), "investmentTotal"),
        investment_percentage=parse_decimal(
            payload.get("investmentPercentage"), "investmentPercentage"
        ),
    )


class InvestmentsClient(UpstreamClient):
    """Reads investments and accepts CSV exports."""

    service = "investments"

    def get_investment(self, investment_id: str) -> Any:
        """Return the upstream JSON body for one investment, untouched."""

        return self.get_json(f"investments/{quote(str(investment_id), safe='')}")

    def list_investments(self) -> Iterable[Investment]:
        payload = self.get_json_list("investments")
        LOGGER.debug("Received %d investments", len(payload))
        return [investment_from_payload(item) for item in payload]

    def export_report(self, csv_content_encoded: str) -> None:
        """Forward a URL-encoded CSV report to the export endpoint."""

        self.post_json("investments/export", {"csvContentEncoded": csv_content_encoded})
        LOGGER.debug("Exported report (%d encoded characters)", len(csv_content_encoded))


__all__ = ["InvestmentsClient", "investment_from_payload"]
