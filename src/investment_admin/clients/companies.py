"""Client for the upstream financial companies service."""
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from ..models import Company
from .base import UpstreamClient
from .utils import parse_text

LOGGER = logging.getLogger(__name__)


def company_from_payload(payload: Mapping[str, Any]) -> Company:
    return Company(id=parse_text(payload.get("id")), name=parse_text(payload.get("name")))


class FinancialCompaniesClient(UpstreamClient):
    """Reads the list of financial companies."""

    service = "financial-companies"

    def list_companies(self) -> Iterable[Company]:
        payload = self.get_json_list("companies")
        LOGGER.debug("Received %d companies", len(payload))
        return [company_from_payload(item) for item in payload]


__all__ = ["FinancialCompaniesClient", "company_from_payload"]
