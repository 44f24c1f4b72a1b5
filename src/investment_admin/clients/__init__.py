"""Clients for the upstream investments and financial companies services."""
from __future__ import annotations

import logging

import requests

from ..config import Settings
from .base import UpstreamClient
from .companies import FinancialCompaniesClient
from .investments import InvestmentsClient

LOGGER = logging.getLogger(__name__)


def create_clients(
    settings: Settings, session: requests.Session | None = None
) -> tuple[InvestmentsClient, FinancialCompaniesClient]:
    """Instantiate both upstream clients from the runtime settings."""

    LOGGER.debug(
        "Using investments service at %s and financial companies service at %s",
        settings.investments_service_url,
        settings.financial_companies_service_url,
    )
    investments = InvestmentsClient(
        settings.investments_service_url, settings.request_timeout, session=session
    )
    companies = FinancialCompaniesClient(
        settings.financial_companies_service_url, settings.request_timeout, session=session
    )
    return investments, companies


__all__ = [
    "create_clients",
    "FinancialCompaniesClient",
    "InvestmentsClient",
    "UpstreamClient",
]
