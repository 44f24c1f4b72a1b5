"""Report generation pipeline: fetch, join, save, forward."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from .clients import FinancialCompaniesClient, InvestmentsClient
from .report import build_report_rows, serialize_csv
from .sink import ReportSink

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReportResult:
    """Outcome of a successful report run."""

    path: Path
    row_count: int
    csv_content: str


class ReportService:
    """Generates the investments CSV report from the two upstream services."""

    def __init__(
        self,
        investments: InvestmentsClient,
        companies: FinancialCompaniesClient,
        sink: ReportSink,
    ) -> None:
        self.investments = investments
        self.companies = companies
        self.sink = sink

    async def generate(self) -> ReportResult:
        """Run the pipeline once.

        Both lists are fetched concurrently and the first failure aborts the
        run. :class:`~investment_admin.errors.ReportSaveError` is raised when the
        file cannot be written, in which case nothing is forwarded.
        """

        investments, companies = await asyncio.gather(
            asyncio.to_thread(self.investments.list_investments),
            asyncio.to_thread(self.companies.list_companies),
        )
        rows = build_report_rows(investments, companies)
        csv_content = serialize_csv(rows)
        LOGGER.debug("Built report with %d rows", len(rows))

        path = await asyncio.to_thread(self.sink.save, csv_content)
        await asyncio.to_thread(self.sink.forward, csv_content)
        LOGGER.info("Generated report with %d rows", len(rows))
        return ReportResult(path=path, row_count=len(rows), csv_content=csv_content)


__all__ = ["ReportResult", "ReportService"]
