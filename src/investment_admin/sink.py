"""Persistence and forwarding of generated reports."""
from __future__ import annotations

import logging
from pathlib import Path

from .clients import InvestmentsClient
from .errors import ReportSaveError
from .report import encode_for_export

LOGGER = logging.getLogger(__name__)


class ReportSink:
    """Writes the CSV report to ``path`` and forwards it upstream.

    The file is overwritten on every run; concurrent writers race and the
    last one wins.
    """

    def __init__(self, path: Path, investments: InvestmentsClient) -> None:
        self.path = Path(path)
        self.investments = investments

    def save(self, csv_content: str) -> Path:
        """Write the report, leaving any previous file untouched if encoding fails."""

        try:
            data = csv_content.encode("utf-8")
            self.path.write_bytes(data)
        except (OSError, UnicodeError) as exc:
            raise ReportSaveError(self.path, exc) from exc
        LOGGER.info("Saved report to %s", self.path)
        return self.path

    def forward(self, csv_content: str) -> None:
        self.investments.export_report(encode_for_export(csv_content))
        LOGGER.info("Forwarded report to the investments service")


__all__ = ["ReportSink"]
