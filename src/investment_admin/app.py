"""FastAPI application exposing investment lookups and CSV report generation."""
from __future__ import annotations

import asyncio
import logging

import requests
from fastapi import FastAPI, Response, status
from fastapi.responses import JSONResponse

from .clients import FinancialCompaniesClient, InvestmentsClient, create_clients
from .config import Settings
from .errors import NotFoundError, ReportSaveError, describe_error
from .logging_utils import configure_logging
from .service import ReportService
from .sink import ReportSink

LOGGER = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Investment not found"
REPORT_SENT_MESSAGE = "CSV report generated and sent."
SAVE_FAILED_MESSAGE = "An error occurred while saving the report."
GENERATE_FAILED_MESSAGE = "An error occurred while generating the report."


def create_app(
    settings: Settings | None = None,
    *,
    session: requests.Session | None = None,
    investments: InvestmentsClient | None = None,
    companies: FinancialCompaniesClient | None = None,
    sink: ReportSink | None = None,
) -> FastAPI:
    """Build the application around explicitly supplied collaborators.

    Anything not passed in is derived from ``settings`` (loaded from the
    environment when omitted).
    """

    settings = settings or Settings.load()
    if investments is None or companies is None:
        default_investments, default_companies = create_clients(settings, session=session)
        investments = investments or default_investments
        companies = companies or default_companies
    sink = sink or ReportSink(settings.report_path, investments)
    report_service = ReportService(investments, companies, sink)

    app = FastAPI(title="Investment Admin")
    app.state.settings = settings
    app.state.report_service = report_service

    def _error_response(message: str, exc: BaseException) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message": message,
                "error": describe_error(exc, include_stack=not settings.is_production),
            },
        )

    @app.get("/investments/{investment_id}")
    async def get_investment(investment_id: str) -> Response:
        try:
            data = await asyncio.to_thread(investments.get_investment, investment_id)
        except NotFoundError:
            LOGGER.warning("Investment %s not found upstream", investment_id)
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND, content={"message": NOT_FOUND_MESSAGE}
            )
        except Exception:
            LOGGER.exception("Failed to fetch investment %s", investment_id)
            return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return JSONResponse(content=data)

    @app.get("/generate-report")
    async def generate_report() -> JSONResponse:
        try:
            await report_service.generate()
        except ReportSaveError as exc:
            LOGGER.exception("Failed to save report to %s", exc.path)
            return _error_response(SAVE_FAILED_MESSAGE, exc)
        except Exception as exc:
            LOGGER.exception("Failed to generate report")
            return _error_response(GENERATE_FAILED_MESSAGE, exc)
        return JSONResponse(content={"message": REPORT_SENT_MESSAGE})

    return app


def get_app() -> FastAPI:
    """Application factory used by ``uvicorn --factory``."""

    configure_logging()
    return create_app()


__all__ = ["create_app", "get_app"]
