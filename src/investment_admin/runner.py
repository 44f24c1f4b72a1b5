"""Command line entry point for the investment admin service."""
from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Iterable

import uvicorn

from .app import create_app
from .clients import create_clients
from .config import Settings
from .logging_utils import configure_logging
from .service import ReportService
from .sink import ReportSink

LOGGER = logging.getLogger(__name__)


def serve(settings: Settings, host: str, port: int | None = None) -> None:
    """Run the HTTP API with uvicorn."""

    app = create_app(settings)
    resolved_port = settings.port if port is None else port
    LOGGER.info("Server running on port %d", resolved_port)
    uvicorn.run(app, host=host, port=resolved_port, log_config=None)


def generate_report(settings: Settings) -> int:
    """Generate and forward the report once; return a process exit code."""

    investments, companies = create_clients(settings)
    sink = ReportSink(settings.report_path, investments)
    service = ReportService(investments, companies, sink)
    try:
        result = asyncio.run(service.generate())
    except Exception:
        LOGGER.exception("Report generation failed")
        return 1
    LOGGER.info("Wrote %d rows to %s", result.row_count, result.path)
    return 0


def parse_args(args: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging output",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    serve_parser = commands.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Interface to bind")
    serve_parser.add_argument(
        "--port", type=int, default=None, help="Port to listen on (defaults to settings)"
    )

    commands.add_parser("generate-report", help="Generate and forward the CSV report once")
    return parser.parse_args(args=args)


def main(argv: Iterable[str] | None = None) -> int:
    options = parse_args(argv)
    configure_logging("DEBUG" if options.verbose else None)
    settings = Settings.load()
    if options.command == "serve":
        serve(settings, options.host, options.port)
        return 0
    return generate_report(settings)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
