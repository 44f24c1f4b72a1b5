"""Error taxonomy and the error body returned to API consumers."""
from __future__ import annotations

import traceback
from pathlib import Path
from typing import Any, Optional


class InvestmentAdminError(Exception):
    """Base class for failures the service knows how to report."""

    kind = "internal"

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class UpstreamError(InvestmentAdminError):
    """An upstream call failed: network error, timeout, error status or bad body."""

    kind = "upstream"

    def __init__(
        self,
        service: str,
        message: str,
        cause: Optional[BaseException] = None,
        status: Optional[int] = None,
    ) -> None:
        super().__init__(message, cause)
        self.service = service
        self.status = status


class NotFoundError(UpstreamError):
    """The upstream service reported that the resource does not exist."""


class ReportSaveError(InvestmentAdminError):
    """Writing the CSV report to local storage failed."""

    kind = "storage"

    def __init__(self, path: Path, cause: OSError | UnicodeError) -> None:
        super().__init__(str(cause), cause)
        self.path = path


def describe_error(exc: BaseException, *, include_stack: bool) -> dict[str, Any]:
    """Return the stable ``{kind, name, message, status[, stack]}`` error shape.

    ``name`` is taken from the underlying exception when ``exc`` wraps one, so
    consumers see ``ConnectionError`` rather than our wrapper type.
    """

    origin = exc.cause if isinstance(exc, InvestmentAdminError) and exc.cause else exc
    body: dict[str, Any] = {
        "kind": getattr(exc, "kind", InvestmentAdminError.kind),
        "name": type(origin).__name__,
        "message": str(exc),
        "status": getattr(exc, "status", None),
    }
    if include_stack:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return body


__all__ = [
    "InvestmentAdminError",
    "NotFoundError",
    "ReportSaveError",
    "UpstreamError",
    "describe_error",
]
