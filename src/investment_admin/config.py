"""Application configuration helpers."""
from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Mapping


ENV_PREFIX = "INVESTMENT_ADMIN_"

DEFAULT_INVESTMENTS_SERVICE_URL = "http://localhost:8081"
DEFAULT_FINANCIAL_COMPANIES_SERVICE_URL = "http://localhost:8082"
DEFAULT_PORT = 8083
DEFAULT_REPORT_PATH = "report.csv"
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_ENVIRONMENT = "development"


def _resolve_env_file(candidate: str) -> Path | None:
    """Return the first matching environment file path if it exists."""

    path = Path(candidate)
    if path.is_absolute():
        return path if path.exists() else None

    search_roots = [Path.cwd(), Path(__file__).resolve().parent]
    search_roots.extend(Path(__file__).resolve().parents)

    seen: set[Path] = set()
    for root in search_roots:
        root = root.resolve()
        if root in seen:
            continue
        seen.add(root)
        potential = root / candidate
        if potential.exists():
            return potential
    return None


def _parse_env_file(path: Path) -> dict[str, str]:
    """Parse a dotenv-style file into a mapping."""

    variables: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].strip()
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        variables[key.strip()] = value.strip().strip('"').strip("'")
    return variables


def _load_profile_env(env: Mapping[str, str]) -> dict[str, str]:
    """Load environment variables from the selected profile file."""

    explicit_file = env.get(f"{ENV_PREFIX}ENV_FILE")
    profile = env.get(f"{ENV_PREFIX}ENV", "local")
    candidate = explicit_file or f".env.{profile}"

    path = _resolve_env_file(candidate)
    if path is None:
        return {}
    return _parse_env_file(path)


def _base_url(value: str) -> str:
    return value.strip().rstrip("/")


def _parse_port(value: str) -> int:
    try:
        port = int(value)
    except ValueError as exc:
        raise RuntimeError(f"{ENV_PREFIX}PORT must be an integer, got {value!r}") from exc
    if not 0 <= port <= 65535:
        raise RuntimeError(f"{ENV_PREFIX}PORT must be between 0 and 65535, got {port}")
    return port


def _parse_timeout(value: str) -> float:
    try:
        timeout = float(value)
    except ValueError as exc:
        raise RuntimeError(
            f"{ENV_PREFIX}REQUEST_TIMEOUT must be a number of seconds, got {value!r}"
        ) from exc
    if timeout <= 0:
        raise RuntimeError(f"{ENV_PREFIX}REQUEST_TIMEOUT must be positive, got {timeout}")
    return timeout


@dataclass(frozen=True)
class Settings:
    """Runtime configuration."""

    investments_service_url: str = DEFAULT_INVESTMENTS_SERVICE_URL
    financial_companies_service_url: str = DEFAULT_FINANCIAL_COMPANIES_SERVICE_URL
    port: int = DEFAULT_PORT
    report_path: Path = Path(DEFAULT_REPORT_PATH)
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    environment: str = DEFAULT_ENVIRONMENT

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @staticmethod
    def load(env: Mapping[str, str] | None = None) -> "Settings":
        """Load settings from environment variables."""

        base_env = dict(os.environ if env is None else env)
        file_env = _load_profile_env(base_env)
        # Environment variables set in the shell take precedence over the file.
        merged_env = {**file_env, **base_env}

        def get(name: str, default: str) -> str:
            value = merged_env.get(f"{ENV_PREFIX}{name}")
            return value if value else default

        return Settings(
            investments_service_url=_base_url(
                get("INVESTMENTS_SERVICE_URL", DEFAULT_INVESTMENTS_SERVICE_URL)
            ),
            financial_companies_service_url=_base_url(
                get("FINANCIAL_COMPANIES_SERVICE_URL", DEFAULT_FINANCIAL_COMPANIES_SERVICE_URL)
            ),
            port=_parse_port(get("PORT", str(DEFAULT_PORT))),
            report_path=Path(get("REPORT_PATH", DEFAULT_REPORT_PATH)),
            request_timeout=_parse_timeout(get("REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))),
            environment=get("ENVIRONMENT", DEFAULT_ENVIRONMENT),
        )


__all__ = ["Settings", "ENV_PREFIX"]
