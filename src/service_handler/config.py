"""Configuration for service-handler clients."""

import os
from importlib import metadata

try:
    PACKAGE_VERSION = metadata.version("service-handler")
except metadata.PackageNotFoundError:  # pragma: no cover - fallback when running from source tree
    PACKAGE_VERSION = "0.0.0"


class HttpConfig:
    """Configuration for HTTP requests."""

    # Timeout (seconds) of clients created per call.
    # Ignored when a caller injects its own httpx.AsyncClient
    SERVICE_TIMEOUT: float = float(os.getenv("SERVICE_HANDLER_TIMEOUT", "60"))

    # User-Agent sent by clients created per call
    USER_AGENT: str = os.getenv("SERVICE_HANDLER_USER_AGENT", f"service-handler/{PACKAGE_VERSION}")

    # Log level used by the command line entry point
    LOG_LEVEL: str = os.getenv("SERVICE_HANDLER_LOG_LEVEL", "WARNING").upper()


# Global config instance
http_config = HttpConfig()
