"""Base client for outbound HTTP calls."""

from typing import Any

import requests
import structlog

from core.exceptions.notification_exceptions import TransportError

logger = structlog.get_logger(__name__)


class BaseDownstreamClient:
    """Base class for JSON-over-HTTP clients of external services.

    Every request carries a timeout. Transport problems and non-2xx answers
    are raised as TransportError so callers handle a single exception type.
    """

    def __init__(self, service_name: str, base_url: str, timeout: float = 10):
        """Initialize base downstream client.

        Args:
            service_name: Name of the external service (for logging/errors)
            base_url: Base URL for the service
            timeout: Per-request timeout in seconds
        """
        self.service_name = service_name
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _make_request(
        self,
        method: str,
        path: str,
        json_data: dict[str, Any] | None = None,
        operation: str | None = None,
    ) -> requests.Response:
        """Make an HTTP request to ``base_url + path``.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: Path appended to the base URL
            json_data: JSON body data
            operation: Name logged instead of the URL, which may embed secrets

        Returns:
            Response object for 2xx answers

        Raises:
            TransportError: On timeout, connection failure or non-2xx status
        """
        operation = operation or path
        url = f"{self.base_url}{path}"

        try:
            response = requests.request(
                method=method,
                url=url,
                headers=self._get_headers(),
                json=json_data,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            logger.error(
                "downstream_request_timeout",
                service=self.service_name,
                operation=operation,
                timeout=self.timeout,
            )
            raise TransportError(
                f"{self.service_name} {operation} timed out after {self.timeout}s",
                channel=self.service_name,
            ) from e
        except requests.RequestException as e:
            logger.error(
                "downstream_request_failed",
                service=self.service_name,
                operation=operation,
                error=type(e).__name__,
            )
            raise TransportError(
                f"{self.service_name} {operation} failed: {type(e).__name__}",
                channel=self.service_name,
            ) from e

        if response.status_code >= 400:
            logger.error(
                "downstream_error_response",
                service=self.service_name,
                operation=operation,
                status_code=response.status_code,
                response_text=response.text[:500],
            )
            raise TransportError(
                f"{self.service_name} {operation} returned {response.status_code}",
                channel=self.service_name,
                status_code=response.status_code,
            )

        logger.debug(
            "downstream_response",
            service=self.service_name,
            operation=operation,
            status_code=response.status_code,
        )
        return response
