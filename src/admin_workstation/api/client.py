from __future__ import annotations

import json
import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping

import httpx

from admin_workstation.config.settings import DEFAULT_API_TIMEOUT, Settings
from admin_workstation.errors import (
    NO_TENANT_MESSAGE,
    ConflictError,
    ErrorCategory,
    NotFoundError,
    TransientFailureError,
    UnauthorizedError,
    ValidationError,
    WorkstationError,
)
from admin_workstation.utils import get_logger


logger = get_logger(__name__)


@dataclass(slots=True)
class ApiTelemetryEvent:
    method: str
    url: str
    status_code: int | None
    duration_ms: float
    category: ErrorCategory | None
    success: bool


@dataclass(slots=True)
class ApiClientConfig:
    base_url: str
    token: str | None = None
    timeout: float = DEFAULT_API_TIMEOUT
    user_agent: str = "AdminWorkstation-Python"
    telemetry_callback: Callable[[ApiTelemetryEvent], None] | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApiClientConfig":
        if not settings.api_base_url:
            raise ValueError("api_base_url is not configured")
        return cls(
            base_url=settings.api_base_url,
            token=settings.api_token,
            timeout=settings.api_timeout,
        )


def _error_message(response: httpx.Response) -> str | None:
    content_type = response.headers.get("Content-Type", "")
    try:
        if "json" in content_type:
            body = response.json()
        else:
            body = json.loads(response.text)
    except ValueError:
        return response.text or None

    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict):
        error = error.get("message")
    if isinstance(error, str) and error:
        return error
    message = body.get("message")
    return message if isinstance(message, str) and message else None


def _map_response_to_error(response: httpx.Response) -> WorkstationError:
    status = response.status_code
    message = _error_message(response) or f"Admin API request failed with status {status}"

    error: WorkstationError
    if status == 401:
        error = UnauthorizedError(message)
    elif status == 400 and message == NO_TENANT_MESSAGE:
        error = UnauthorizedError(message)
    elif status in {400, 422}:
        error = ValidationError(message)
    elif status == 404:
        error = NotFoundError(message)
    elif status == 409:
        error = ConflictError(message)
    elif 500 <= status <= 599:
        error = TransientFailureError(message)
    else:
        error = WorkstationError(message=message)
    error.status_code = status
    return error


class AdminApiClient:
    """Thin async client for the admin REST API.

    Non-2xx responses and transport failures are raised as
    :class:`~admin_workstation.errors.WorkstationError` subclasses.
    """

    def __init__(
        self,
        config: ApiClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        headers = {
            "Accept": "application/json",
            "User-Agent": config.user_agent,
        }
        if config.token:
            headers["Authorization"] = f"Bearer {config.token}"
        self._client = httpx.AsyncClient(
            base_url=config.base_url.rstrip("/"),
            headers=headers,
            timeout=config.timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    # ------------------------------------------------------------------ Public

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json_body: Any | None = None,
    ) -> httpx.Response:
        start = time.perf_counter()
        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json_body,
            )
        except httpx.TimeoutException as exc:
            self._publish_telemetry(method, path, start, None, ErrorCategory.TRANSIENT)
            raise TransientFailureError(
                "Timed out contacting the admin API",
                inner_error=exc,
            ) from exc
        except httpx.RequestError as exc:
            self._publish_telemetry(method, path, start, None, ErrorCategory.TRANSIENT)
            raise TransientFailureError(
                f"Network error contacting the admin API: {exc}",
                inner_error=exc,
            ) from exc

        if response.status_code >= 400:
            error = _map_response_to_error(response)
            self._publish_telemetry(method, path, start, response.status_code, error.category)
            logger.warning(
                "Admin API request failed",
                method=method,
                path=path,
                status_code=response.status_code,
                category=error.category.value,
            )
            raise error

        self._publish_telemetry(method, path, start, response.status_code, None)
        return response

    async def get_json(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        response = await self.request("GET", path, params=params)
        return response.json()

    async def post_json(self, path: str, payload: Any) -> Any:
        response = await self.request("POST", path, json_body=payload)
        if not response.content:
            return None
        return response.json()

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AdminApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ----------------------------------------------------------------- Helpers

    def _publish_telemetry(
        self,
        method: str,
        path: str,
        start: float,
        status_code: int | None,
        category: ErrorCategory | None,
    ) -> None:
        callback = self._config.telemetry_callback
        if callback is None:
            return
        event = ApiTelemetryEvent(
            method=method,
            url=f"{self.base_url.rstrip('/')}{path}",
            status_code=status_code,
            duration_ms=(time.perf_counter() - start) * 1000,
            category=category,
            success=category is None,
        )
        try:
            callback(event)
        except Exception:  # pragma: no cover - telemetry shouldn't break requests
            logger.warning("Telemetry callback raised an exception", exc_info=True)


__all__ = [
    "AdminApiClient",
    "ApiClientConfig",
    "ApiTelemetryEvent",
]
