from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .auth_store import AuthStore
from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import InvalidResponseError, TransportError
from .tracing import TRACE_HEADER, TraceContext

logger = logging.getLogger(__name__)

ResponseHook = Callable[[requests.Response], None]
RequestHook = Callable[[str, str, dict[str, Any]], None]

JsonPayload = dict[str, Any] | list[Any] | None


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str
    trace_id: str | None


@dataclass
class HttpClient:
    """The single request sender shared by every resource client.

    Sends each request exactly once. Server errors are mapped to the
    exception hierarchy in ``exceptions`` and re-raised unchanged in
    meaning; nothing is retried, cached or cancelled.
    """

    config: ClientConfig
    auth_store: AuthStore | None = None
    trace: TraceContext | None = None
    session: requests.Session | None = None
    before_request: RequestHook | None = None
    after_response: ResponseHook | None = None
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def _auth_headers(self) -> dict[str, str]:
        token = self.auth_store.load() if self.auth_store else None
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        module: str = "unknown",
        operation: str = "unknown",
    ) -> JsonPayload:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        request_headers = {"Accept": "application/json"}
        request_headers.update(self._auth_headers())
        if headers:
            request_headers.update(headers)
        trace_context = self.trace or TraceContext()
        request_headers[TRACE_HEADER] = trace_context.ensure()

        normalized_method = method.upper()
        url = self._build_url(path)
        if self.before_request:
            self.before_request(
                normalized_method,
                url,
                {"headers": request_headers, "json_body": json_body, "params": params},
            )

        started = time.monotonic()
        try:
            response = self.session.request(
                method=normalized_method,
                url=url,
                headers=request_headers,
                json=json_body,
                params=params,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.RequestException as exc:
            self._record_operation(module, operation, started, "transport_error", trace_context.trace_id)
            logger.warning(
                "http_transport_error",
                extra={"method": normalized_method, "path": path, "error": type(exc).__name__},
            )
            raise TransportError(
                code="TRANSPORT_ERROR",
                message=str(exc),
                details={"type": type(exc).__name__},
                trace_id=trace_context.trace_id,
                status_code=0,
                raw_payload=None,
            ) from exc

        if self.after_response:
            self.after_response(response)
        trace_context.adopt(response.headers)
        if response.ok:
            if not response.content:
                self._record_operation(module, operation, started, "success", trace_context.trace_id)
                return None
            try:
                body = response.json()
            except ValueError as exc:
                # A proxy or the storefront host answering with HTML instead of the API.
                self._record_operation(module, operation, started, "invalid_response", trace_context.trace_id)
                logger.warning(
                    "http_invalid_response",
                    extra={
                        "method": normalized_method,
                        "path": path,
                        "status_code": response.status_code,
                        "content_type": response.headers.get("Content-Type"),
                    },
                )
                raise InvalidResponseError(
                    code="INVALID_JSON",
                    message=f"Expected JSON from {path}, got {response.headers.get('Content-Type') or 'no content type'}",
                    details={"body_preview": response.text[:120]},
                    trace_id=trace_context.trace_id,
                    status_code=response.status_code,
                    raw_payload=None,
                ) from exc
            self._record_operation(module, operation, started, "success", trace_context.trace_id)
            return body

        try:
            payload = response.json()
        except ValueError:
            payload = {"message": response.text} if response.text.strip() else {}
        if not isinstance(payload, dict):
            payload = {"details": payload}
        trace_context.adopt(response.headers, payload)
        self._record_operation(module, operation, started, "error", trace_context.trace_id)
        logger.info(
            "http_error_response",
            extra={"method": normalized_method, "path": path, "status_code": response.status_code},
        )
        raise map_error(response.status_code, payload, trace_context.trace_id)

    def _record_operation(self, module: str, operation: str, started: float, result: str, trace_id: str | None) -> None:
        self.last_operation = LastOperation(
            module=module,
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
            trace_id=trace_id,
        )
