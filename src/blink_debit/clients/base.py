"""
Shared request building and execution for the Blink Debit endpoint APIs.

Each endpoint API turns its arguments into a RequestArgs (method, path,
headers, JSON body) and hands it to BaseApi._send, which attaches the bearer
token on every attempt and runs the call through the RetryExecutor.
"""

import dataclasses
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar
from urllib.parse import quote

import httpx
import structlog
from pydantic import BaseModel

from blink_debit.clients.retry import RetryContext, RetryExecutor
from blink_debit.clients.token_client import AccessTokenManager, resolve_token_value
from blink_debit.config import BlinkPaySettings
from blink_debit.logging_config import sanitise_headers
from blink_debit.models.exceptions import BlinkInvalidValueException, BlinkServiceException

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RequestParams:
    """Optional tracing and customer headers accepted by every operation."""

    request_id: str | None = None
    correlation_id: str | None = None
    customer_ip: str | None = None
    customer_user_agent: str | None = None
    idempotency_key: str | None = None

    def with_generated_ids(self, idempotent: bool = False) -> "RequestParams":
        """
        Fill in missing IDs with random UUIDs.

        Called once per logical operation; the result is reused for every
        retry of that operation.
        """
        return dataclasses.replace(
            self,
            request_id=self.request_id or str(uuid.uuid4()),
            correlation_id=self.correlation_id or str(uuid.uuid4()),
            idempotency_key=(self.idempotency_key or str(uuid.uuid4())) if idempotent else None,
        )


def build_request_headers(params: RequestParams) -> dict[str, str]:
    """Build the Blink tracing/customer headers, skipping unset values."""
    headers: dict[str, str] = {}
    if params.request_id:
        headers["request-id"] = params.request_id
    if params.correlation_id:
        headers["x-correlation-id"] = params.correlation_id
    if params.customer_ip:
        headers["x-customer-ip"] = params.customer_ip
    if params.customer_user_agent:
        headers["x-customer-user-agent"] = params.customer_user_agent
    if params.idempotency_key:
        headers["idempotency-key"] = params.idempotency_key
    return headers


@dataclass
class RequestArgs:
    """A fully built request, relative to the payments base path."""

    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    json: Any = None


@dataclass
class ApiResponse(Generic[T]):
    """Parsed payload plus the transport details of the final attempt."""

    data: T
    status_code: int
    headers: httpx.Headers


def require_value(value: Any, name: str, operation: str) -> None:
    """Fail fast on a missing required argument."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise BlinkInvalidValueException(
            f"Required parameter {name} was null or undefined when calling {operation}."
        )


def resource_path(template: str, resource_id: str) -> str:
    return template.format(quote(str(resource_id), safe=""))


class BaseApi:
    """Base class for the per-endpoint APIs."""

    def __init__(
        self,
        settings: BlinkPaySettings,
        http_client: httpx.AsyncClient,
        token_manager: AccessTokenManager,
        retry_executor: RetryExecutor,
    ) -> None:
        self.settings = settings
        self.http_client = http_client
        self.token_manager = token_manager
        self.retry_executor = retry_executor

    def _build_request(
        self,
        method: str,
        path: str,
        params: RequestParams,
        body: BaseModel | None = None,
    ) -> RequestArgs:
        headers = build_request_headers(params)
        payload = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            payload = body.model_dump(mode="json", exclude_none=True)
        return RequestArgs(method=method, path=path, headers=headers, json=payload)

    async def _send(
        self,
        method: str,
        path: str,
        params: RequestParams | None = None,
        body: BaseModel | None = None,
        parse: Callable[[Any], T] | None = None,
    ) -> ApiResponse[T]:
        """
        Build, execute (with retries) and parse one logical operation.

        Args:
            method: HTTP method
            path: Path relative to the payments base path
            params: Optional tracing/customer headers
            body: Optional request body model
            parse: Converts the decoded JSON body into the response type;
                None for operations without a response body

        Returns:
            ApiResponse with the parsed payload
        """
        params = (params or RequestParams()).with_generated_ids(idempotent=method == "POST")
        request = self._build_request(method, path, params, body)
        url = f"{self.settings.base_path}{request.path}"

        async def attempt() -> httpx.Response:
            token = await resolve_token_value(await self.token_manager.get_access_token())
            headers = {**request.headers, "Authorization": f"Bearer {token}"}
            logger.debug(
                "outbound_request",
                method=request.method,
                url=url,
                headers=sanitise_headers(headers),
            )
            response = await self.http_client.request(
                request.method,
                url,
                headers=headers,
                json=request.json,
            )
            logger.debug(
                "inbound_response",
                status_code=response.status_code,
                request_id=params.request_id,
            )
            return response

        context = RetryContext(
            request_id=params.request_id,
            correlation_id=params.correlation_id,
            idempotency_key=params.idempotency_key,
        )
        response = await self.retry_executor.execute(attempt, context)

        data = None
        if parse is not None:
            try:
                data = parse(response.json())
            except ValueError as e:
                raise BlinkServiceException(
                    f"Unable to parse response from {request.method} {request.path}: {e}", e
                ) from e

        return ApiResponse(data=data, status_code=response.status_code, headers=response.headers)
