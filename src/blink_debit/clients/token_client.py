"""OAuth2 access token management for the Blink Debit API."""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta, timezone
from typing import Union

import httpx
import structlog
from pydantic import ValidationError

from blink_debit.config import BlinkPaySettings
from blink_debit.models.exceptions import BlinkServiceException, exception_for_response
from blink_debit.models.token import AccessTokenRequest, AccessTokenResponse

logger = structlog.get_logger(__name__)

# A token is refreshed once it has less than this much validity left
EXPIRY_BUFFER = timedelta(seconds=60)

TokenValue = Union[str, Callable[[], Union[str, Awaitable[str]]]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def resolve_token_value(value: TokenValue) -> str:
    """Return the bearer string for a plain or supplier token value."""
    if callable(value):
        result = value()
        if inspect.isawaitable(result):
            result = await result
        return result
    return value


class AccessTokenManager:
    """
    Owns the client-credentials token shared by every outbound call.

    Concurrent callers inside the validity window read the cached value.
    When several callers see an expired token at the same time they all
    await one shared refresh task, so at most one token request is in flight.
    """

    def __init__(
        self,
        settings: BlinkPaySettings,
        http_client: httpx.AsyncClient,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.settings = settings
        self.http_client = http_client
        self._clock = clock
        self._access_token: TokenValue | None = None
        self._expires_at: datetime | None = None
        self._refresh_task: asyncio.Task[None] | None = None

    @property
    def expires_at(self) -> datetime | None:
        return self._expires_at

    def set_access_token(self, value: TokenValue, expires_at: datetime) -> None:
        """Install an externally obtained token or token supplier."""
        self._access_token = value
        self._expires_at = expires_at

    def clear(self) -> None:
        self._access_token = None
        self._expires_at = None

    def _needs_refresh(self) -> bool:
        if self._access_token is None or self._expires_at is None:
            return True
        return self._clock() + EXPIRY_BUFFER >= self._expires_at

    async def get_access_token(self, force_refresh: bool = False) -> TokenValue:
        """
        Return a token with more than the expiry buffer of validity left.

        Args:
            force_refresh: Refresh even if the cached token is still valid

        Returns:
            The token value (string or supplier)

        Raises:
            BlinkServiceException: (or subclass) if the refresh fails
        """
        if force_refresh or self._needs_refresh():
            await self.refresh_token()
        return self._access_token

    async def refresh_token(self) -> None:
        """Refresh the token, joining a refresh that is already in flight."""
        task = self._refresh_task
        if task is None:
            task = asyncio.ensure_future(self._request_token())
            self._refresh_task = task
            task.add_done_callback(self._clear_refresh_task)
        await asyncio.shield(task)

    def _clear_refresh_task(self, task: asyncio.Task[None]) -> None:
        if self._refresh_task is task:
            self._refresh_task = None

    async def _request_token(self) -> None:
        body = AccessTokenRequest(
            client_id=self.settings.client_id,
            client_secret=self.settings.client_secret,
        )

        logger.debug("access_token_refresh_started", url=self.settings.token_url)

        try:
            try:
                response = await self.http_client.post(
                    self.settings.token_url,
                    headers={"Content-Type": "application/json"},
                    json=body.model_dump(),
                )
            except httpx.TransportError as e:
                raise BlinkServiceException(f"Token request failed: {e}", e) from e

            if response.status_code >= 400:
                raise exception_for_response(response)

            try:
                token = AccessTokenResponse.model_validate(response.json())
            except (ValueError, ValidationError) as e:
                raise BlinkServiceException(f"Invalid token response: {e}", e) from e

        except BlinkServiceException as e:
            logger.error(
                "access_token_refresh_failed",
                error_type=type(e).__name__,
                error=str(e),
            )
            # Keep a still-usable token, drop one that has already lapsed
            if self._expires_at is not None and self._clock() >= self._expires_at:
                self.clear()
            raise

        self._access_token = token.access_token
        self._expires_at = self._clock() + timedelta(seconds=token.expires_in)

        logger.info(
            "access_token_refreshed",
            token_type=token.token_type,
            expires_at=self._expires_at.isoformat(),
        )
