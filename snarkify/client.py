"""
Snarkify HTTP client.

One pooled httpx.AsyncClient per adapter, carrying:
- X-Api-Key authentication on every request
- a fixed per-request deadline covering connect, send and the full body
- exponential-backoff retry of transient failures (see retry.py)

Invariants:
- API key never logged
- Only statuses in [200, 202] count as success
- Bodies are decoded through Pydantic, never defaulted on mismatch
- Callers never see individual retry attempts
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .errors import (
    DecodeError,
    RequestTimeoutError,
    StatusError,
    TransportError,
    UrlError,
)
from .retry import RetryPolicy

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-Api-Key"

ResponseT = TypeVar("ResponseT", bound=BaseModel)


def build_url(base_url: str, path: str) -> str:
    """
    Join base URL and path verbatim, then check the result is an
    absolute http(s) URL.

    Separators are neither added nor collapsed.
    """
    full_url = f"{base_url}{path}"
    try:
        parsed = httpx.URL(full_url)
    except httpx.InvalidURL as e:
        raise UrlError(full_url, str(e)) from e

    if parsed.scheme not in ("http", "https"):
        raise UrlError(full_url, f"unsupported scheme '{parsed.scheme}'")
    if not parsed.host:
        raise UrlError(full_url, "missing host")
    return full_url


class SnarkifyClient:
    """
    Authenticated transport for the Snarkify REST API.

    Usage:
        async with SnarkifyClient(base_url, api_key, timeout_s=30,
                                  retry_policy=RetryPolicy()) as client:
            vk = await client.get(path, SnarkifyGetVkResponse)
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_s: float,
        retry_policy: RetryPolicy,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleeper: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Args:
            base_url:     Scheme + host (+ optional prefix), no trailing path
            api_key:      Secret sent as the X-Api-Key header
            timeout_s:    Deadline in seconds for each attempt, body included
            retry_policy: Backoff bounds and retry budget
            transport:    Optional httpx transport (unit tests inject MockTransport)
            sleeper:      Awaitable sleep used between retries
        """
        self.base_url = base_url
        self._api_key = api_key
        self.timeout_s = timeout_s
        self.retry_policy = retry_policy
        self._sleep = sleeper
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_s),
            transport=transport,
        )

    async def __aenter__(self) -> "SnarkifyClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def build_url(self, path: str) -> str:
        return build_url(self.base_url, path)

    def _build_headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            API_KEY_HEADER: self._api_key,
        }

    # ──────────────────────────────────────────────────────────
    # PUBLIC VERBS
    # ──────────────────────────────────────────────────────────

    async def get(self, path: str, response_model: Type[ResponseT]) -> ResponseT:
        url = self.build_url(path)
        logger.info(f"[Snarkify Client], {path}, sent request")

        response = await self._send("GET", url, path)
        return self._read(path, response, response_model)

    async def post(
        self,
        path: str,
        body: BaseModel,
        response_model: Type[ResponseT],
    ) -> ResponseT:
        url = self.build_url(path)
        request_body = body.model_dump_json()
        logger.info(f"[Snarkify Client], {path}, sent request")
        logger.debug(f"[Snarkify Client], {path}, request: {request_body}")

        response = await self._send("POST", url, path, content=request_body)
        return self._read(path, response, response_model)

    # ──────────────────────────────────────────────────────────
    # INTERNALS
    # ──────────────────────────────────────────────────────────

    async def _send(
        self,
        method: str,
        url: str,
        path: str,
        content: Optional[str] = None,
    ) -> httpx.Response:
        """
        Issue the request, retrying transient failures within budget.

        Returns the last response (which may carry a non-success status
        once the budget is spent). Raises TransportError or
        RequestTimeoutError when the final attempt failed at the network
        level.
        """
        retry_index = 0
        while True:
            try:
                # httpx timeouts are per phase; wait_for bounds the whole exchange
                response = await asyncio.wait_for(
                    self._client.request(
                        method,
                        url,
                        headers=self._build_headers(),
                        content=content,
                    ),
                    timeout=self.timeout_s,
                )
            except (httpx.TimeoutException, asyncio.TimeoutError) as e:
                if not self.retry_policy.should_retry(retry_index):
                    raise RequestTimeoutError(
                        f"[Snarkify Client], {path}, timed out after {self.timeout_s}s: {e!r}"
                    ) from e
                reason = f"timeout: {e!r}"
            except httpx.TransportError as e:
                if not self.retry_policy.should_retry(retry_index):
                    raise TransportError(
                        f"[Snarkify Client], {path}, {type(e).__name__}: {e}"
                    ) from e
                reason = f"{type(e).__name__}: {e}"
            else:
                if not self.retry_policy.is_retryable_status(response.status_code):
                    return response
                if not self.retry_policy.should_retry(retry_index):
                    return response
                await response.aclose()
                reason = f"status {response.status_code}"

            delay = self.retry_policy.backoff_for(retry_index)
            logger.warning(
                f"[Snarkify Client], {path}, retry {retry_index + 1}/"
                f"{self.retry_policy.max_retries} in {delay:.2f}s after {reason}"
            )
            await self._sleep(delay)
            retry_index += 1

    def _read(
        self,
        path: str,
        response: httpx.Response,
        response_model: Type[ResponseT],
    ) -> ResponseT:
        status = response.status_code
        if not (200 <= status <= 202):
            raise StatusError(path, status)

        response_body = response.text
        logger.info(f"[Snarkify Client], {path}, received response")
        logger.debug(f"[Snarkify Client], {path}, response: {response_body}")

        try:
            return response_model.model_validate_json(response_body)
        except ValidationError as e:
            raise DecodeError(str(e)) from e
