# http_client.py
from __future__ import annotations
import asyncio, logging, random, uuid
from typing import Optional
import httpx

logger = logging.getLogger(__name__)

IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "PUT", "DELETE"})

class RetryPolicy:
    def __init__(
        self,
        retries: int = 4,
        backoff_base: float = 0.25,
        backoff_cap: float = 4.0,
        retry_statuses: set[int] | None = None,
        rng: Optional[random.Random] = None,
    ):
        self.retries = max(1, retries)
        self.backoff_base = backoff_base
        self.backoff_cap = backoff_cap
        self.retry_statuses = retry_statuses or {500, 502, 503, 504}
        self.rng = rng or random.Random()

    def sleep_seconds(self, attempt: int) -> float:
        # exponential (0.25, 0.5, 1, 2...) + jitter [0..0.25]
        return min(self.backoff_cap, self.backoff_base * (2 ** (attempt - 1))) + self.rng.uniform(0, 0.25)

    def attempts_for(self, method: str) -> int:
        # POST creates a row per call; never replay it
        return self.retries if method.upper() in IDEMPOTENT_METHODS else 1

class HttpClient:
    """
    - Reusable async HTTP client with:
      - base_url
      - httpx timeouts
      - retry policy (5xx + network, idempotent methods only)
      - 4xx fail fast
      - optional transport (e.g. httpx.ASGITransport for in-process apps)
    """

    def __init__(
        self,
        base_url: str,
        connect_timeout: float = 5.0,
        read_timeout: float = 30.0,
        retries: int = 4,
        *,
        retry_statuses: Optional[set[int]] = None,
        default_headers: Optional[dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = httpx.Timeout(
            connect=connect_timeout,
            read=read_timeout,
            write=read_timeout,
            pool=read_timeout,
        )
        self.policy = RetryPolicy(retries=retries, retry_statuses=retry_statuses)
        self.default_headers = {"Accept": "application/json", **(default_headers or {})}
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self.default_headers,
            transport=self.transport,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._client is not None:
            await self._client.aclose()

    async def request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """
        Send one logical request.
        Retries transient 5xx + network errors; fails fast on 4xx, logging 422 details.
        Each request is tagged with X-Request-Id.
        """
        assert self._client is not None, "use HttpClient as an async context manager"
        last_exc: Exception | None = None

        req_id = kwargs.pop("req_id", str(uuid.uuid4()))
        headers = kwargs.pop("headers", {})
        headers.setdefault("X-Request-Id", req_id)
        kwargs["headers"] = headers

        attempts = self.policy.attempts_for(method)
        url = self.base_url + path

        for attempt in range(1, attempts + 1):
            try:
                resp = await self._client.request(method, path, **kwargs)
                status = resp.status_code

                if status in self.policy.retry_statuses:
                    raise httpx.HTTPStatusError(f"server error {status}", request=resp.request, response=resp)

                if status == 422:
                    try:
                        payload = resp.json()
                    except ValueError:
                        payload = {"detail": (resp.text or "Unprocessable Entity")}
                    logger.error("[req#%s] 422 validation error on %s %s: %s",
                                 req_id, method, url, payload.get("detail", payload))

                if not (200 <= status < 300):
                    resp.raise_for_status()

                if attempt > 1:
                    logger.info("[req#%s] succeeded after %d attempt(s)", req_id, attempt)
                return resp

            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                if status not in self.policy.retry_statuses:
                    raise
                last_exc = e

            except httpx.TransportError as e:
                last_exc = e

            if attempt < attempts:
                sleep = self.policy.sleep_seconds(attempt)
                logger.warning("[req#%s] [retry %d/%d] %s %s failed: %s. Sleeping %.2fs",
                               req_id, attempt, attempts, method, url, last_exc, sleep)
                await asyncio.sleep(sleep)

        logger.error("[req#%s] [giving up] %s %s: %s", req_id, method, url, last_exc)
        raise last_exc or RuntimeError("request failed")
