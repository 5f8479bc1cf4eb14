import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import httpx

from config import constants

logger = logging.getLogger("violation_detect.inference.probe_client")


class InferenceConfig:
    """Configuration for the remote inference service.

    Configuration via environment variables (see `config.constants`):
    - INFERENCE_STRATEGY (multi_probe / single_probe)
    - MULTI_PROBE_API_URL
    - SINGLE_PROBE_API_URL
    - INFERENCE_API_KEY (optional bearer token)
    - INFERENCE_HTTP_TIMEOUT_SEC
    - INFERENCE_MAX_CONCURRENT_PROBES
    """

    def __init__(
        self,
        strategy: Optional[str] = None,
        multi_probe_url: Optional[str] = None,
        single_probe_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        max_concurrent_probes: Optional[int] = None,
    ):
        self.strategy = (strategy or constants.INFERENCE_STRATEGY).lower()
        self.multi_probe_url = multi_probe_url or constants.MULTI_PROBE_API_URL
        self.single_probe_url = single_probe_url or constants.SINGLE_PROBE_API_URL
        self.api_key = api_key or constants.INFERENCE_API_KEY
        self.timeout = float(
            timeout if timeout is not None else constants.INFERENCE_HTTP_TIMEOUT_SEC
        )
        self.max_concurrent_probes = max(
            1,
            int(
                max_concurrent_probes
                if max_concurrent_probes is not None
                else constants.INFERENCE_MAX_CONCURRENT_PROBES
            ),
        )

    def get_request_headers(self) -> Dict[str, str]:
        """Get HTTP headers sent with every inference request."""
        if not self.api_key:
            return {}
        return {"Authorization": f"Bearer {self.api_key}"}


@dataclass
class ProbeSuccess:
    payload: Any
    content_type: Optional[str] = None


@dataclass
class ProbeHttpError:
    status: int
    body: str


@dataclass
class ProbeTransportError:
    cause: BaseException


RemoteProbeResult = Union[ProbeSuccess, ProbeHttpError, ProbeTransportError]


def describe_failure(result: RemoteProbeResult) -> str:
    """Human readable cause for a failed probe, used in logs and errors."""
    if isinstance(result, ProbeHttpError):
        return f"HTTP {result.status}: {result.body[:200]}"
    if isinstance(result, ProbeTransportError):
        return f"{type(result.cause).__name__}: {result.cause}"
    return "ok"


class ProbeClient:
    """Async HTTP client for the remote inference service.

    Every call returns a `RemoteProbeResult` instead of raising, so callers
    decide how a failure degrades. Timeouts surface as `ProbeTransportError`.
    """

    def __init__(
        self,
        config: Optional[InferenceConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or InferenceConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Lazily initialize HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout,
                headers=self.config.get_request_headers(),
                transport=self._transport,
                follow_redirects=True,
            )
        return self._client

    async def post_json(self, url: str, body: Dict[str, Any]) -> RemoteProbeResult:
        return await self._send("POST", url, json=body)

    async def post_file(
        self, url: str, filename: str, content: bytes, content_type: str
    ) -> RemoteProbeResult:
        return await self._send(
            "POST", url, files={"file": (filename, content, content_type)}
        )

    async def fetch_media(self, url: str) -> RemoteProbeResult:
        """Download raw media bytes; the payload is `bytes`, not JSON."""
        client = self._ensure_client()
        try:
            response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as error:
            logger.debug("Transport failure for %s: %s", url, error)
            return ProbeTransportError(error)
        if not response.is_success:
            return ProbeHttpError(response.status_code, response.text)
        return ProbeSuccess(
            payload=response.content,
            content_type=response.headers.get("content-type"),
        )

    async def _send(self, method: str, url: str, **kwargs: Any) -> RemoteProbeResult:
        client = self._ensure_client()
        try:
            response = await client.request(method, url, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as error:
            logger.debug("Transport failure for %s: %s", url, error)
            return ProbeTransportError(error)

        if not response.is_success:
            return ProbeHttpError(response.status_code, response.text)

        try:
            payload = response.json()
        except ValueError as error:
            return ProbeTransportError(error)
        return ProbeSuccess(payload, response.headers.get("content-type"))

    async def close(self) -> None:
        """Close HTTP client resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


__all__ = [
    "InferenceConfig",
    "ProbeClient",
    "ProbeHttpError",
    "ProbeSuccess",
    "ProbeTransportError",
    "RemoteProbeResult",
    "describe_failure",
]
