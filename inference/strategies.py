"""Strategies for reaching the remote inference service.

Both strategies turn a `DetectionRequest` into a list of canonical
`ViolationCategory` values and raise `RemoteUnavailableError` when the remote
service cannot be used at all. The orchestrator decides what happens next.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

from models.detection import DetectionRequest, ViolationCategory
from models.errors import RemoteUnavailableError
from inference.probe_client import (InferenceConfig, ProbeClient, ProbeSuccess,
                                    RemoteProbeResult, describe_failure)
from preprocessing.media_encoder import prepare_upload
from utils import metrics

LOGGER_NAME = "violation_detect.inference.strategies"

NO_VIOLATION_MARKER = "no violation"


class InferenceStrategy(Protocol):
    name: str

    async def detect(self, request: DetectionRequest) -> List[ViolationCategory]:
        ...


@dataclass(frozen=True)
class ProbeTask:
    """A task label sent to the remote service plus how to read its answer."""

    label: str
    keyword: str
    category: ViolationCategory


PROBE_TASKS: Sequence[ProbeTask] = (
    ProbeTask("Helmet Violation", "helmet", ViolationCategory.NO_HELMET),
    ProbeTask("Triple Riding", "triple", ViolationCategory.TRIPLE_RIDING),
    ProbeTask("Wrong Route", "wrong", ViolationCategory.WRONG_SIDE),
    ProbeTask("Pothole", "pothole", ViolationCategory.POTHOLE),
)


class ResultTextParser:
    """Reads the free-text answers returned by the multi-probe endpoint."""

    @staticmethod
    def extract_text(payload: Any) -> Optional[str]:
        """Return `payload["data"][0]` when it is a string, else None."""
        if not isinstance(payload, dict):
            return None
        data = payload.get("data")
        if not isinstance(data, list) or not data:
            return None
        text = data[0]
        return text if isinstance(text, str) else None

    @staticmethod
    def match(task: ProbeTask, text: Optional[str]) -> Optional[ViolationCategory]:
        """Map a task's answer to its category using a keyword test."""
        if text is None or not text.strip():
            return None
        lowered = text.lower()
        if NO_VIOLATION_MARKER in lowered:
            return None
        if task.keyword in lowered:
            return task.category
        return None


class FlagParser:
    """Reads the structured per-category flags of the single-probe endpoint."""

    FLAG_KEYS: Dict[str, ViolationCategory] = {
        "helmet_violation": ViolationCategory.NO_HELMET,
        "triple_riding": ViolationCategory.TRIPLE_RIDING,
        "wrong_route": ViolationCategory.WRONG_SIDE,
        "pothole": ViolationCategory.POTHOLE,
    }

    @staticmethod
    def parse(payload: Any) -> List[ViolationCategory]:
        if not isinstance(payload, dict):
            raise ValueError(f"expected an object, got {type(payload).__name__}")
        violations = []
        for key, category in FlagParser.FLAG_KEYS.items():
            entry = payload.get(key)
            if isinstance(entry, dict) and entry.get("detected") is True:
                violations.append(category)
        return violations


class MultiProbeStrategy:
    """One call per task label, issued concurrently and merged in task order.

    A failed call is logged and contributes nothing. Only when every call
    fails is the service considered unavailable.
    """

    name = "multi_probe"

    def __init__(
        self,
        client: ProbeClient,
        url: Optional[str] = None,
        tasks: Sequence[ProbeTask] = PROBE_TASKS,
        max_concurrent: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._client = client
        self.url = url or client.config.multi_probe_url
        self._tasks = tuple(tasks)
        self._max_concurrent = max_concurrent or client.config.max_concurrent_probes
        self._logger = logger or logging.getLogger(LOGGER_NAME)

    async def detect(self, request: DetectionRequest) -> List[ViolationCategory]:
        if not self.url:
            raise RemoteUnavailableError("Multi-probe inference endpoint is not configured")

        semaphore = asyncio.Semaphore(self._max_concurrent)
        results = await asyncio.gather(
            *(self._probe(task, request, semaphore) for task in self._tasks)
        )

        violations: List[ViolationCategory] = []
        failures = 0
        for task, result in zip(self._tasks, results):
            if not isinstance(result, ProbeSuccess):
                failures += 1
                metrics.incr("inference.probe_failures")
                self._logger.error(
                    "API response error for %s: %s", task.label, describe_failure(result)
                )
                continue
            text = ResultTextParser.extract_text(result.payload)
            self._logger.info("%s API response: %r", task.label, text)
            category = ResultTextParser.match(task, text)
            if category is not None and category not in violations:
                violations.append(category)

        if self._tasks and failures == len(self._tasks):
            raise RemoteUnavailableError(f"All {failures} inference probes failed")
        return violations

    async def _probe(
        self, task: ProbeTask, request: DetectionRequest, semaphore: asyncio.Semaphore
    ) -> RemoteProbeResult:
        async with semaphore:
            self._logger.info("Checking for %s...", task.label)
            return await self._client.post_json(
                self.url, {"data": [request.media_reference, task.label]}
            )


class SingleProbeStrategy:
    """Fetch the media, upload it once and read one flag per category.

    There is no partial recovery: any failure raises `RemoteUnavailableError`.
    """

    name = "single_probe"

    def __init__(
        self,
        client: ProbeClient,
        url: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._client = client
        self.url = url or client.config.single_probe_url
        self._logger = logger or logging.getLogger(LOGGER_NAME)

    async def detect(self, request: DetectionRequest) -> List[ViolationCategory]:
        if not self.url:
            raise RemoteUnavailableError("Single-probe inference endpoint is not configured")

        fetched = await self._client.fetch_media(request.media_reference)
        if not isinstance(fetched, ProbeSuccess):
            metrics.incr("inference.probe_failures")
            raise RemoteUnavailableError(
                f"Could not fetch media: {describe_failure(fetched)}"
            )

        loop = asyncio.get_running_loop()
        upload = await loop.run_in_executor(
            None, prepare_upload, fetched.payload, request.media_kind, fetched.content_type
        )

        result = await self._client.post_file(
            self.url, upload.filename, upload.content, upload.content_type
        )
        if not isinstance(result, ProbeSuccess):
            metrics.incr("inference.probe_failures")
            raise RemoteUnavailableError(
                f"Inference request failed: {describe_failure(result)}"
            )

        self._logger.info("Single-probe API response: %r", result.payload)
        try:
            return FlagParser.parse(result.payload)
        except ValueError as error:
            raise RemoteUnavailableError(f"Malformed inference payload: {error}") from error


def build_strategy(
    client: ProbeClient,
    config: Optional[InferenceConfig] = None,
    logger: Optional[logging.Logger] = None,
) -> InferenceStrategy:
    """Select the strategy named by `INFERENCE_STRATEGY`."""
    config = config or client.config
    if config.strategy == SingleProbeStrategy.name:
        return SingleProbeStrategy(client, url=config.single_probe_url, logger=logger)
    if config.strategy != MultiProbeStrategy.name:
        raise ValueError(f"Unknown inference strategy: {config.strategy!r}")
    return MultiProbeStrategy(
        client,
        url=config.multi_probe_url,
        max_concurrent=config.max_concurrent_probes,
        logger=logger,
    )


__all__ = [
    "FlagParser",
    "InferenceStrategy",
    "MultiProbeStrategy",
    "PROBE_TASKS",
    "ProbeTask",
    "ResultTextParser",
    "SingleProbeStrategy",
    "build_strategy",
]
