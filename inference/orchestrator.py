import logging
from typing import Optional

from config.constants import DETECTED_CONFIDENCE
from inference.fallback import FallbackSimulator
from inference.probe_client import ProbeClient
from inference.strategies import InferenceStrategy, build_strategy
from models.detection import DetectionOutcome, DetectionRequest, build_outcome
from utils import metrics

LOGGER_NAME = "violation_detect.inference.orchestrator"


class DetectionOrchestrator:
    """Turns one detection request into one outcome.

    The selected strategy talks to the remote inference service. Whatever it
    raises (network errors, bad status codes, malformed payloads, an
    unconfigured endpoint) is logged and answered by the fallback simulator,
    so callers never see remote-service failures.
    """

    def __init__(
        self,
        strategy: Optional[InferenceStrategy] = None,
        fallback: Optional[FallbackSimulator] = None,
        client: Optional[ProbeClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self._client = client
        if strategy is None:
            self._client = self._client or ProbeClient()
            strategy = build_strategy(self._client, logger=self._logger)
        self.strategy = strategy
        self.fallback = fallback or FallbackSimulator()

    async def detect(self, request: DetectionRequest) -> DetectionOutcome:
        metrics.incr("inference.requests")
        started = metrics.time_ms()
        self._logger.info(
            "Sending %s to ML API via %s: %s",
            request.media_kind.value,
            self.strategy.name,
            request.media_reference,
        )
        try:
            violations = await self.strategy.detect(request)
        except Exception as error:
            metrics.incr("inference.fallbacks")
            self._logger.error("API detection error: %s", error)
            self._logger.info("API call failed. Using fallback simulation.")
            return self.fallback.simulate(request.media_kind)
        finally:
            metrics.record_timing("inference.detect_ms", metrics.time_ms() - started)

        return build_outcome(violations, DETECTED_CONFIDENCE)

    async def close(self) -> None:
        """Close HTTP client resources."""
        if self._client is not None:
            await self._client.close()


__all__ = ["DetectionOrchestrator"]
