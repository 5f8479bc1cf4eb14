"""Shared pytest fixtures for tests.

Provides JPEG bytes, a logger double that records what the detection
pipeline reports, scripted random sources for the fallback simulator, and
helpers to build a `ProbeClient` on top of `httpx.MockTransport`.
"""

from typing import Callable, List, Optional, Sequence, Tuple

import cv2
import httpx
import numpy as np
import pytest

from inference.probe_client import InferenceConfig, ProbeClient
from utils import metrics


class RecordingLogger:
    """Logger double exposing the subset of `logging.Logger` the code uses."""

    def __init__(self):
        self.records: List[Tuple[str, str]] = []

    def _record(self, level: str, msg: str, *args) -> None:
        self.records.append((level, msg % args if args else msg))

    def debug(self, msg, *args, **kwargs):
        self._record("debug", msg, *args)

    def info(self, msg, *args, **kwargs):
        self._record("info", msg, *args)

    def warning(self, msg, *args, **kwargs):
        self._record("warning", msg, *args)

    def error(self, msg, *args, **kwargs):
        self._record("error", msg, *args)

    def messages(self, level: str) -> List[str]:
        return [message for lvl, message in self.records if lvl == level]


class ScriptedRandom:
    """Random source returning a fixed count and a fixed sequence of picks."""

    def __init__(self, count: int, picks: Sequence = ()):
        self.count = count
        self.picks = list(picks)

    def randint(self, a: int, b: int) -> int:
        assert a <= self.count <= b
        return self.count

    def choice(self, seq):
        pick = self.picks.pop(0)
        assert pick in seq
        return pick


def make_probe_client(
    handler: Callable[[httpx.Request], httpx.Response],
    **config_overrides,
) -> ProbeClient:
    config = InferenceConfig(**config_overrides)
    return ProbeClient(config=config, transport=httpx.MockTransport(handler))


def make_jpeg_bytes(height: int = 100, width: int = 200) -> bytes:
    img = np.zeros((height, width, 3), dtype=np.uint8)
    _, buf = cv2.imencode(".jpg", img)
    return buf.tobytes()


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def jpeg_bytes():
    """Return JPEG-encoded bytes for a small black image."""
    return make_jpeg_bytes()
