import time
from collections import defaultdict, deque
from typing import Deque, Dict, List

MAX_TIMING_SAMPLES = 1000

# Very small in-memory metrics store; enough to see how often we fall back.
_counters: Dict[str, int] = defaultdict(int)
# only the most recent samples are kept per timing name
_timings: Dict[str, Deque[float]] = defaultdict(lambda: deque(maxlen=MAX_TIMING_SAMPLES))


def incr(name: str, amount: int = 1) -> None:
    _counters[name] += amount


def get_counter(name: str) -> int:
    return _counters.get(name, 0)


def record_timing(name: str, value_ms: float) -> None:
    _timings[name].append(value_ms)


def get_timings(name: str) -> List[float]:
    return list(_timings.get(name, []))


def snapshot() -> Dict[str, int]:
    return dict(_counters)


def reset() -> None:
    _counters.clear()
    _timings.clear()


def time_ms() -> float:
    return time.monotonic() * 1000.0
