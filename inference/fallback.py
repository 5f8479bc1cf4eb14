import logging
import random
from typing import List, Optional, Sequence

from config.constants import FALLBACK_CONFIDENCE, FALLBACK_MAX_VIOLATIONS
from models.detection import (DetectionOutcome, MediaKind, ViolationCategory,
                              build_outcome)

logger = logging.getLogger("violation_detect.inference.fallback")

SIMULATED_CATEGORIES: Sequence[ViolationCategory] = (
    ViolationCategory.TRIPLE_RIDING,
    ViolationCategory.NO_HELMET,
    ViolationCategory.WRONG_SIDE,
    ViolationCategory.POTHOLE,
)


class FallbackSimulator:
    """Simulated detection used when the remote inference service is down.

    Draws 0-2 distinct categories at random so a report submission always
    gets a well-formed outcome. Pass a seeded `random.Random` (or any object
    with `randint` and `choice`) to make results reproducible.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def simulate(self, media_kind: Optional[MediaKind] = None) -> DetectionOutcome:
        count = self._rng.randint(0, FALLBACK_MAX_VIOLATIONS)
        chosen: List[ViolationCategory] = []
        while len(chosen) < count:
            candidate = self._rng.choice(SIMULATED_CATEGORIES)
            if candidate not in chosen:
                chosen.append(candidate)

        logger.info(
            "Fallback simulation produced %d violation(s) for %s",
            len(chosen),
            media_kind.value if media_kind else "media",
        )
        return build_outcome(chosen, FALLBACK_CONFIDENCE)


__all__ = ["FallbackSimulator", "SIMULATED_CATEGORIES"]
