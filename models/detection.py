from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from config.constants import AUTO_VERIFY_THRESHOLD

VIOLATIONS_DETECTED_MESSAGE = "Violations detected"
NO_VIOLATIONS_MESSAGE = "No violations detected"


class MediaKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class ViolationCategory(str, Enum):
    """Canonical violation identifiers, independent of the remote vocabulary."""

    NO_HELMET = "No Helmet"
    TRIPLE_RIDING = "Triple Riding"
    WRONG_SIDE = "Wrong Side"
    POTHOLE = "Pothole"


@dataclass
class DetectionRequest:
    media_reference: str
    media_kind: MediaKind

    @classmethod
    def from_urls(
        cls, image_url: Optional[str] = None, video_url: Optional[str] = None
    ) -> Optional["DetectionRequest"]:
        """Pick the single media reference to analyse.

        The image wins when both are supplied. Returns None when neither is usable.
        """
        if image_url:
            return cls(media_reference=image_url, media_kind=MediaKind.IMAGE)
        if video_url:
            return cls(media_reference=video_url, media_kind=MediaKind.VIDEO)
        return None


@dataclass
class DetectionOutcome:
    detected_violations: List[ViolationCategory] = field(default_factory=list)
    confidence: float = 0.0
    should_auto_verify: bool = False
    message: str = NO_VIOLATIONS_MESSAGE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "detectedViolations": [v.value for v in self.detected_violations],
            "confidence": self.confidence,
            "shouldAutoVerify": self.should_auto_verify,
            "message": self.message,
        }


def build_outcome(
    violations: Iterable[ViolationCategory], confidence_when_detected: float
) -> DetectionOutcome:
    """Apply the confidence policy shared by the real and the simulated paths.

    Duplicates are dropped keeping first-seen order. Confidence is
    `confidence_when_detected` for a non-empty set and 0 otherwise, and a
    report auto-verifies only when confidence is strictly above the threshold.
    """
    unique = list(dict.fromkeys(violations))
    confidence = confidence_when_detected if unique else 0.0
    return DetectionOutcome(
        detected_violations=unique,
        confidence=confidence,
        should_auto_verify=confidence > AUTO_VERIFY_THRESHOLD,
        message=VIOLATIONS_DETECTED_MESSAGE if unique else NO_VIOLATIONS_MESSAGE,
    )
