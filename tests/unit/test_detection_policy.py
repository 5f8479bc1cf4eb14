import pytest

from models.detection import (DetectionRequest, MediaKind, ViolationCategory,
                              build_outcome)


def test_detected_violations_get_confidence_and_auto_verify():
    outcome = build_outcome([ViolationCategory.POTHOLE], 0.9)
    assert outcome.detected_violations == [ViolationCategory.POTHOLE]
    assert outcome.confidence == pytest.approx(0.9)
    assert outcome.should_auto_verify is True
    assert outcome.message == "Violations detected"


def test_empty_set_has_zero_confidence():
    outcome = build_outcome([], 0.9)
    assert outcome.detected_violations == []
    assert outcome.confidence == 0
    assert outcome.should_auto_verify is False
    assert outcome.message == "No violations detected"


def test_duplicates_are_dropped_in_first_seen_order():
    outcome = build_outcome(
        [
            ViolationCategory.TRIPLE_RIDING,
            ViolationCategory.NO_HELMET,
            ViolationCategory.TRIPLE_RIDING,
        ],
        0.9,
    )
    assert outcome.detected_violations == [
        ViolationCategory.TRIPLE_RIDING,
        ViolationCategory.NO_HELMET,
    ]


def test_threshold_is_strictly_greater_than():
    outcome = build_outcome([ViolationCategory.WRONG_SIDE], 0.8)
    assert outcome.confidence == pytest.approx(0.8)
    assert outcome.should_auto_verify is False


def test_to_dict_uses_wire_names():
    outcome = build_outcome([ViolationCategory.NO_HELMET, ViolationCategory.WRONG_SIDE], 0.9)
    assert outcome.to_dict() == {
        "detectedViolations": ["No Helmet", "Wrong Side"],
        "confidence": 0.9,
        "shouldAutoVerify": True,
        "message": "Violations detected",
    }


def test_request_prefers_image_over_video():
    request = DetectionRequest.from_urls("https://cdn/x.jpg", "https://cdn/x.mp4")
    assert request.media_reference == "https://cdn/x.jpg"
    assert request.media_kind is MediaKind.IMAGE


def test_request_uses_video_when_no_image():
    request = DetectionRequest.from_urls(None, "https://cdn/x.mp4")
    assert request.media_reference == "https://cdn/x.mp4"
    assert request.media_kind is MediaKind.VIDEO


@pytest.mark.parametrize("image_url,video_url", [(None, None), ("", ""), ("", None)])
def test_request_without_media_is_none(image_url, video_url):
    assert DetectionRequest.from_urls(image_url, video_url) is None
