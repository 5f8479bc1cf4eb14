"""Prepare fetched media for upload to the single-probe inference endpoint.

Images are decoded, shrunk to the upload bounds and re-encoded as JPEG so
the remote model always receives one predictable format. Video bytes are
forwarded untouched.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import cv2
import numpy as np

from config.constants import (DEFAULT_VIDEO_CONTENT_TYPE,
                              IMAGE_ENCODING_FORMAT,
                              IMAGE_JPEG_QUALITY)
from models.detection import MediaKind
from preprocessing.resizer import resize_for_upload

logger = logging.getLogger("violation_detect.preprocessing.media_encoder")


@dataclass
class MediaUpload:
    filename: str
    content: bytes
    content_type: str


def decode_image(data: bytes) -> np.ndarray:
    """Decode JPEG/PNG/WebP bytes to a NumPy array."""
    nparr = np.frombuffer(data, np.uint8)
    img = cv2.imdecode(nparr, cv2.IMREAD_COLOR)
    if img is None:
        raise ValueError("Invalid image format")
    return img


def encode_to_jpeg(image: np.ndarray) -> Optional[bytes]:
    """Encode numpy array image to JPEG bytes."""
    success, buffer = cv2.imencode(
        IMAGE_ENCODING_FORMAT, image, [int(cv2.IMWRITE_JPEG_QUALITY), IMAGE_JPEG_QUALITY]
    )
    if not success:
        return None
    return buffer.tobytes()


def prepare_upload(
    data: bytes, media_kind: MediaKind, content_type: Optional[str] = None
) -> MediaUpload:
    if media_kind is MediaKind.VIDEO:
        return MediaUpload(
            filename="media.mp4",
            content=data,
            content_type=content_type or DEFAULT_VIDEO_CONTENT_TYPE,
        )

    try:
        encoded = encode_to_jpeg(resize_for_upload(decode_image(data)))
    except (ValueError, cv2.error) as error:
        logger.warning("Could not re-encode image, uploading as fetched: %s", error)
        encoded = None

    if encoded is None:
        return MediaUpload(
            filename="media",
            content=data,
            content_type=content_type or "application/octet-stream",
        )
    return MediaUpload(filename="media.jpg", content=encoded, content_type="image/jpeg")
