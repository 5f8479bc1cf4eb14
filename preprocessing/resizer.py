import cv2
import numpy as np

from config.constants import MAX_IMAGE_HEIGHT as MAX_HEIGHT
from config.constants import MAX_IMAGE_WIDTH as MAX_WIDTH
from config.constants import MIN_IMAGE_DIMENSION as MIN_DIMENSION


def fits_upload_bounds(image: np.ndarray) -> bool:
    """Return True if image resolution is within the upload bounds (<=1280x720)."""
    height, width = image.shape[:2]
    return height <= MAX_HEIGHT and width <= MAX_WIDTH


def resize_for_upload(image: np.ndarray) -> np.ndarray:
    """Shrink image to fit within 1280x720 while preserving aspect ratio."""
    if fits_upload_bounds(image):
        return image

    height, width = image.shape[:2]
    scale = min(MAX_HEIGHT / height, MAX_WIDTH / width)
    new_width = max(MIN_DIMENSION, int(width * scale))
    new_height = max(MIN_DIMENSION, int(height * scale))

    return cv2.resize(image, (new_width, new_height), interpolation=cv2.INTER_AREA)
