"""Application-wide constants and configuration values.

This module centralizes all magic numbers and configuration constants
so the detection policy and the remote inference endpoints live in one place.
"""
import os

# ============================================================================
# SERVER CONFIGURATION
# ============================================================================
DEFAULT_SERVER_HOST = "0.0.0.0"
# Cloud Run injects PORT env var; use it if available, otherwise default to 8000
SERVER_PORT = int(os.getenv("PORT", os.getenv("SERVER_PORT", "8000")))
DETECT_ROUTE_PATH = "/detect-violations"

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# ============================================================================
# CROSS-ORIGIN POLICY
# ============================================================================
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

# ============================================================================
# REMOTE INFERENCE SERVICE
# ============================================================================
# "multi_probe" (one call per task label) or "single_probe" (one upload)
INFERENCE_STRATEGY = os.getenv("INFERENCE_STRATEGY", "multi_probe")
MULTI_PROBE_API_URL = os.getenv(
    "MULTI_PROBE_API_URL", "https://majeed786-spot-violation.hf.space/api/predict"
)
SINGLE_PROBE_API_URL = os.getenv("SINGLE_PROBE_API_URL", "")
INFERENCE_API_KEY = os.getenv("INFERENCE_API_KEY", "")
INFERENCE_HTTP_TIMEOUT_SEC = float(os.getenv("INFERENCE_HTTP_TIMEOUT_SEC", "8.0"))
INFERENCE_MAX_CONCURRENT_PROBES = int(os.getenv("INFERENCE_MAX_CONCURRENT_PROBES", "4"))

# ============================================================================
# DETECTION POLICY
# ============================================================================
DETECTED_CONFIDENCE = 0.9  # real inference path
FALLBACK_CONFIDENCE = 0.85  # simulated path, still above the auto-verify bar
AUTO_VERIFY_THRESHOLD = 0.8  # strictly greater than
FALLBACK_MAX_VIOLATIONS = 2

# ============================================================================
# MEDIA UPLOAD
# ============================================================================
MAX_IMAGE_WIDTH = 1280
MAX_IMAGE_HEIGHT = 720
MIN_IMAGE_DIMENSION = 1
IMAGE_ENCODING_FORMAT = ".jpg"
IMAGE_JPEG_QUALITY = int(os.getenv("IMAGE_JPEG_QUALITY", "90"))
DEFAULT_VIDEO_CONTENT_TYPE = "video/mp4"
