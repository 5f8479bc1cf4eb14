import logging
from typing import Any, Dict, Optional

from aiohttp import web
from pydantic import ValidationError

from api import health
from api.keys import ORCHESTRATOR_KEY
from config.constants import CORS_HEADERS, DETECT_ROUTE_PATH
from inference.orchestrator import DetectionOrchestrator
from models.detection import DetectionRequest
from models.errors import MethodNotAllowedError, RequestValidationError
from models.requests import DetectViolationsBody

logger = logging.getLogger("violation_detect.server")

MEDIA_URL_REQUIRED = "Media URL is required"
METHOD_NOT_ALLOWED = "Method not allowed"
INTERNAL_SERVER_ERROR = "Internal server error"

router = web.RouteTableDef()


@web.middleware
async def cors_middleware(request: web.Request, handler) -> web.StreamResponse:
    """Stamp the cross-origin header set on every response, errors included."""
    try:
        response = await handler(request)
    except web.HTTPException as error:
        error.headers.update(CORS_HEADERS)
        raise
    except Exception as error:
        logger.exception("Unhandled error for %s %s: %s", request.method, request.path, error)
        response = _error_response(500, INTERNAL_SERVER_ERROR, details=str(error))
    response.headers.update(CORS_HEADERS)
    return response


def _error_response(status: int, error: str, details: Optional[str] = None) -> web.Response:
    body: Dict[str, Any] = {"error": error}
    if details is not None:
        body["details"] = details
    return web.json_response(body, status=status)


async def parse_detection_request(request: web.Request) -> DetectionRequest:
    """Validate the method and body of an inbound detection request."""
    if request.method != "POST":
        raise MethodNotAllowedError(METHOD_NOT_ALLOWED)

    raw = await request.read()
    try:
        body = DetectViolationsBody.model_validate_json(raw or b"{}")
    except ValidationError as error:
        logger.info("Rejected detection request body: %s", error.errors()[:1])
        raise RequestValidationError(MEDIA_URL_REQUIRED) from error

    detection_request = DetectionRequest.from_urls(body.imageUrl, body.videoUrl)
    if detection_request is None:
        raise RequestValidationError(MEDIA_URL_REQUIRED)
    return detection_request


@router.route("*", DETECT_ROUTE_PATH)
async def detect_violations(request: web.Request) -> web.Response:
    """Run violation detection for one image or video reference."""
    if request.method == "OPTIONS":
        return web.Response(status=204)

    try:
        detection_request = await parse_detection_request(request)
    except (MethodNotAllowedError, RequestValidationError) as error:
        return _error_response(error.status, str(error))

    logger.info("Processing media: %s", detection_request.media_reference)

    orchestrator = request.app[ORCHESTRATOR_KEY]
    try:
        outcome = await orchestrator.detect(detection_request)
    except Exception as error:
        logger.exception("Function error: %s", error)
        return _error_response(500, INTERNAL_SERVER_ERROR, details=str(error))

    return web.json_response(outcome.to_dict())


async def close_orchestrator(app: web.Application) -> None:
    """Release HTTP resources held by the orchestrator on shutdown."""
    logger.info("Shutting down, closing inference client...")
    await app[ORCHESTRATOR_KEY].close()


def create_app(orchestrator: Optional[DetectionOrchestrator] = None) -> web.Application:
    app = web.Application(middlewares=[cors_middleware])
    app[ORCHESTRATOR_KEY] = orchestrator or DetectionOrchestrator()
    app.add_routes(router)
    app.add_routes(health.router)
    app.on_cleanup.append(close_orchestrator)
    return app
