import logging

from aiohttp import web

from api.keys import ORCHESTRATOR_KEY

logger = logging.getLogger("violation_detect.api.health")

router = web.RouteTableDef()


@router.get("/health")
async def health(request):
    """Basic liveness probe - always returns ok if the server is running."""
    return web.json_response({"status": "ok"})


@router.get("/ready")
async def ready(request):
    """Readiness probe - reports whether real inference can be attempted.

    Looks at the strategy the running orchestrator actually uses. Detection
    still answers when its endpoint is missing (fallback simulation), but the
    service is not considered ready.
    """
    strategy = getattr(request.app[ORCHESTRATOR_KEY], "strategy", None)
    name = getattr(strategy, "name", "unknown")
    checks = {"strategy": name}
    ready = True

    if getattr(strategy, "url", None):
        checks["inference_endpoint"] = "ok"
    else:
        checks["inference_endpoint"] = "missing"
        ready = False
        logger.info("Readiness check failed: no endpoint configured for %s", name)

    status_code = 200 if ready else 503
    return web.json_response({"ready": ready, "checks": checks}, status=status_code)
