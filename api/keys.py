from aiohttp import web

from inference.orchestrator import DetectionOrchestrator

ORCHESTRATOR_KEY = web.AppKey("orchestrator", DetectionOrchestrator)
