"""Error taxonomy for the detection service.

Only `RequestValidationError` and `MethodNotAllowedError` are meant to reach
callers as non-200 responses; `RemoteUnavailableError` is absorbed by the
orchestrator, which answers with a simulated outcome instead.
"""


class DetectionError(Exception):
    """Base class for errors raised by the detection service."""


class RequestValidationError(DetectionError):
    status = 400


class MethodNotAllowedError(DetectionError):
    status = 405


class RemoteUnavailableError(DetectionError):
    """The remote inference service could not be reached or trusted."""
