"""
Error taxonomy shared by services and routes.

Services raise these instead of HTTPException so they stay usable from
background tasks and scripts. The handlers registered in main.py turn them
into {"detail": "..."} responses.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SkillSyncError(Exception):
    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(SkillSyncError):
    """Missing or too-short user input."""
    status_code = 400
    default_message = "Invalid request"


class PreconditionFailed(SkillSyncError):
    """The user's data is not ready for the requested operation."""
    status_code = 400
    default_message = "Precondition not met"


class ResourceNotFound(SkillSyncError):
    status_code = 404
    default_message = "Not found"


class UpstreamError(SkillSyncError):
    """The AI model, mail provider or another dependency failed."""
    status_code = 500
    default_message = "Upstream service failed"


class MalformedAIResponse(ValueError):
    """Model output could not be turned into the expected structure."""


async def skillsync_error_handler(request: Request, exc: SkillSyncError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report body/query validation problems as 400 with the first message."""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg", message)
    return JSONResponse(status_code=400, content={"detail": message})
