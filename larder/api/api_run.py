from typing import Optional
import logging

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse

from larder.api.routes import items, recipes, suggestions
from larder.domain.errors import AlreadyExistsError, InvalidArgumentError, LarderError, NotFoundError
from larder.events.web_observers import start as start_event_observers, get_events as get_web_events
from larder.utilities.config import DEBUG

# Logging
logger = logging.getLogger("larder_app")

app = FastAPI(title="Larder", debug=DEBUG)
app.include_router(items.router)
app.include_router(recipes.router)
app.include_router(suggestions.router)

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (AlreadyExistsError, 409),
    (InvalidArgumentError, 400),
)


@app.on_event("startup")
def _startup_web_observers():
    start_event_observers()


@app.exception_handler(LarderError)
async def _larder_error_handler(request: Request, exc: LarderError):
    status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(exc, cls)), 400)
    logger.warning("%s %s -> %d: %s", request.method, request.url.path, status, exc)
    return JSONResponse(status_code=status, content={"error": str(exc)})


@app.get("/api/health")
def health():
    return {"status": "ok"}


@app.get("/api/events")
def api_events(since: Optional[int] = Query(default=None, ge=0)):
    """Recent inventory events for polling clients."""
    return get_web_events(since)
