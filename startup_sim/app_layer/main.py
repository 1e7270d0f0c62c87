"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config import get_settings, setup_logging
from startup_sim.app_layer.routers import companies, decisions, events, leaderboard
from startup_sim.data_layer.game_repository import RecordNotFoundError
from startup_sim.simulation_layer.errors import (
    DecisionClosedError,
    InvalidOptionError,
    UnknownDecisionTypeError,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("Startup simulator API ready")
    yield


app = FastAPI(
    title=get_settings().api.title,
    description="Quarterly business simulation for a virtual startup",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(
    companies.router, prefix="/api/v1/companies", tags=["companies"]
)
app.include_router(
    decisions.router, prefix="/api/v1/companies", tags=["decisions"]
)
app.include_router(
    events.router, prefix="/api/v1/events", tags=["events"]
)
app.include_router(
    leaderboard.router, prefix="/api/v1/leaderboard", tags=["leaderboard"]
)


def _error(status_code: int, exc: Exception) -> JSONResponse:
    logger.warning("%s: %s", type(exc).__name__, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc), "error": type(exc).__name__})


@app.exception_handler(InvalidOptionError)
async def invalid_option_handler(request: Request, exc: InvalidOptionError):
    return _error(400, exc)


@app.exception_handler(UnknownDecisionTypeError)
async def unknown_type_handler(request: Request, exc: UnknownDecisionTypeError):
    return _error(400, exc)


@app.exception_handler(DecisionClosedError)
async def decision_closed_handler(request: Request, exc: DecisionClosedError):
    return _error(409, exc)


@app.exception_handler(RecordNotFoundError)
async def not_found_handler(request: Request, exc: RecordNotFoundError):
    return _error(404, exc)


@app.get("/health")
async def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    api = get_settings().api
    uvicorn.run(app, host=api.host, port=api.port)
