import uuid

import structlog
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from .config import get_settings
from .logging_config import configure_logging
from .routers.exercises import router as exercises_router
from .routers.sessions import router as sessions_router
from .routers.sheets import router as sheets_router
from .routers.workouts import router as workouts_router
from .session import InvalidSessionAction, SessionLoadError, WeightSaveError, WorkoutSaveError
from .session.registry import SessionRegistry

API_PREFIX = "/api/v1"

settings = get_settings()

configure_logging(settings)
logger = structlog.get_logger(__name__)

app = FastAPI(title="wellum-service", version="0.1.0")

Instrumentator().instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)

allow_origins = settings.cors_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=False if allow_origins == ["*"] else settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(
    CorrelationIdMiddleware,
    header_name="X-Request-ID",
    generator=lambda: str(uuid.uuid4()),
    update_request_header=True,
)

app.state.session_registry = SessionRegistry(idle_timeout=settings.SESSION_IDLE_TIMEOUT_SECONDS)


@app.exception_handler(InvalidSessionAction)
async def invalid_session_action_handler(request: Request, exc: InvalidSessionAction):
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


@app.exception_handler(SessionLoadError)
async def session_load_error_handler(request: Request, exc: SessionLoadError):
    # Ownership and not-found errors of the sheet lookup keep their status
    cause = exc.__cause__
    if isinstance(cause, HTTPException):
        return JSONResponse(status_code=cause.status_code, content={"detail": cause.detail})
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)})


@app.exception_handler(WeightSaveError)
async def weight_save_error_handler(request: Request, exc: WeightSaveError):
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)})


@app.exception_handler(WorkoutSaveError)
async def workout_save_error_handler(request: Request, exc: WorkoutSaveError):
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)})


@app.get(f"{API_PREFIX}/health")
async def health():
    return {"status": "ok"}


@app.on_event("startup")
async def startup_event():
    app.state.session_registry.start_reaper(settings.SESSION_REAP_INTERVAL_SECONDS)


@app.on_event("shutdown")
async def shutdown_event():
    registry: SessionRegistry = app.state.session_registry
    logger.info("closing_live_sessions", count=len(registry))
    await registry.close_all()


app.include_router(exercises_router, prefix=API_PREFIX)
app.include_router(sheets_router, prefix=API_PREFIX)
app.include_router(workouts_router, prefix=API_PREFIX)
app.include_router(sessions_router, prefix=API_PREFIX)
