import structlog
from fastapi import APIRouter, Depends, status

from .. import schemas
from ..config import get_settings
from ..database import AsyncSessionLocal
from ..dependencies import get_current_user_id, get_session_registry
from ..session import SessionLoadError, SessionRunner
from ..session.registry import SessionRegistry
from ..session.stores import DatabaseExerciseCatalog, DatabaseSheetStore, DatabaseWorkoutRecorder

router = APIRouter(prefix="/sessions")

logger = structlog.get_logger(__name__)


def get_runner(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
    user_id: str = Depends(get_current_user_id),
) -> SessionRunner:
    return registry.get(session_id, user_id)


async def _state_response(runner: SessionRunner) -> schemas.SessionStateResponse:
    info = None
    info_error = None
    try:
        info = await runner.describe_current_exercise()
    except SessionLoadError as exc:
        info_error = str(exc)
    return schemas.SessionStateResponse(
        id=runner.id,
        current_exercise_info=schemas.SessionExerciseInfo.model_validate(info) if info else None,
        exercise_info_error=info_error,
        **runner.session.snapshot(),
    )


@router.post("/", response_model=schemas.SessionStateResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    payload: schemas.SessionCreate,
    registry: SessionRegistry = Depends(get_session_registry),
    user_id: str = Depends(get_current_user_id),
):
    logger.info(
        "workout_session_create_requested",
        user_id=user_id,
        sheet_id=payload.sheet_id,
        rest_minutes=payload.rest_minutes,
    )
    runner = await SessionRunner.load(
        payload.sheet_id,
        payload.rest_minutes,
        sheet_store=DatabaseSheetStore(AsyncSessionLocal, user_id),
        catalog=DatabaseExerciseCatalog(AsyncSessionLocal),
        recorder=DatabaseWorkoutRecorder(AsyncSessionLocal, user_id),
        user_id=user_id,
        tick_interval=get_settings().SESSION_TICK_SECONDS,
    )
    registry.add(runner)
    return await _state_response(runner)


@router.get("/{session_id}", response_model=schemas.SessionStateResponse)
async def get_session(runner: SessionRunner = Depends(get_runner)):
    return await _state_response(runner)


@router.post("/{session_id}/start", response_model=schemas.SessionStateResponse)
async def start_session(runner: SessionRunner = Depends(get_runner)):
    runner.start()
    return await _state_response(runner)


@router.post("/{session_id}/rest", response_model=schemas.SessionStateResponse)
async def begin_rest(runner: SessionRunner = Depends(get_runner)):
    runner.begin_rest()
    return await _state_response(runner)


@router.post("/{session_id}/end-repetition", response_model=schemas.SessionStateResponse)
async def end_repetition(runner: SessionRunner = Depends(get_runner)):
    runner.end_repetition()
    return await _state_response(runner)


@router.post("/{session_id}/skip", response_model=schemas.SessionStateResponse)
async def skip_exercise(runner: SessionRunner = Depends(get_runner)):
    runner.skip_exercise()
    return await _state_response(runner)


@router.post("/{session_id}/advance", response_model=schemas.SessionStateResponse)
async def advance_session(runner: SessionRunner = Depends(get_runner)):
    runner.advance()
    return await _state_response(runner)


@router.put("/{session_id}/weight", response_model=schemas.SessionStateResponse)
async def edit_weight(payload: schemas.WeightUpdate, runner: SessionRunner = Depends(get_runner)):
    await runner.edit_weight(payload.weight)
    return await _state_response(runner)


@router.post("/{session_id}/save", response_model=schemas.SessionSaveResponse)
async def save_session(
    runner: SessionRunner = Depends(get_runner),
    registry: SessionRegistry = Depends(get_session_registry),
):
    workout_id = await runner.save()
    await registry.discard(runner.id)
    return schemas.SessionSaveResponse(
        session_id=runner.id,
        workout_id=workout_id,
        total_seconds=runner.session.total_elapsed_seconds,
    )


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def abandon_session(
    runner: SessionRunner = Depends(get_runner),
    registry: SessionRegistry = Depends(get_session_registry),
):
    logger.info("workout_session_abandon_requested", session_id=runner.id, user_id=runner.user_id)
    await registry.discard(runner.id)
