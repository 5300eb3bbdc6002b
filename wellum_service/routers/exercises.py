import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from .. import schemas
from ..database import get_db
from ..dependencies import get_current_user_id
from ..services.exercise_service import ExerciseService

router = APIRouter(prefix="/exercises", dependencies=[Depends(get_current_user_id)])

logger = structlog.get_logger(__name__)


def get_exercise_service(db: AsyncSession = Depends(get_db)) -> ExerciseService:
    return ExerciseService(db)


@router.get("/", response_model=list[schemas.ExerciseResponse])
async def list_exercises(group: str | None = None, service: ExerciseService = Depends(get_exercise_service)):
    return await service.list_exercises(group=group)


@router.get("/{exercise_id}", response_model=schemas.ExerciseResponse)
async def get_exercise(exercise_id: int, service: ExerciseService = Depends(get_exercise_service)):
    return await service.get_exercise(exercise_id)


@router.post("/", response_model=schemas.ExerciseResponse, status_code=status.HTTP_201_CREATED)
async def create_exercise(
    payload: schemas.ExerciseCreate,
    service: ExerciseService = Depends(get_exercise_service),
    user_id: str = Depends(get_current_user_id),
):
    logger.info("exercise_create_requested", user_id=user_id, name=payload.name, group=payload.group)
    return await service.create_exercise(payload)


@router.put("/{exercise_id}", response_model=schemas.ExerciseResponse)
async def update_exercise(
    exercise_id: int,
    payload: schemas.ExerciseUpdate,
    service: ExerciseService = Depends(get_exercise_service),
):
    return await service.update_exercise(exercise_id, payload)


@router.delete("/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exercise(
    exercise_id: int,
    service: ExerciseService = Depends(get_exercise_service),
    user_id: str = Depends(get_current_user_id),
):
    logger.info("exercise_delete_requested", user_id=user_id, exercise_id=exercise_id)
    await service.delete_exercise(exercise_id)
