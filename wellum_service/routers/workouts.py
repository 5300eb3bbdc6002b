from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from .. import schemas
from ..database import get_db
from ..dependencies import get_current_user_id
from ..services.workout_service import WorkoutService

router = APIRouter(prefix="/workouts")


def get_workout_service(
    db: AsyncSession = Depends(get_db), user_id: str = Depends(get_current_user_id)
) -> WorkoutService:
    return WorkoutService(db, user_id=user_id)


@router.post("/", response_model=schemas.WorkoutResponse, status_code=status.HTTP_201_CREATED)
async def create_workout(payload: schemas.WorkoutCreate, service: WorkoutService = Depends(get_workout_service)):
    return await service.create_workout(payload)


@router.get("/", response_model=list[schemas.WorkoutResponse])
async def list_workouts(service: WorkoutService = Depends(get_workout_service)):
    return await service.list_workouts()


@router.get("/calendar", response_model=list[schemas.CalendarDay])
async def get_workout_calendar(
    year: int | None = Query(None, ge=1970, le=9999),
    month: int | None = Query(None, ge=1, le=12),
    service: WorkoutService = Depends(get_workout_service),
):
    return await service.get_calendar(year=year, month=month)


@router.get("/{workout_id}", response_model=schemas.WorkoutResponse)
async def get_workout(workout_id: int, service: WorkoutService = Depends(get_workout_service)):
    return await service.get_workout(workout_id)


@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workout(workout_id: int, service: WorkoutService = Depends(get_workout_service)):
    await service.delete_workout(workout_id)
