from collections import defaultdict
from datetime import UTC, date, datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from .. import schemas
from ..exceptions import WorkoutForbiddenException, WorkoutNotFoundException
from ..metrics import WORKOUTS_RECORDED_TOTAL
from ..models import Workout
from ..repositories.workout_repository import WorkoutRepository

logger = structlog.get_logger(__name__)


def _month_bounds(year: int, month: int | None) -> tuple[datetime, datetime]:
    if month is None:
        return datetime(year, 1, 1), datetime(year + 1, 1, 1)
    if month == 12:
        return datetime(year, 12, 1), datetime(year + 1, 1, 1)
    return datetime(year, month, 1), datetime(year, month + 1, 1)


class WorkoutService:
    def __init__(self, db: AsyncSession, user_id: str):
        self.db = db
        self.user_id = user_id

    async def create_workout(self, payload: schemas.WorkoutCreate, source: str = "manual") -> Workout:
        data = payload.model_dump()
        completed_at = data.pop("completed_at", None)
        if completed_at is not None:
            if completed_at.tzinfo is not None:
                completed_at = completed_at.astimezone(UTC)
            data["completed_at"] = completed_at.replace(tzinfo=None)
        # Always the caller, whatever the payload says
        data["user_id"] = self.user_id
        workout = await WorkoutRepository.create_workout(self.db, data)
        WORKOUTS_RECORDED_TOTAL.labels(source=source).inc()
        logger.info(
            "workout_recorded",
            user_id=self.user_id,
            workout_id=workout.id,
            sheet_id=workout.sheet_id,
            total_seconds=workout.total_seconds,
            source=source,
        )
        return workout

    async def list_workouts(self) -> list[Workout]:
        return await WorkoutRepository.list_workouts(self.db, self.user_id)

    async def get_calendar(self, year: int | None = None, month: int | None = None) -> list[dict]:
        """Group the caller's workouts by day, optionally limited to a year or month."""
        completed_from = completed_to = None
        if year is None and month is not None:
            year = datetime.now(UTC).year
        if year is not None:
            completed_from, completed_to = _month_bounds(year, month)

        workouts = await WorkoutRepository.list_workouts(
            self.db,
            self.user_id,
            completed_from=completed_from,
            completed_to=completed_to,
        )
        by_day: dict[date, list[Workout]] = defaultdict(list)
        for workout in workouts:
            by_day[workout.completed_at.date()].append(workout)

        return [
            {
                "day": day,
                "total_seconds": sum(w.total_seconds for w in items),
                "workouts": items,
            }
            for day, items in sorted(by_day.items())
        ]

    async def get_workout(self, workout_id: int) -> Workout:
        workout = await WorkoutRepository.get_workout(self.db, workout_id)
        if not workout:
            raise WorkoutNotFoundException(workout_id)
        if workout.user_id != self.user_id:
            logger.warning(
                "workout_access_denied",
                workout_id=workout_id,
                owner_id=workout.user_id,
                user_id=self.user_id,
            )
            raise WorkoutForbiddenException(workout_id)
        return workout

    async def delete_workout(self, workout_id: int) -> None:
        workout = await self.get_workout(workout_id)
        await WorkoutRepository.delete_workout(self.db, workout)
        logger.info("workout_deleted", user_id=self.user_id, workout_id=workout_id)
