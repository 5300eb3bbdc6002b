"""Database-backed session collaborators.

A live session outlives the request that created it, so every call opens
its own database session from ``session_factory``. Ownership checks of the
CRUD services apply unchanged.
"""

from collections.abc import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from .. import schemas
from ..exceptions import NotFoundException
from ..services.exercise_service import ExerciseService
from ..services.sheet_service import SheetService
from ..services.workout_service import WorkoutService
from .collaborators import ExerciseInfo
from .machine import ExerciseEntry, WorkoutSummary

SessionFactory = Callable[[], AsyncSession]


class DatabaseSheetStore:
    def __init__(self, session_factory: SessionFactory, user_id: str):
        self._session_factory = session_factory
        self.user_id = user_id

    async def get_exercises(self, sheet_id: int) -> list[ExerciseEntry]:
        async with self._session_factory() as db:
            sheet = await SheetService(db, self.user_id).get_sheet(sheet_id)
            return [ExerciseEntry.from_dict(item) for item in sheet.exercises or []]

    async def save_exercises(self, sheet_id: int, exercises: list[ExerciseEntry]) -> None:
        async with self._session_factory() as db:
            await SheetService(db, self.user_id).replace_exercises(sheet_id, [e.to_dict() for e in exercises])


class DatabaseExerciseCatalog:
    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    async def get_exercise(self, exercise_id: str) -> ExerciseInfo | None:
        try:
            pk = int(exercise_id)
        except (TypeError, ValueError):
            return None
        async with self._session_factory() as db:
            try:
                exercise = await ExerciseService(db).get_exercise(pk)
            except NotFoundException:
                return None
            return ExerciseInfo(
                id=exercise.id,
                name=exercise.name,
                description=exercise.description,
                image_url=exercise.image_url,
                video_url=exercise.video_url,
            )


class DatabaseWorkoutRecorder:
    def __init__(self, session_factory: SessionFactory, user_id: str):
        self._session_factory = session_factory
        self.user_id = user_id

    async def record(self, summary: WorkoutSummary) -> int:
        payload = schemas.WorkoutCreate(**summary.to_dict())
        async with self._session_factory() as db:
            workout = await WorkoutService(db, self.user_id).create_workout(payload, source="session")
            return workout.id
