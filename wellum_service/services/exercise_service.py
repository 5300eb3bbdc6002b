import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from .. import schemas
from ..exceptions import ExerciseNotFoundException
from ..models import Exercise
from ..repositories.exercise_repository import ExerciseRepository

logger = structlog.get_logger(__name__)


class ExerciseService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_exercises(self, group: str | None = None) -> list[Exercise]:
        return await ExerciseRepository.list_exercises(self.db, group=group)

    async def get_exercise(self, exercise_id: int) -> Exercise:
        exercise = await ExerciseRepository.get_exercise(self.db, exercise_id)
        if not exercise:
            raise ExerciseNotFoundException(exercise_id)
        return exercise

    async def create_exercise(self, payload: schemas.ExerciseCreate) -> Exercise:
        exercise = await ExerciseRepository.create_exercise(self.db, payload.model_dump())
        logger.info("exercise_created", exercise_id=exercise.id, name=exercise.name)
        return exercise

    async def update_exercise(self, exercise_id: int, payload: schemas.ExerciseUpdate) -> Exercise:
        exercise = await self.get_exercise(exercise_id)
        update_data = payload.model_dump(exclude_unset=True)
        return await ExerciseRepository.update_exercise(self.db, exercise, update_data)

    async def delete_exercise(self, exercise_id: int) -> None:
        exercise = await self.get_exercise(exercise_id)
        await ExerciseRepository.delete_exercise(self.db, exercise)
        logger.info("exercise_deleted", exercise_id=exercise_id)
