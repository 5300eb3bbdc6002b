from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Exercise


class ExerciseRepository:
    @staticmethod
    async def list_exercises(db: AsyncSession, group: str | None = None):
        query = select(Exercise).order_by(Exercise.id)
        if group:
            query = query.where(Exercise.group == group)
        result = await db.execute(query)
        return result.scalars().all()

    @staticmethod
    async def get_exercise(db: AsyncSession, exercise_id: int):
        return await db.get(Exercise, exercise_id)

    @staticmethod
    async def create_exercise(db: AsyncSession, data: dict):
        db_exercise = Exercise(**data)
        db.add(db_exercise)
        await db.commit()
        await db.refresh(db_exercise)
        return db_exercise

    @staticmethod
    async def update_exercise(db: AsyncSession, db_exercise: Exercise, update_data: dict):
        for key, value in update_data.items():
            setattr(db_exercise, key, value)
        await db.commit()
        await db.refresh(db_exercise)
        return db_exercise

    @staticmethod
    async def delete_exercise(db: AsyncSession, db_exercise: Exercise) -> None:
        await db.delete(db_exercise)
        await db.commit()
