from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Workout


class WorkoutRepository:
    @staticmethod
    async def list_workouts(
        db: AsyncSession,
        user_id: str,
        completed_from: datetime | None = None,
        completed_to: datetime | None = None,
    ):
        query = select(Workout).where(Workout.user_id == user_id)
        if completed_from is not None:
            query = query.where(Workout.completed_at >= completed_from)
        if completed_to is not None:
            query = query.where(Workout.completed_at < completed_to)
        result = await db.execute(query.order_by(Workout.completed_at.desc(), Workout.id.desc()))
        return result.scalars().all()

    @staticmethod
    async def get_workout(db: AsyncSession, workout_id: int):
        return await db.get(Workout, workout_id)

    @staticmethod
    async def create_workout(db: AsyncSession, data: dict):
        db_workout = Workout(**data)
        db.add(db_workout)
        await db.commit()
        await db.refresh(db_workout)
        return db_workout

    @staticmethod
    async def delete_workout(db: AsyncSession, db_workout: Workout) -> None:
        await db.delete(db_workout)
        await db.commit()
