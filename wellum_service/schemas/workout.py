from datetime import date, datetime

from pydantic import BaseModel, Field

from .sheet import SheetExercise


class WorkoutCreate(BaseModel):
    sheet_id: int
    total_seconds: int = Field(..., ge=0)
    exercises: list[SheetExercise] = Field(default_factory=list)
    completed_at: datetime | None = None

    class Config:
        extra = "forbid"


class WorkoutResponse(BaseModel):
    id: int
    user_id: str
    sheet_id: int
    completed_at: datetime
    total_seconds: int
    exercises: list[SheetExercise]

    class Config:
        from_attributes = True


class CalendarDay(BaseModel):
    day: date
    total_seconds: int
    workouts: list[WorkoutResponse]
