from datetime import datetime

from pydantic import BaseModel, Field

MAX_WEIGHT_KG = 1000


class SheetExercise(BaseModel):
    exercise_id: str = Field(..., min_length=1, description="Exercise catalog id")
    serie: int = Field(1, ge=1, description="Number of sets")
    repetitions: int = Field(..., ge=1, description="Repetitions per set")
    weight: float | None = Field(None, ge=0, le=MAX_WEIGHT_KG, description="Last used load in kg")
    notes: str | None = None


class SheetBase(BaseModel):
    name: str = Field(..., max_length=255)
    exercises: list[SheetExercise] = Field(default_factory=list)


class SheetCreate(SheetBase):
    class Config:
        extra = "forbid"


class SheetUpdate(BaseModel):
    name: str | None = Field(None, max_length=255)
    exercises: list[SheetExercise] | None = None


class SheetResponse(SheetBase):
    id: int
    user_id: str
    created_at: datetime

    class Config:
        from_attributes = True
