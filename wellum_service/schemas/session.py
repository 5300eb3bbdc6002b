from pydantic import BaseModel, Field

from .sheet import MAX_WEIGHT_KG, SheetExercise


class SessionCreate(BaseModel):
    sheet_id: int
    rest_minutes: int = Field(1, ge=1, le=5, description="Rest between repetitions, in minutes")


class WeightUpdate(BaseModel):
    weight: float = Field(..., ge=0, le=MAX_WEIGHT_KG)


class SessionExerciseInfo(BaseModel):
    id: int
    name: str
    description: str | None = None
    image_url: str | None = None
    video_url: str | None = None

    class Config:
        from_attributes = True


class SessionStateResponse(BaseModel):
    id: str
    sheet_id: int
    rest_minutes: int
    phase: str
    phase_timer_seconds: int
    total_elapsed_seconds: int
    current_exercise_index: int
    current_rep: int
    completed: bool
    ready: bool
    exercises: list[SheetExercise]
    current_exercise: SheetExercise | None = None
    current_exercise_info: SessionExerciseInfo | None = None
    exercise_info_error: str | None = None


class SessionSaveResponse(BaseModel):
    session_id: str
    workout_id: int
    total_seconds: int
