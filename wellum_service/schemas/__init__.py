# This file makes the schemas directory a Python package

from .exercise import ExerciseBase, ExerciseCreate, ExerciseResponse, ExerciseUpdate
from .session import (
    SessionCreate,
    SessionExerciseInfo,
    SessionSaveResponse,
    SessionStateResponse,
    WeightUpdate,
)
from .sheet import SheetBase, SheetCreate, SheetExercise, SheetResponse, SheetUpdate
from .workout import CalendarDay, WorkoutCreate, WorkoutResponse
