from .collaborators import ExerciseCatalog, ExerciseInfo, SheetStore, WorkoutRecorder
from .errors import (
    InvalidSessionAction,
    SessionError,
    SessionLoadError,
    WeightSaveError,
    WorkoutSaveError,
)
from .machine import (
    MAX_REST_MINUTES,
    MIN_REST_MINUTES,
    ExerciseEntry,
    Phase,
    WorkoutSession,
    WorkoutSummary,
)
from .runner import SessionRunner
from .ticker import SessionTicker
