"""Interfaces a running session needs from the rest of the service."""

from dataclasses import dataclass
from typing import Protocol

from .machine import ExerciseEntry, WorkoutSummary


@dataclass(frozen=True)
class ExerciseInfo:
    id: int
    name: str
    description: str | None = None
    image_url: str | None = None
    video_url: str | None = None


class SheetStore(Protocol):
    async def get_exercises(self, sheet_id: int) -> list[ExerciseEntry]: ...

    async def save_exercises(self, sheet_id: int, exercises: list[ExerciseEntry]) -> None: ...


class ExerciseCatalog(Protocol):
    async def get_exercise(self, exercise_id: str) -> ExerciseInfo | None: ...


class WorkoutRecorder(Protocol):
    async def record(self, summary: WorkoutSummary) -> int: ...
