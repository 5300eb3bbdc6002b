"""Guided workout session state machine.

A session walks through the exercises of a sheet rep by rep. Each rep is a
``working`` interval counted up by the ticker, followed by a ``resting``
countdown. When the countdown reaches zero (or the user ends the rest early)
the rep is complete and the session goes back to ``idle``, either on the
next rep of the same exercise or on the first rep of the next exercise.
Completing the last rep of the last exercise marks the session completed.

The class is synchronous and owns no timer; ``tick()`` is driven once per
second by :class:`~wellum_service.session.ticker.SessionTicker`.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

import structlog

from .errors import InvalidSessionAction

logger = structlog.get_logger(__name__)

MIN_REST_MINUTES = 1
MAX_REST_MINUTES = 5
MAX_WEIGHT = 1000.0


class Phase(str, Enum):
    IDLE = "idle"
    WORKING = "working"
    RESTING = "resting"


@dataclass
class ExerciseEntry:
    exercise_id: str
    target_sets: int
    target_reps: int
    weight: float | None = None
    notes: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExerciseEntry":
        """Build an entry from the sheet's stored shape (``serie``/``repetitions``)."""
        return cls(
            exercise_id=str(data["exercise_id"]),
            target_sets=int(data.get("serie") or 1),
            target_reps=int(data["repetitions"]),
            weight=data.get("weight"),
            notes=data.get("notes"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "exercise_id": self.exercise_id,
            "serie": self.target_sets,
            "repetitions": self.target_reps,
            "weight": self.weight,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class WorkoutSummary:
    sheet_id: int | None
    total_seconds: int
    exercises: tuple[ExerciseEntry, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "sheet_id": self.sheet_id,
            "total_seconds": self.total_seconds,
            "exercises": [e.to_dict() for e in self.exercises],
        }


class WorkoutSession:
    def __init__(
        self,
        exercises: Iterable[ExerciseEntry],
        rest_minutes: int,
        sheet_id: int | None = None,
    ):
        if not MIN_REST_MINUTES <= rest_minutes <= MAX_REST_MINUTES:
            raise ValueError(f"rest_minutes must be between {MIN_REST_MINUTES} and {MAX_REST_MINUTES}")
        self.sheet_id = sheet_id
        self.rest_minutes = rest_minutes
        # Entries are copied so weight edits never leak into the caller's objects
        self.exercises: list[ExerciseEntry] = [replace(e) for e in exercises]
        for entry in self.exercises:
            if entry.target_reps < 1 or entry.target_sets < 1:
                raise ValueError(f"exercise {entry.exercise_id} needs positive sets and repetitions")

        self.current_exercise_index = 0
        self.current_rep = 1
        self.phase = Phase.IDLE
        self.phase_timer_seconds = 0
        self.total_elapsed_seconds = 0
        self.completed = False

    def __repr__(self):
        return "<WorkoutSession(sheet_id=%s, phase=%s, exercise=%s, rep=%s, completed=%s)>" % (
            self.sheet_id,
            self.phase.value,
            self.current_exercise_index,
            self.current_rep,
            self.completed,
        )

    @property
    def ready(self) -> bool:
        return bool(self.exercises)

    @property
    def running(self) -> bool:
        """True while the ticker should be driving the session."""
        return not self.completed and self.phase is not Phase.IDLE

    @property
    def rest_seconds(self) -> int:
        return self.rest_minutes * 60

    @property
    def current_exercise(self) -> ExerciseEntry | None:
        if not self.exercises:
            return None
        return self.exercises[self.current_exercise_index]

    def _require_active(self, action: str) -> ExerciseEntry:
        if self.completed:
            raise InvalidSessionAction(f"cannot {action}: session is already completed")
        current = self.current_exercise
        if current is None:
            raise InvalidSessionAction(f"cannot {action}: session has no exercises")
        return current

    def start(self) -> None:
        """idle -> working. A session without exercises stays idle."""
        if not self.ready:
            logger.info("workout_session_start_ignored", reason="no_exercises", sheet_id=self.sheet_id)
            return
        self._require_active("start")
        if self.phase is not Phase.IDLE:
            raise InvalidSessionAction(f"cannot start while {self.phase.value}")
        self.phase_timer_seconds = 0
        self.phase = Phase.WORKING

    def begin_rest(self) -> None:
        """working -> resting, countdown from the configured rest duration."""
        self._require_active("begin rest")
        if self.phase is not Phase.WORKING:
            raise InvalidSessionAction(f"cannot begin rest while {self.phase.value}")
        self.phase_timer_seconds = self.rest_seconds
        self.phase = Phase.RESTING

    def end_repetition(self) -> None:
        """Finish the current rep, ending any running rest early.

        Accepted from every phase, not only while resting: the user may
        mark a rep done without taking the rest, so calling this once per
        remaining rep walks an exercise to its end (three calls finish a
        three-rep exercise from idle).
        """
        self._require_active("end repetition")
        self._complete_repetition()

    def skip_exercise(self) -> None:
        """Abandon the remaining reps of the current exercise."""
        self._require_active("skip exercise")
        skipped = self.current_exercise_index
        self.phase = Phase.IDLE
        self.phase_timer_seconds = 0
        self._next_exercise()
        logger.info(
            "workout_session_exercise_skipped",
            sheet_id=self.sheet_id,
            exercise_index=skipped,
            completed=self.completed,
        )

    def advance(self) -> Phase:
        """Single-button flow: start, begin rest or end the rep depending on phase."""
        self._require_active("advance")
        if self.phase is Phase.IDLE:
            self.start()
        elif self.phase is Phase.WORKING:
            self.begin_rest()
        else:
            self.end_repetition()
        return self.phase

    def set_weight(self, weight: float) -> list[ExerciseEntry]:
        """Update the load of the current exercise; only allowed between reps.

        Returns a copy of the full exercise list to hand to the sheet store.
        """
        current = self._require_active("edit weight")
        if self.phase is not Phase.IDLE:
            raise InvalidSessionAction(f"cannot edit weight while {self.phase.value}")
        if not 0 <= weight <= MAX_WEIGHT:
            raise ValueError(f"weight must be between 0 and {MAX_WEIGHT:g}")
        current.weight = weight
        return [replace(e) for e in self.exercises]

    def tick(self) -> None:
        if self.completed or self.phase is Phase.IDLE:
            return
        self.total_elapsed_seconds += 1
        if self.phase is Phase.WORKING:
            self.phase_timer_seconds += 1
            return
        # Decrement and the zero check happen in the same tick so no
        # negative countdown is ever observable.
        self.phase_timer_seconds = max(self.phase_timer_seconds - 1, 0)
        if self.phase_timer_seconds == 0:
            self._complete_repetition()

    def _complete_repetition(self) -> None:
        self.phase = Phase.IDLE
        self.phase_timer_seconds = 0
        if self.current_rep < self.current_exercise.target_reps:
            self.current_rep += 1
            return
        self._next_exercise()

    def _next_exercise(self) -> None:
        if self.current_exercise_index < len(self.exercises) - 1:
            self.current_exercise_index += 1
            self.current_rep = 1
            self.phase_timer_seconds = 0
            self.phase = Phase.IDLE
            return
        self.completed = True
        logger.info(
            "workout_session_completed",
            sheet_id=self.sheet_id,
            total_elapsed_seconds=self.total_elapsed_seconds,
        )

    def summary(self) -> WorkoutSummary:
        if not self.completed:
            raise InvalidSessionAction("session is not completed yet")
        return WorkoutSummary(
            sheet_id=self.sheet_id,
            total_seconds=self.total_elapsed_seconds,
            exercises=tuple(replace(e) for e in self.exercises),
        )

    def snapshot(self) -> dict[str, Any]:
        current = self.current_exercise
        return {
            "sheet_id": self.sheet_id,
            "rest_minutes": self.rest_minutes,
            "phase": self.phase.value,
            "phase_timer_seconds": self.phase_timer_seconds,
            "total_elapsed_seconds": self.total_elapsed_seconds,
            "current_exercise_index": self.current_exercise_index,
            "current_rep": self.current_rep,
            "completed": self.completed,
            "ready": self.ready,
            "exercises": [e.to_dict() for e in self.exercises],
            "current_exercise": current.to_dict() if current else None,
        }
