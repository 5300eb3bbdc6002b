import asyncio
import uuid
from collections.abc import Awaitable, Callable

import structlog

from ..metrics import (
    EXERCISES_SKIPPED_TOTAL,
    WEIGHT_SAVE_FAILURES_TOTAL,
    WORKOUT_SESSIONS_COMPLETED_TOTAL,
    WORKOUT_SESSIONS_STARTED_TOTAL,
)
from .collaborators import ExerciseCatalog, ExerciseInfo, SheetStore, WorkoutRecorder
from .errors import SessionError, SessionLoadError, WeightSaveError, WorkoutSaveError
from .machine import Phase, WorkoutSession
from .ticker import SessionTicker

logger = structlog.get_logger(__name__)


class SessionRunner:
    """
    Drives one WorkoutSession: owns its ticker and talks to the collaborators.

    The ticker is held only while the session is working or resting and is
    released on every transition back to idle, on skip, on completion and on
    ``close()``.
    """

    def __init__(
        self,
        session: WorkoutSession,
        *,
        sheet_store: SheetStore,
        catalog: ExerciseCatalog,
        recorder: WorkoutRecorder,
        user_id: str | None = None,
        session_id: str | None = None,
        tick_interval: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.id = session_id or uuid.uuid4().hex
        self.user_id = user_id
        self.session = session
        self._sheet_store = sheet_store
        self._catalog = catalog
        self._recorder = recorder
        self._ticker = SessionTicker(self._on_tick, interval=tick_interval, sleep=sleep)
        self._completion_reported = False
        self._ticked_phase: Phase | None = None
        self.workout_id: int | None = None

    @classmethod
    async def load(
        cls,
        sheet_id: int,
        rest_minutes: int,
        *,
        sheet_store: SheetStore,
        catalog: ExerciseCatalog,
        recorder: WorkoutRecorder,
        **kwargs,
    ) -> "SessionRunner":
        """Fetch the sheet's exercises once and build a runner around them."""
        try:
            exercises = await sheet_store.get_exercises(sheet_id)
        except SessionError:
            raise
        except Exception as exc:
            logger.warning("workout_session_load_failed", sheet_id=sheet_id, error=str(exc))
            raise SessionLoadError(f"could not load sheet {sheet_id}") from exc

        session = WorkoutSession(exercises, rest_minutes, sheet_id=sheet_id)
        runner = cls(session, sheet_store=sheet_store, catalog=catalog, recorder=recorder, **kwargs)
        WORKOUT_SESSIONS_STARTED_TOTAL.inc()
        logger.info(
            "workout_session_loaded",
            session_id=runner.id,
            user_id=runner.user_id,
            sheet_id=sheet_id,
            exercises=len(exercises),
            rest_minutes=rest_minutes,
        )
        return runner

    @property
    def timer_running(self) -> bool:
        return self._ticker.running

    def start(self) -> None:
        self.session.start()
        self._sync_ticker()

    def begin_rest(self) -> None:
        self.session.begin_rest()
        self._sync_ticker()

    def end_repetition(self) -> None:
        self.session.end_repetition()
        self._sync_ticker()

    def skip_exercise(self) -> None:
        self.session.skip_exercise()
        EXERCISES_SKIPPED_TOTAL.inc()
        self._sync_ticker()

    def advance(self) -> Phase:
        phase = self.session.advance()
        self._sync_ticker()
        return phase

    async def edit_weight(self, weight: float) -> None:
        """Apply the weight locally, then save it to the sheet.

        A failed save keeps the local value and raises WeightSaveError so
        the caller can show it; the session itself carries on.
        """
        exercises = self.session.set_weight(weight)
        try:
            await self._sheet_store.save_exercises(self.session.sheet_id, exercises)
        except Exception as exc:
            WEIGHT_SAVE_FAILURES_TOTAL.inc()
            logger.exception(
                "workout_session_weight_save_failed",
                session_id=self.id,
                sheet_id=self.session.sheet_id,
                exercise_index=self.session.current_exercise_index,
            )
            raise WeightSaveError("weight updated locally but could not be saved") from exc

    async def describe_current_exercise(self) -> ExerciseInfo | None:
        current = self.session.current_exercise
        if current is None:
            return None
        try:
            return await self._catalog.get_exercise(current.exercise_id)
        except Exception as exc:
            logger.warning(
                "workout_session_exercise_info_failed",
                session_id=self.id,
                exercise_id=current.exercise_id,
                error=str(exc),
            )
            raise SessionLoadError(f"could not load exercise {current.exercise_id}") from exc

    async def save(self) -> int:
        """Hand the completed session to the recorder; safe to retry on failure."""
        summary = self.session.summary()
        if self.workout_id is not None:
            return self.workout_id
        try:
            workout_id = await self._recorder.record(summary)
        except Exception as exc:
            logger.exception("workout_session_save_failed", session_id=self.id, sheet_id=summary.sheet_id)
            raise WorkoutSaveError("workout could not be saved") from exc
        self.workout_id = workout_id
        logger.info(
            "workout_session_saved",
            session_id=self.id,
            workout_id=workout_id,
            total_seconds=summary.total_seconds,
        )
        return workout_id

    async def close(self) -> None:
        await self._ticker.aclose()

    def _on_tick(self) -> None:
        self.session.tick()
        self._sync_ticker()

    def _sync_ticker(self) -> None:
        if not self.session.running:
            self._ticked_phase = None
            self._ticker.cancel()
        elif self.session.phase is not self._ticked_phase:
            # Every working or resting phase gets its own full first interval
            self._ticked_phase = self.session.phase
            self._ticker.restart()
        else:
            self._ticker.start()
        if self.session.completed and not self._completion_reported:
            self._completion_reported = True
            WORKOUT_SESSIONS_COMPLETED_TOTAL.inc()
