from prometheus_client import Counter

WORKOUT_SESSIONS_STARTED_TOTAL = Counter(
    "wellum_workout_sessions_started_total",
    "Number of guided workout sessions loaded in wellum-service",
)

WORKOUT_SESSIONS_COMPLETED_TOTAL = Counter(
    "wellum_workout_sessions_completed_total",
    "Number of guided workout sessions that reached completion",
)

WORKOUT_SESSIONS_ABANDONED_TOTAL = Counter(
    "wellum_workout_sessions_abandoned_total",
    "Number of guided workout sessions discarded before completion",
)

WORKOUT_SESSIONS_EXPIRED_TOTAL = Counter(
    "wellum_workout_sessions_expired_total",
    "Number of live sessions closed after going unused past the idle timeout",
)

EXERCISES_SKIPPED_TOTAL = Counter(
    "wellum_exercises_skipped_total",
    "Number of exercises skipped during guided workout sessions",
)

WEIGHT_SAVE_FAILURES_TOTAL = Counter(
    "wellum_weight_save_failures_total",
    "Number of weight edits that could not be saved back to the sheet",
)

WORKOUTS_RECORDED_TOTAL = Counter(
    "wellum_workouts_recorded_total",
    "Number of completed workouts stored",
    ["source"],  # session | manual
)

SHEETS_CREATED_TOTAL = Counter(
    "wellum_sheets_created_total",
    "Number of workout sheets created",
)
