class SessionError(Exception):
    """Base class for guided workout session errors."""


class InvalidSessionAction(SessionError):
    """Action is not allowed in the session's current phase."""


class SessionLoadError(SessionError):
    """The sheet backing a session could not be fetched."""


class WeightSaveError(SessionError):
    """A weight edit was applied locally but could not be persisted."""


class WorkoutSaveError(SessionError):
    """The summary of a completed session could not be recorded."""
