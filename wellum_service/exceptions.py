from fastapi import HTTPException, status


class NotFoundException(HTTPException):
    def __init__(self, detail: str = "Object not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ForbiddenException(HTTPException):
    def __init__(self, detail: str = "Not allowed to access this object"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class ExerciseNotFoundException(NotFoundException):
    def __init__(self, exercise_id: int | str):
        super().__init__(detail=f"Exercise with id={exercise_id} not found")


class SheetNotFoundException(NotFoundException):
    def __init__(self, sheet_id: int):
        super().__init__(detail=f"Sheet with id={sheet_id} not found")


class SheetForbiddenException(ForbiddenException):
    def __init__(self, sheet_id: int):
        super().__init__(detail=f"Not allowed to access sheet id={sheet_id}")


class WorkoutNotFoundException(NotFoundException):
    def __init__(self, workout_id: int):
        super().__init__(detail=f"Workout with id={workout_id} not found")


class WorkoutForbiddenException(ForbiddenException):
    def __init__(self, workout_id: int):
        super().__init__(detail=f"Not allowed to access workout id={workout_id}")


class LiveSessionNotFoundException(NotFoundException):
    def __init__(self, session_id: str):
        super().__init__(detail=f"Session with id={session_id} not found")


class LiveSessionForbiddenException(ForbiddenException):
    def __init__(self, session_id: str):
        super().__init__(detail=f"Not allowed to access session id={session_id}")
