"""Error taxonomy for the breathing coach core."""

from typing import Optional


class BreathingCoachError(Exception):
    """Base class for all errors raised by the breathing coach core."""

    pass


class UnknownExercise(BreathingCoachError):
    """Raised when an exercise id does not resolve to a known exercise."""

    def __init__(self, exercise_id: str):
        self.exercise_id = exercise_id
        super().__init__(f"Exercise with id {exercise_id} not found")


class SessionInProgress(BreathingCoachError):
    """Raised when a session is started while another one is not yet idle."""

    def __init__(self, exercise_id: Optional[str] = None):
        self.exercise_id = exercise_id
        super().__init__(f"A session for exercise {exercise_id} is already in progress")


class QuotaExceeded(BreathingCoachError):
    """Raised when today's session goal has already been reached."""

    def __init__(self, completed_count: int, goal: int):
        self.completed_count = completed_count
        self.goal = goal
        super().__init__(f"Daily goal reached: {completed_count} of {goal} sessions completed")


class StorageError(BreathingCoachError):
    """Raised when the persistence collaborator fails to read or write."""

    pass
