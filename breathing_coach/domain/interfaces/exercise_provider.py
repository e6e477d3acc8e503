"""Exercise provider protocol."""

from typing import Protocol, runtime_checkable

from ..entities.exercise import Exercise


@runtime_checkable
class ExerciseProvider(Protocol):
    """Protocol for the static exercise catalog."""

    def get_exercise(self, exercise_id: str) -> Exercise:
        """Retrieve an exercise by ID.

        Args:
            exercise_id: The unique identifier of the exercise.

        Returns:
            Exercise: The exercise descriptor.

        Raises:
            UnknownExercise: If no exercise has this ID.
        """
        ...

    def list_exercises(self) -> list[Exercise]:
        """Return every exercise in catalog order."""
        ...
