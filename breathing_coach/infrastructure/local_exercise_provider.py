"""In-memory implementation of ExerciseProvider."""

from typing import Dict, Optional

from ..domain.entities.exercise import BreathingPattern, Exercise
from ..domain.errors import UnknownExercise
from ..domain.interfaces.exercise_provider import ExerciseProvider

DEFAULT_EXERCISES = [
    Exercise(
        id="flower",
        title="Smell the Flower",
        description="Take a deep breath in through your nose, as if smelling a beautiful flower",
        emoji="🌸",
        guidance="4 seconds in",
        pattern=BreathingPattern(inhale_seconds=4, exhale_seconds=6),
    ),
    Exercise(
        id="candle",
        title="Blow the Candle",
        description="Breathe out slowly through your mouth, as if gently blowing out a candle",
        emoji="🕯️",
        guidance="6 seconds out",
        pattern=BreathingPattern(inhale_seconds=4, exhale_seconds=6),
    ),
    Exercise(
        id="bee",
        title="Watch the Bee",
        description="Follow the bee circling around. Breathe slowly and calmly as you watch",
        emoji="🐝",
        guidance="Natural rhythm",
        pattern=BreathingPattern(free_rhythm=True, cycle_seconds=8),
    ),
]


class LocalExerciseProvider(ExerciseProvider):
    """Exercise catalog held in a dictionary.

    The catalog is fixed at construction time and never changes afterwards.
    """

    def __init__(self, exercises: Optional[list[Exercise]] = None):
        """Initialize the provider.

        Args:
            exercises: Catalog to serve. Defaults to the built-in exercises.
        """
        self._exercises: Dict[str, Exercise] = {}
        for exercise in exercises if exercises is not None else DEFAULT_EXERCISES:
            if exercise.id in self._exercises:
                raise ValueError(f"Duplicate exercise id {exercise.id}")
            self._exercises[exercise.id] = exercise

    def get_exercise(self, exercise_id: str) -> Exercise:
        """Retrieve an exercise by ID.

        Raises:
            UnknownExercise: If no exercise has this ID.
        """
        if exercise_id not in self._exercises:
            raise UnknownExercise(exercise_id)

        return self._exercises[exercise_id]

    def list_exercises(self) -> list[Exercise]:
        return list(self._exercises.values())
