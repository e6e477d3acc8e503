"""Exercise entities for the breathing coach application."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

BreathingPhase = Literal["inhale", "exhale", "free"]


class BreathingPattern(BaseModel):
    """Breathing rhythm of an exercise.

    Paced exercises alternate an inhale and an exhale phase. Free rhythm
    exercises only have a visual cycle the user follows at their own pace.
    """

    model_config = ConfigDict(frozen=True)

    inhale_seconds: Optional[int] = Field(default=None, ge=1)
    exhale_seconds: Optional[int] = Field(default=None, ge=1)
    free_rhythm: bool = False
    cycle_seconds: Optional[int] = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _check_pattern(self) -> "BreathingPattern":
        if self.free_rhythm:
            if self.cycle_seconds is None:
                raise ValueError("free rhythm patterns need cycle_seconds")
        elif self.inhale_seconds is None or self.exhale_seconds is None:
            raise ValueError("paced patterns need inhale_seconds and exhale_seconds")
        return self

    @property
    def period_seconds(self) -> int:
        """Length of one full breathing cycle in seconds."""
        if self.free_rhythm:
            return self.cycle_seconds
        return self.inhale_seconds + self.exhale_seconds

    def phase_at(self, elapsed_seconds: int) -> BreathingPhase:
        """Return the breathing phase for the given elapsed session time.

        Args:
            elapsed_seconds: Seconds elapsed since the session started.

        Returns:
            "inhale" or "exhale" for paced patterns, "free" otherwise.
        """
        if self.free_rhythm:
            return "free"
        offset = max(elapsed_seconds, 0) % self.period_seconds
        return "inhale" if offset < self.inhale_seconds else "exhale"


class Exercise(BaseModel):
    """Static descriptor of a breathing exercise."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "flower",
                "title": "Smell the Flower",
                "description": "Take a deep breath in through your nose, as if smelling a beautiful flower",
                "emoji": "🌸",
                "guidance": "4 seconds in",
                "pattern": {"inhale_seconds": 4, "exhale_seconds": 6},
            }
        },
    )

    id: str = Field(min_length=1)
    title: str
    description: str
    emoji: str = ""
    guidance: str = ""
    pattern: BreathingPattern
