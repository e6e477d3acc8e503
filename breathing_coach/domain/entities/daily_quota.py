"""Daily quota entity."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_DAILY_GOAL = 5


class DailyQuota(BaseModel):
    """Number of sessions completed on a calendar day, capped by the goal."""

    date: str = Field(description="Calendar day the count applies to (ISO format)")
    completed_count: int = Field(default=0, ge=0)
    goal: int = Field(default=DEFAULT_DAILY_GOAL, ge=1)

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "date": "2024-01-01",
                "completed_count": 2,
                "goal": 5,
            }
        },
    )

    @model_validator(mode="after")
    def _check_count(self) -> "DailyQuota":
        if self.completed_count > self.goal:
            raise ValueError("completed_count cannot exceed goal")
        return self

    @property
    def remaining_sessions(self) -> int:
        return self.goal - self.completed_count

    @property
    def exhausted(self) -> bool:
        return self.completed_count >= self.goal
