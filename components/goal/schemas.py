"""Pydantic schemas for goal data validation."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, computed_field

from components.goal.utils import progress_percentage

DEFAULT_COLOR = "#FF6600"


class GoalBase(BaseModel):
    """Base goal schema."""
    name: str
    target: float
    color: str = DEFAULT_COLOR


class GoalCreate(GoalBase):
    """Schema for goal creation."""
    pass


class GoalUpdate(BaseModel):
    """Schema for partial goal update. current is never writable."""
    name: Optional[str] = None
    target: Optional[float] = None
    color: Optional[str] = None


class Goal(GoalBase):
    """Schema for goal response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    current: float

    @computed_field
    @property
    def progress(self) -> float:
        return progress_percentage(self.current, self.target)

    @computed_field
    @property
    def completed(self) -> bool:
        return self.progress >= 100


class GoalsSummary(BaseModel):
    """Schema for the totals across all goals of a user."""
    goals_count: int
    completed_count: int
    total_saved: float
    total_target: float
    total_progress: float
