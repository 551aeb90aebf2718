"""Progress estimate shown while an analysis request is in flight."""

from pydantic import BaseModel, ConfigDict, Field


class AnalysisProgress(BaseModel):
    """One snapshot of the simulated analysis progress.

    Advisory only: it is computed from the wall clock, not from the
    backend's real state.
    """

    model_config = ConfigDict(frozen=True)

    phase: str
    percentage: float = Field(..., ge=0, le=100)
    time_remaining: float = Field(..., ge=0, description="Seconds left")

    @property
    def time_remaining_label(self) -> str:
        """Remaining time as ``m:ss``."""
        seconds = int(self.time_remaining)
        minutes, remaining = divmod(seconds, 60)
        return f"{minutes}:{remaining:02d}"
