"""Analysis backend result payload."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AnalysisResult(BaseModel):
    """Result returned by the analysis workflow.

    Only the fields below drive behavior; anything else the workflow sends
    is kept as extra data. Validation never rejects a payload: ``error`` is
    kept as sent, and ``url``/``name`` values that are not strings are dropped.
    """

    model_config = ConfigDict(extra="allow")

    error: Any = Field(default=None, description="Raw flag; only a literal false means no error")
    status: int | None = None
    url: str | None = Field(default=None, description="Link to the generated artifact")
    name: str | None = Field(default=None, description="Artifact display name")
    completed_at: datetime | None = None

    @field_validator("url", "name", mode="before")
    @classmethod
    def drop_non_string(cls, v: Any) -> str | None:
        return v if isinstance(v, str) else None

    @property
    def is_clean_success(self) -> bool:
        """True when the workflow reported ``error: false`` and a 200 status."""
        return self.error is False and self.status == 200
