"""Company/user identifier models."""

from pydantic import BaseModel, ConfigDict, Field


class ExtractedIdentifiers(BaseModel):
    """Identifiers found in a free-text message. ``None`` means absent."""

    model_config = ConfigDict(frozen=True)

    company_id: str | None = None
    user_id: str | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.company_id) and bool(self.user_id)

    @property
    def missing_fields(self) -> list[str]:
        missing = []
        if not self.company_id:
            missing.append("company_id")
        if not self.user_id:
            missing.append("user_id")
        return missing


class PendingIdentifiers(BaseModel):
    """A message held back until both identifiers are supplied."""

    model_config = ConfigDict(frozen=True)

    pending_message_text: str = Field(..., min_length=1)
    company_id: str | None = None
    user_id: str | None = None
