"""Transient user-facing notifications (toasts)."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class NotificationVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notification(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT
