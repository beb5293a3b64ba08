"""Notification feed entry."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from marquee.domain.model.common import DomainModel, utc_now
from marquee.domain.value import NotificationId, NotificationType, UserId


class Notification(DomainModel):
    """Per-user alert, created alongside a state-changing invite event."""

    id: NotificationId
    user_id: UserId
    type: NotificationType
    title: str
    message: Optional[str] = None
    data: dict[str, Any] = Field(default_factory=dict)
    is_read: bool = False
    created_at: datetime = Field(default_factory=utc_now)
