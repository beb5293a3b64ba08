"""Unit tests for MarkNotificationReadUseCase."""

from uuid import uuid4

import pytest

from marquee.application.usecase.notification.get_unread_count import (
    GetUnreadCountRequest,
    GetUnreadCountUseCase,
)
from marquee.application.usecase.notification.mark_notification_read import (
    MarkNotificationReadRequest,
    MarkNotificationReadUseCase,
)
from marquee.domain.error import NotFoundError
from marquee.domain.service import NotificationService
from marquee.domain.value import NotificationType, UserId
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ALICE = UserId(1)
BOB = UserId(2)


class TestMarkNotificationReadUseCase:
    """Tests for MarkNotificationReadUseCase."""

    @pytest.mark.asyncio
    async def test_mark_read_clears_unread_count(self, unit_env):
        # Arrange
        notification_service = await unit_env.get(NotificationService)
        notice = await notification_service.notify(
            ALICE, NotificationType.COLLAB_ACCEPTED, "Bob is now your friend!"
        )
        mark_read = await unit_env.get(MarkNotificationReadUseCase)
        unread = await unit_env.get(GetUnreadCountUseCase)

        # Act
        response = await mark_read.execute(
            MarkNotificationReadRequest(user_id=ALICE, notification_id=notice.id)
        )

        # Assert
        assert response.success
        assert (await unread.execute(GetUnreadCountRequest(user_id=ALICE))).count == 0

    @pytest.mark.asyncio
    async def test_mark_unknown_notification_raises(self, unit_env):
        use_case = await unit_env.get(MarkNotificationReadUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                MarkNotificationReadRequest(user_id=ALICE, notification_id=uuid4())
            )

    @pytest.mark.asyncio
    async def test_cannot_mark_another_users_notification(self, unit_env):
        notification_service = await unit_env.get(NotificationService)
        notice = await notification_service.notify(
            ALICE, NotificationType.COLLAB_ACCEPTED, "Bob is now your friend!"
        )
        use_case = await unit_env.get(MarkNotificationReadUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                MarkNotificationReadRequest(user_id=BOB, notification_id=notice.id)
            )
