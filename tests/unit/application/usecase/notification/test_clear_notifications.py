"""Unit tests for ClearNotificationsUseCase."""

import pytest

from marquee.application.usecase.notification.clear_notifications import (
    ClearNotificationsRequest,
    ClearNotificationsUseCase,
)
from marquee.domain.service import NotificationService
from marquee.domain.value import NotificationType, UserId
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ALICE = UserId(1)


class TestClearNotificationsUseCase:
    """Tests for ClearNotificationsUseCase."""

    @pytest.mark.asyncio
    async def test_clear_read_only_keeps_unread(self, unit_env):
        # Arrange
        notification_service = await unit_env.get(NotificationService)
        read = await notification_service.notify(
            ALICE, NotificationType.COLLAB_ACCEPTED, "Bob is now your friend!"
        )
        await notification_service.notify(
            ALICE, NotificationType.COLLAB_INVITE, "Carol wants to be friends"
        )
        await notification_service.mark_read(ALICE, read.id)
        use_case = await unit_env.get(ClearNotificationsUseCase)

        # Act
        response = await use_case.execute(
            ClearNotificationsRequest(user_id=ALICE, read_only=True)
        )

        # Assert
        assert response.deleted == 1
        [remaining] = await notification_service.list_notifications(ALICE)
        assert remaining.title == "Carol wants to be friends"

    @pytest.mark.asyncio
    async def test_clear_all(self, unit_env):
        notification_service = await unit_env.get(NotificationService)
        await notification_service.notify(
            ALICE, NotificationType.COLLAB_INVITE, "Carol wants to be friends"
        )
        use_case = await unit_env.get(ClearNotificationsUseCase)

        response = await use_case.execute(ClearNotificationsRequest(user_id=ALICE))

        assert response.deleted == 1
        assert await notification_service.list_notifications(ALICE) == []
