"""Notification routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query
from pydantic import BaseModel

from marquee.application.usecase.notification import (
    ClearNotificationsRequest,
    ClearNotificationsResponse,
    ClearNotificationsUseCase,
    DeleteNotificationRequest,
    DeleteNotificationResponse,
    DeleteNotificationUseCase,
    GetNotificationSummaryRequest,
    GetNotificationSummaryResponse,
    GetNotificationSummaryUseCase,
    GetNotificationsRequest,
    GetNotificationsResponse,
    GetNotificationsUseCase,
    GetUnreadCountRequest,
    GetUnreadCountResponse,
    GetUnreadCountUseCase,
    MarkAllNotificationsReadRequest,
    MarkAllNotificationsReadResponse,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadRequest,
    MarkNotificationReadResponse,
    MarkNotificationReadUseCase,
)
from marquee.domain.service import JWTService
from marquee.interface.api.auth import require_user_id

router = APIRouter(
    prefix="/notifications", tags=["notifications"], route_class=DishkaRoute
)


class ClearNotificationsAPIRequest(BaseModel):
    """API request for clearing notifications."""

    read_only: bool = False


@router.get("/", response_model=GetNotificationsResponse)
async def get_notifications(
    get_notifications_use_case: FromDishka[GetNotificationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    unread_only: bool = Query(default=False),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> GetNotificationsResponse:
    """Get the current user's notifications, newest first."""
    user_id = require_user_id(jwt_service, auth_token)
    return await get_notifications_use_case.execute(
        GetNotificationsRequest(
            user_id=user_id, unread_only=unread_only, limit=limit, offset=offset
        )
    )


@router.get("/count", response_model=GetUnreadCountResponse)
async def get_unread_count(
    get_unread_count_use_case: FromDishka[GetUnreadCountUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetUnreadCountResponse:
    user_id = require_user_id(jwt_service, auth_token)
    return await get_unread_count_use_case.execute(
        GetUnreadCountRequest(user_id=user_id)
    )


@router.get("/summary", response_model=GetNotificationSummaryResponse)
async def get_notification_summary(
    get_notification_summary_use_case: FromDishka[GetNotificationSummaryUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetNotificationSummaryResponse:
    """Unread notifications plus pending invites, for the header badge."""
    user_id = require_user_id(jwt_service, auth_token)
    return await get_notification_summary_use_case.execute(
        GetNotificationSummaryRequest(user_id=user_id)
    )


@router.post("/read-all", response_model=MarkAllNotificationsReadResponse)
async def mark_all_notifications_read(
    mark_all_read_use_case: FromDishka[MarkAllNotificationsReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MarkAllNotificationsReadResponse:
    user_id = require_user_id(jwt_service, auth_token)
    return await mark_all_read_use_case.execute(
        MarkAllNotificationsReadRequest(user_id=user_id)
    )


@router.post("/clear", response_model=ClearNotificationsResponse)
async def clear_notifications(
    clear_notifications_use_case: FromDishka[ClearNotificationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    request: ClearNotificationsAPIRequest | None = None,
) -> ClearNotificationsResponse:
    """Delete the user's notifications, or only the ones already read."""
    user_id = require_user_id(jwt_service, auth_token)
    read_only = request.read_only if request else False
    return await clear_notifications_use_case.execute(
        ClearNotificationsRequest(user_id=user_id, read_only=read_only)
    )


@router.post("/{notification_id}/read", response_model=MarkNotificationReadResponse)
async def mark_notification_read(
    notification_id: UUID,
    mark_read_use_case: FromDishka[MarkNotificationReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MarkNotificationReadResponse:
    user_id = require_user_id(jwt_service, auth_token)
    return await mark_read_use_case.execute(
        MarkNotificationReadRequest(user_id=user_id, notification_id=notification_id)
    )


@router.delete("/{notification_id}", response_model=DeleteNotificationResponse)
async def delete_notification(
    notification_id: UUID,
    delete_notification_use_case: FromDishka[DeleteNotificationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteNotificationResponse:
    user_id = require_user_id(jwt_service, auth_token)
    return await delete_notification_use_case.execute(
        DeleteNotificationRequest(user_id=user_id, notification_id=notification_id)
    )
