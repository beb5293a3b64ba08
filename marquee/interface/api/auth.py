"""Request authentication shared by the API routes."""

from fastapi import HTTPException, status

from marquee.domain.service import JWTService
from marquee.domain.value import UserId


def require_user_id(jwt_service: JWTService, auth_token: str | None) -> UserId:
    """Resolve the acting user from the auth cookie.

    Args:
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie

    Returns:
        ID of the authenticated user

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user_id
