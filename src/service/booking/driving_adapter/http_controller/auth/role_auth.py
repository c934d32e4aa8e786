from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends, Header
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.booking.domain.entity.user_entity import UserEntity
from src.service.booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.startswith('Bearer'):
        parts = authorization.split(' ', 1)
        return parts[1].strip() if len(parts) == 2 else None
    return None


@inject
async def get_current_user(
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    authorization: Optional[str] = Header(None),
    cookie_token: Optional[str] = Cookie(None, alias='token'),
) -> UserEntity:
    """Bearer header first, then the session cookie set by the web client"""
    token = _bearer_token(authorization) or cookie_token
    return jwt_auth.get_current_user_info_from_jwt(token)


async def require_admin(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_admin',
        attributes={
            'user.id': str(current_user.id),
            'user.role': current_user.role.value,
        },
    ):
        if not current_user.is_admin:
            raise ForbiddenError('Access denied. Admin only')
        return current_user
