"""
Bearer token verification

Tokens are issued by the account service. This adapter only verifies them and
rebuilds the caller's identity from the payload (no DB query).
"""

from typing import Any, Dict, Optional

import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import (
    AuthenticationError,
    ForbiddenError,
    ValidationError,
)
from src.platform.types.uuid7_utils_types import parse_uuid
from src.service.booking.domain.entity.user_entity import UserEntity, UserRole


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            raise AuthenticationError('Token is invalid or expired') from e

    def get_current_user_info_from_jwt(self, token: Optional[str]) -> UserEntity:
        if not token:
            raise AuthenticationError('Not authorized. Please login to access this resource')

        payload = self.decode_jwt_token(token)

        user_id = payload.get('user_id') or payload.get('sub')
        email = payload.get('email')
        role = payload.get('role', UserRole.USER.value)
        if not user_id or not email or role not in {r.value for r in UserRole}:
            raise AuthenticationError('Token is invalid or expired')

        try:
            parsed_id = parse_uuid(user_id, message='Token is invalid or expired')
        except ValidationError as e:
            raise AuthenticationError(e.message) from e

        user_entity = UserEntity(
            id=parsed_id,
            email=email,
            name=payload.get('name') or '',
            role=UserRole(role),
            is_active=payload.get('is_active', True),
        )

        if not user_entity.is_active:
            raise ForbiddenError('Account is deactivated. Please contact support to reactivate.')

        return user_entity
