"""
Cookie token decoding

Tokens are issued by the identity service; this side only verifies them and
rebuilds the caller's identity from the payload (no DB query).
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import jwt

from cinema_booking.platform.config.core_setting import settings
from cinema_booking.platform.exception.exceptions import AuthenticationError
from cinema_booking.service.reservation.domain.entity.user_entity import (
    AuthenticatedUser,
    UserRole,
)


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire_days = 7

    def create_jwt_token(self, *, user_id: int, role: UserRole = UserRole.USER) -> str:
        """Mint a token shaped like the identity service's (local runs and tests)"""
        now = datetime.now(timezone.utc)
        payload = {
            'sub': str(user_id),
            'exp': now + timedelta(days=self.token_expire_days),
            'iat': now,
            'user_id': user_id,
            'role': role.value,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError:
            raise AuthenticationError('Invalid token')

    def get_current_user_from_jwt(self, token: Optional[str]) -> AuthenticatedUser:
        if not token:
            raise AuthenticationError('Not authenticated')

        payload = self.decode_jwt_token(token)
        user_id = payload.get('user_id')
        role = payload.get('role')
        if not isinstance(user_id, int) or not role:
            raise AuthenticationError('Invalid token')

        try:
            return AuthenticatedUser(id=user_id, role=UserRole(role))
        except ValueError:
            raise AuthenticationError('Invalid token')
