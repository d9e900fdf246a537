from datetime import datetime, timedelta, timezone

import jwt
import pytest

from cinema_booking.platform.config.core_setting import settings
from cinema_booking.platform.exception.exceptions import AuthenticationError
from cinema_booking.service.reservation.domain.entity.user_entity import UserRole
from cinema_booking.service.reservation.driving_adapter.http_controller.auth.jwt_auth import (
    JwtAuth,
)


@pytest.mark.unit
class TestJwtAuth:
    def setup_method(self):
        self.auth = JwtAuth()

    def _encode(self, payload: dict) -> str:
        return jwt.encode(
            payload, settings.SECRET_KEY.get_secret_value(), algorithm=settings.ALGORITHM
        )

    def test_round_trips_identity(self):
        token = self.auth.create_jwt_token(user_id=7, role=UserRole.ADMIN)

        user = self.auth.get_current_user_from_jwt(token)

        assert user.id == 7
        assert user.is_admin

    def test_role_claim_is_the_plain_role_name(self):
        token = self.auth.create_jwt_token(user_id=7, role=UserRole.ADMIN)

        payload = jwt.decode(
            token, settings.SECRET_KEY.get_secret_value(), algorithms=[settings.ALGORITHM]
        )

        assert payload['role'] == 'admin'
        assert f'{UserRole.ADMIN}' == 'admin'

    def test_missing_token(self):
        with pytest.raises(AuthenticationError, match='Not authenticated'):
            self.auth.get_current_user_from_jwt(None)

    def test_token_signed_with_other_key(self):
        token = jwt.encode({'user_id': 7, 'role': 'user'}, 'not-our-key', algorithm='HS256')

        with pytest.raises(AuthenticationError, match='Invalid token'):
            self.auth.get_current_user_from_jwt(token)

    def test_expired_token(self):
        token = self._encode(
            {
                'user_id': 7,
                'role': 'user',
                'exp': datetime.now(timezone.utc) - timedelta(minutes=1),
            }
        )

        with pytest.raises(AuthenticationError, match='Invalid token'):
            self.auth.get_current_user_from_jwt(token)

    @pytest.mark.parametrize(
        'payload',
        [
            {'role': 'user'},
            {'user_id': '7', 'role': 'user'},
            {'user_id': 7},
            {'user_id': 7, 'role': 'superuser'},
        ],
    )
    def test_malformed_claims(self, payload):
        with pytest.raises(AuthenticationError, match='Invalid token'):
            self.auth.get_current_user_from_jwt(self._encode(payload))
