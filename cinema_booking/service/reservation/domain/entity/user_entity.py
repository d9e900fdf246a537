from enum import StrEnum

import attrs


class UserRole(StrEnum):
    USER = 'user'
    ADMIN = 'admin'


@attrs.frozen
class AuthenticatedUser:
    """Identity of the caller, decoded from the token issued by the identity service"""

    id: int
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
