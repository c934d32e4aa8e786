from enum import StrEnum

import attrs
from uuid_utils import UUID


class UserRole(StrEnum):
    USER = 'user'
    ORGANIZER = 'organizer'
    ADMIN = 'admin'


@attrs.define
class UserEntity:
    id: UUID
    email: str = ''
    name: str = ''
    phone: str = ''
    role: UserRole = UserRole.USER
    is_active: bool = True

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
