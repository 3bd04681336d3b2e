from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import ManagerMapping, NewUser, User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, not on a concrete database.
    Soft-deleted users are excluded from every listing.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_reset_token(self, token: str, *, now: datetime) -> Optional[User]:
        """User holding ``token`` whose expiry is still after ``now``."""

        raise NotImplementedError

    def create_user(self, new_user: NewUser) -> str:
        raise NotImplementedError

    def update_fields(self, user_id: str, fields: dict) -> Optional[User]:
        raise NotImplementedError

    def soft_delete(self, user_id: str) -> bool:
        raise NotImplementedError

    def set_reset_token(self, user_id: str, *, token: str, expires_at: datetime) -> None:
        raise NotImplementedError

    def update_password(self, user_id: str, *, password_hash: str) -> None:
        """Store a new hash and clear any reset token."""

        raise NotImplementedError

    def list_all(self, *, exclude_user_id: Optional[str] = None, exclude_roles: Iterable[Role] = ()) -> Sequence[User]:
        raise NotImplementedError

    def list_by_roles(self, roles: Iterable[Role], *, first_name: Optional[str] = None) -> Sequence[User]:
        raise NotImplementedError

    def list_by_employee_ids(self, employee_ids: Iterable[str]) -> Sequence[User]:
        raise NotImplementedError

    def list_by_ids(self, user_ids: Iterable[str]) -> Sequence[User]:
        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError

    def count_by_role(self) -> Sequence[tuple[str, int]]:
        raise NotImplementedError

    def monthly_signups(self, year: int) -> dict[int, int]:
        """Month number (1-12) -> users created in that month of ``year``."""

        raise NotImplementedError


class ManagerMappingRepository(Protocol):
    def create(self, mapping: ManagerMapping) -> None:
        raise NotImplementedError

    def list_for_manager(self, manager_emp_id: str) -> Sequence[ManagerMapping]:
        raise NotImplementedError


class CounterRepository(Protocol):
    def next_value(self, name: str, *, start: int) -> int:
        """Atomically increment and return the counter; first call returns ``start + 1``."""

        raise NotImplementedError
