from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import utc_now
from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import (
    DEFAULT_RESET_TOKEN_MINUTES,
    EMPLOYEE_ID_COUNTER,
    EMPLOYEE_ID_PREFIX,
    EMPLOYEE_ID_SEED,
    MIN_PASSWORD_LENGTH,
)
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from ..core.hierarchy import MANAGER_CANDIDATE_ROLES, can_view, is_valid_manager, requires_manager
from ..notifications.mailer import Mailer, password_reset_email
from .model import ManagerMapping, NewUser, User
from .repository import CounterRepository, ManagerMappingRepository, UserRepository
from .role_model import DEFAULT_ROLES, RoleDefinition
from .role_repository import RoleRepository
from .tokens import Identity

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> Identity:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or user.is_deleted:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        logger.info("User %s logged in", user.user_id)
        return Identity(
            user_id=user.user_id,
            role=user.role,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
        )


@dataclass(frozen=True)
class OnboardResult:
    user_id: str
    employee_id: str
    default_password: str


class UserService:
    """Use cases: onboarding and role-scoped user management."""

    def __init__(
        self,
        users: UserRepository,
        mappings: ManagerMappingRepository,
        counters: CounterRepository,
    ):
        self._users = users
        self._mappings = mappings
        self._counters = counters

    def _resolve_manager(self, role: Role, manager_emp_id: str) -> User:
        manager = self._users.get_by_employee_id(manager_emp_id)
        if not manager:
            raise ValidationError("Manager not found")
        if not is_valid_manager(role, manager.role):
            raise ValidationError("Invalid manager role")
        return manager

    def _require_manageable(self, actor: Identity, user_id: str) -> User:
        target = self._users.get_by_id(user_id)
        if not target or target.is_deleted:
            raise NotFoundError("User not found")
        if not can_view(actor.role, target.role):
            raise AuthorizationError("Forbidden")
        return target

    def next_employee_id(self) -> str:
        seq = self._counters.next_value(EMPLOYEE_ID_COUNTER, start=EMPLOYEE_ID_SEED)
        return f"{EMPLOYEE_ID_PREFIX}{seq}"

    def onboard(
        self,
        *,
        actor: Identity,
        first_name: str,
        last_name: str,
        email: str,
        dob: Optional[date],
        role: Role,
        manager_emp_id: str = "",
        resume: str = "",
        photo_id: str = "",
    ) -> OnboardResult:
        first_name = require_non_empty(first_name, "First name")
        last_name = require_non_empty(last_name, "Last name")
        email = require_email(email)
        if dob is None:
            raise ValidationError("Date of birth is required")

        if not can_view(actor.role, role):
            raise AuthorizationError("You cannot create a user with this role")

        if self._users.get_by_email(email):
            raise ConflictError("Email already exists")

        manager: Optional[User] = None
        manager_emp_id = (manager_emp_id or "").strip()
        if requires_manager(role):
            if not manager_emp_id:
                raise ValidationError("Manager required")
            manager = self._resolve_manager(role, manager_emp_id)

        employee_id = self.next_employee_id()
        raw_password = f"{dob.year}_{employee_id}"

        user_id = self._users.create_user(
            NewUser(
                first_name=first_name,
                last_name=last_name,
                email=email,
                password_hash=generate_password_hash(raw_password),
                role=role,
                employee_id=employee_id,
                dob=dob,
                manager_id=manager.user_id if manager else None,
                created_by=actor.user_id,
                resume=resume or "",
                photo_id=photo_id or "",
            )
        )

        if manager:
            self._mappings.create(
                ManagerMapping(employee_emp_id=employee_id, manager_emp_id=manager_emp_id, role=role)
            )

        logger.info("User %s onboarded as %s by %s", employee_id, role.value, actor.user_id)
        return OnboardResult(user_id=user_id, employee_id=employee_id, default_password=raw_password)

    def list_workers(self, actor: Identity) -> Sequence[User]:
        if actor.role == Role.SUPER_ADMIN:
            return self._users.list_all(exclude_user_id=actor.user_id)

        if actor.role == Role.CXO_HR:
            return self._users.list_all(exclude_roles=[Role.SUPER_ADMIN])

        if actor.role in (Role.TECH_MANAGER, Role.EMPLOYEE):
            me = self._users.get_by_id(actor.user_id)
            if not me or not me.employee_id:
                return []
            team = [m.employee_emp_id for m in self._mappings.list_for_manager(me.employee_id)]
            return self._users.list_by_employee_ids(team)

        return []

    def update_worker(self, *, actor: Identity, user_id: str, changes: dict) -> User:
        target = self._require_manageable(actor, user_id)

        fields: dict = {}
        for key in ("first_name", "last_name", "mobile", "address", "emergency_contact", "resume", "photo_id"):
            if changes.get(key) is not None:
                fields[key] = changes[key]

        new_role = target.role
        if changes.get("role"):
            try:
                new_role = Role(changes["role"])
            except ValueError:
                raise ValidationError("Invalid role")
            if not can_view(actor.role, new_role):
                raise AuthorizationError("Forbidden")
            fields["role"] = new_role

        if changes.get("email"):
            email = require_email(changes["email"])
            other = self._users.get_by_email(email)
            if other and other.user_id != target.user_id:
                raise ConflictError("Email already exists")
            fields["email"] = email

        manager_emp_id = (changes.get("manager_emp_id") or "").strip()
        if manager_emp_id:
            manager = self._resolve_manager(new_role, manager_emp_id)
            fields["manager_id"] = manager.user_id
        elif new_role != target.role and target.manager_id:
            current = self._users.get_by_id(target.manager_id)
            if current and not is_valid_manager(new_role, current.role):
                raise ValidationError("Invalid manager role")

        updated = self._users.update_fields(target.user_id, fields)
        if not updated:
            raise NotFoundError("User not found")
        logger.info("User %s updated by %s", target.user_id, actor.user_id)
        return updated

    def delete_worker(self, *, actor: Identity, user_id: str) -> None:
        target = self._require_manageable(actor, user_id)
        if not self._users.soft_delete(target.user_id):
            raise NotFoundError("User not found")
        logger.info("User %s soft-deleted by %s", target.user_id, actor.user_id)

    def list_managers(self) -> Sequence[User]:
        return self._users.list_by_roles(MANAGER_CANDIDATE_ROLES)

    def get_profile(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user or user.is_deleted:
            raise NotFoundError("User not found")
        return user

    def list_birthdays(self) -> list[dict]:
        return [
            {
                "id": u.user_id,
                "firstName": u.first_name,
                "lastName": u.last_name,
                "dob": u.dob.isoformat() if u.dob else None,
                "role": u.role.value,
            }
            for u in self._users.list_all()
        ]


class RoleCatalogService:
    def __init__(self, roles: RoleRepository):
        self._roles = roles

    def list_roles(self) -> Sequence[RoleDefinition]:
        return self._roles.list_all()

    def seed_roles(self) -> None:
        for role in DEFAULT_ROLES:
            self._roles.ensure(role)


class PasswordResetService:
    """Use case: forgot / reset password via an emailed one-time token."""

    def __init__(
        self,
        users: UserRepository,
        mailer: Mailer,
        *,
        base_url: str,
        token_minutes: int = DEFAULT_RESET_TOKEN_MINUTES,
    ):
        self._users = users
        self._mailer = mailer
        self._base_url = base_url.rstrip("/")
        self._token_minutes = int(token_minutes)

    def request_reset(self, email: str, *, now: Optional[datetime] = None) -> str:
        now = now or utc_now()
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or user.is_deleted:
            raise NotFoundError("User not found")

        token = secrets.token_hex(32)
        self._users.set_reset_token(user.user_id, token=token, expires_at=now + timedelta(minutes=self._token_minutes))

        link = f"{self._base_url}/reset-password/{token}"
        self._mailer.send(
            to=user.email,
            subject="Reset Your Password - HR Portal",
            html=password_reset_email(first_name=user.first_name, link=link, minutes=self._token_minutes),
        )
        logger.info("Password reset requested for %s", user.user_id)
        return token

    def reset_password(self, token: str, password: str, *, now: Optional[datetime] = None) -> None:
        now = now or utc_now()
        user = self._users.get_by_reset_token((token or "").strip(), now=now) if token else None
        if not user:
            raise ValidationError("Invalid or expired token")

        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        self._users.update_password(user.user_id, password_hash=generate_password_hash(password))
        logger.info("Password reset completed for %s", user.user_id)
