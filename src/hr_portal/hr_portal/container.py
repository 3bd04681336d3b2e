from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mongo_attendance_repository import MongoAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .notifications.mailer import Mailer, SmtpConfig, SmtpMailer
from .reports.service import DashboardService
from .users.mongo_counter_repository import MongoCounterRepository
from .users.mongo_mapping_repository import MongoManagerMappingRepository
from .users.mongo_role_repository import MongoRoleRepository
from .users.mongo_user_repository import MongoUserRepository
from .users.repository import CounterRepository, ManagerMappingRepository, UserRepository
from .users.role_repository import RoleRepository
from .users.service import AuthService, PasswordResetService, RoleCatalogService, UserService
from .users.tokens import TokenService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    mappings_repo: ManagerMappingRepository
    counters_repo: CounterRepository
    roles_repo: RoleRepository
    attendance_repo: AttendanceRepository

    tokens: TokenService
    mailer: Mailer

    auth_service: AuthService
    user_service: UserService
    role_service: RoleCatalogService
    password_reset_service: PasswordResetService
    attendance_service: AttendanceService
    dashboard_service: DashboardService

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()


def wire(
    *,
    conn: Optional[DatabaseConnection],
    users_repo: UserRepository,
    mappings_repo: ManagerMappingRepository,
    counters_repo: CounterRepository,
    roles_repo: RoleRepository,
    attendance_repo: AttendanceRepository,
    tokens: TokenService,
    mailer: Mailer,
    base_url: str,
    reset_token_minutes: int,
) -> Container:
    """Build services on top of already constructed repositories."""

    return Container(
        conn=conn,
        users_repo=users_repo,
        mappings_repo=mappings_repo,
        counters_repo=counters_repo,
        roles_repo=roles_repo,
        attendance_repo=attendance_repo,
        tokens=tokens,
        mailer=mailer,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo, mappings_repo, counters_repo),
        role_service=RoleCatalogService(roles_repo),
        password_reset_service=PasswordResetService(
            users_repo,
            mailer,
            base_url=base_url,
            token_minutes=reset_token_minutes,
        ),
        attendance_service=AttendanceService(attendance_repo, users_repo),
        dashboard_service=DashboardService(users_repo, attendance_repo),
    )


def build_container(*, settings) -> Container:
    conn = DatabaseConnection(
        DBConfig(
            uri=str(settings.MONGO_URI),
            database=str(settings.MONGO_DB_NAME),
        )
    )
    mailer = SmtpMailer(
        SmtpConfig(
            host=str(settings.SMTP_HOST),
            port=int(settings.SMTP_PORT),
            username=str(settings.SMTP_USER),
            password=str(settings.SMTP_PASSWORD),
            sender=str(settings.MAIL_SENDER),
            use_tls=bool(settings.SMTP_USE_TLS),
        )
    )

    return wire(
        conn=conn,
        users_repo=MongoUserRepository(conn),
        mappings_repo=MongoManagerMappingRepository(conn),
        counters_repo=MongoCounterRepository(conn),
        roles_repo=MongoRoleRepository(conn),
        attendance_repo=MongoAttendanceRepository(conn),
        tokens=TokenService(str(settings.JWT_SECRET), expires_hours=int(settings.JWT_EXP_HOURS)),
        mailer=mailer,
        base_url=str(settings.APP_BASE_URL),
        reset_token_minutes=int(settings.RESET_TOKEN_MINUTES),
    )
