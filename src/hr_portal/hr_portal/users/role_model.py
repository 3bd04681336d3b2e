from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RoleDefinition:
    code: str
    name: str


DEFAULT_ROLES = (
    RoleDefinition(code="SUPER_ADMIN", name="Super Admin"),
    RoleDefinition(code="CXO_HR", name="CXO / HR"),
    RoleDefinition(code="TECH_MANAGER", name="Tech Manager"),
    RoleDefinition(code="EMPLOYEE", name="Employee"),
    RoleDefinition(code="INTERN", name="Intern"),
)
