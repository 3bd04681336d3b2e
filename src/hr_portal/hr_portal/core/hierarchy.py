"""Role hierarchy tables.

Two lookups with different depths:

* ``viewable_roles`` is the transitive set of subordinate roles a role may
  see, manage and approve.
* ``manager_roles_allowed_for`` is the single role one level up that may be
  assigned as a manager.
"""

from __future__ import annotations

from typing import FrozenSet, Optional

from .enums import Role

_VIEWABLE: dict[Role, FrozenSet[Role]] = {
    Role.SUPER_ADMIN: frozenset({Role.CXO_HR, Role.TECH_MANAGER, Role.EMPLOYEE, Role.INTERN}),
    Role.CXO_HR: frozenset({Role.TECH_MANAGER, Role.EMPLOYEE, Role.INTERN}),
    Role.TECH_MANAGER: frozenset({Role.EMPLOYEE, Role.INTERN}),
    Role.EMPLOYEE: frozenset({Role.INTERN}),
    Role.INTERN: frozenset(),
}

_MANAGER: dict[Role, FrozenSet[Role]] = {
    Role.SUPER_ADMIN: frozenset(),
    Role.CXO_HR: frozenset({Role.SUPER_ADMIN}),
    Role.TECH_MANAGER: frozenset({Role.CXO_HR}),
    Role.EMPLOYEE: frozenset({Role.TECH_MANAGER}),
    Role.INTERN: frozenset({Role.EMPLOYEE}),
}

# Roles allowed to mark attendance on behalf of someone else.
OVERRIDE_ROLES: FrozenSet[Role] = frozenset({Role.SUPER_ADMIN, Role.CXO_HR, Role.TECH_MANAGER})

# Roles that can be picked as someone's manager.
MANAGER_CANDIDATE_ROLES: FrozenSet[Role] = frozenset(r for roles in _MANAGER.values() for r in roles)


def viewable_roles(role: Role) -> FrozenSet[Role]:
    return _VIEWABLE.get(Role(role), frozenset())


def manager_roles_allowed_for(role: Role) -> FrozenSet[Role]:
    return _MANAGER.get(Role(role), frozenset())


def can_view(actor_role: Role, subject_role: Role) -> bool:
    """True when ``actor_role`` may see, manage and approve ``subject_role``."""
    return Role(subject_role) in viewable_roles(actor_role)


def is_valid_manager(subordinate_role: Role, manager_role: Optional[Role]) -> bool:
    """Strict one-level-up check used when assigning a manager."""
    if manager_role is None:
        return False
    return Role(manager_role) in manager_roles_allowed_for(subordinate_role)


def requires_manager(role: Role) -> bool:
    return bool(manager_roles_allowed_for(role))
