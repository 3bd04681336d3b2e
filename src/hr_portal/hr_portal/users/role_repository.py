from __future__ import annotations

from typing import Protocol, Sequence

from .role_model import RoleDefinition


class RoleRepository(Protocol):
    def list_all(self) -> Sequence[RoleDefinition]:
        raise NotImplementedError

    def ensure(self, role: RoleDefinition) -> None:
        """Insert the role if its code is not present yet."""

        raise NotImplementedError
