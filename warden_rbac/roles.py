"""Role Store.

Registry of roles, each owning an ordered list of permissions. Role
permission lists are value copies: they may diverge from the catalog.
"""

import threading
from collections.abc import Iterable, Mapping
from typing import Any

from warden_obs.logging import get_logger
from warden_obs.metrics import registration_conflicts_total, registrations_total
from warden_rbac.errors import DuplicateIdError, RoleNotFoundError
from warden_rbac.models import Permission, Role
from warden_rbac.parser import coerce_permission

logger = get_logger(__name__)

RoleInput = Role | Mapping[str, Any]


class RoleStore:
    """Role registry with permission assignment.

    Writes are serialized with a lock. A grant replaces the role's
    permission list with a new list instead of appending in place, so a
    check already iterating the old list never sees a half-written one.
    """

    def __init__(self):
        self._roles: dict[str, Role] = {}
        self._lock = threading.Lock()

    def create(self, role: RoleInput) -> Role:
        """
        Create a role.

        String entries in ``permissions`` are parsed into Permission objects;
        Permission objects pass through unchanged.

        Args:
            role: Role, or mapping with ``id``, ``name`` and ``permissions``

        Returns:
            The stored Role

        Raises:
            DuplicateIdError: A role with the same id exists
            InvalidPermissionError: A permission string is malformed
            TypeError: ``permissions`` is not a list (a bare string included)
        """
        if isinstance(role, Role):
            stored = role
        else:
            permissions = role.get("permissions", [])
            if not isinstance(permissions, (list, tuple)):
                raise TypeError(
                    f"Role {role['id']} permissions must be a list, got {type(permissions).__name__}"
                )
            stored = Role(
                id=role["id"],
                name=role["name"],
                permissions=[coerce_permission(p) for p in permissions],
            )

        with self._lock:
            if stored.id in self._roles:
                registration_conflicts_total.labels(kind="role").inc()
                logger.warning("role_conflict", role_id=stored.id)
                raise DuplicateIdError("role", stored.id)
            self._roles[stored.id] = stored

        registrations_total.labels(kind="role").inc()
        logger.info("role_created", role_id=stored.id, permissions=len(stored.permissions))
        return stored

    def create_many(self, roles: Iterable[RoleInput]) -> list[Role]:
        """Create roles in order; stops at the first failure."""
        return [self.create(role) for role in roles]

    def get(self, role_id: str) -> Role | None:
        """Get role by id."""
        return self._roles.get(role_id)

    def list_all(self) -> list[Role]:
        """All roles, in creation order."""
        return list(self._roles.values())

    def assign_permission(self, role_id: str, permission: Permission | str) -> Role:
        """
        Grant a permission to an existing role.

        Holders of a previously returned Role see the new permission.

        Raises:
            RoleNotFoundError: Unknown role id (store unchanged)
            InvalidPermissionError: Malformed permission string
        """
        with self._lock:
            role = self._roles.get(role_id)
            if role is None:
                registration_conflicts_total.labels(kind="grant").inc()
                raise RoleNotFoundError(role_id)

            granted = coerce_permission(permission)
            role.permissions = [*role.permissions, granted]

        registrations_total.labels(kind="grant").inc()
        logger.info("permission_assigned", role_id=role_id, permission_id=granted.id)
        return role

    def __contains__(self, role_id: object) -> bool:
        return role_id in self._roles

    def __len__(self) -> int:
        return len(self._roles)
