"""Permission Catalog.

Append-only registry of permissions keyed by id.
"""

import threading
from collections.abc import Iterable, Mapping
from typing import Any

from warden_obs.logging import get_logger
from warden_obs.metrics import registration_conflicts_total, registrations_total
from warden_rbac.errors import DuplicateIdError
from warden_rbac.models import Permission
from warden_rbac.parser import coerce_permission

logger = get_logger(__name__)


class PermissionCatalog:
    """Permission registry with id uniqueness."""

    def __init__(self):
        self._permissions: dict[str, Permission] = {}
        self._lock = threading.Lock()

    def register(self, permission: Permission) -> None:
        """
        Register a permission.

        Raises:
            DuplicateIdError: A permission with the same id exists (catalog unchanged)
        """
        with self._lock:
            if permission.id in self._permissions:
                registration_conflicts_total.labels(kind="permission").inc()
                logger.warning("permission_conflict", permission_id=permission.id)
                raise DuplicateIdError("permission", permission.id)
            self._permissions[permission.id] = permission

        registrations_total.labels(kind="permission").inc()
        logger.info("permission_registered", permission_id=permission.id)

    def register_many(self, entries: Iterable[Permission | str | Mapping[str, Any]]) -> list[Permission]:
        """
        Register permissions given as objects or permission strings.

        Entries are registered in order; a duplicate stops the loop and the
        entries before it stay registered.

        Returns:
            The registered permissions
        """
        registered = []
        for entry in entries:
            permission = coerce_permission(entry)
            self.register(permission)
            registered.append(permission)
        return registered

    def get(self, permission_id: str) -> Permission | None:
        """Get permission by id."""
        return self._permissions.get(permission_id)

    def list_all(self) -> list[Permission]:
        """All registered permissions. Order is not part of the contract."""
        return list(self._permissions.values())

    def __contains__(self, permission_id: object) -> bool:
        return permission_id in self._permissions

    def __len__(self) -> int:
        return len(self._permissions)
