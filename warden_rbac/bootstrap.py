"""
Authorizer construction and definitions seeding.

The host application builds one Authorizer at startup and passes it to
whatever needs to register roles or check permissions. There are no
module-level default instances.

Usage:
    settings = Settings()
    setup_logging(settings)
    authz = create_authorizer(settings)

    authz.roles.create({"id": "editor", "name": "Editor", "permissions": ["edit:documents:*"]})
    authz.engine.has_permission({"roles": ["editor"]}, "edit:documents:42")

Definitions file (DEFINITIONS_FILE):
    {
        "permissions": ["view:documents", "edit:documents:*"],
        "roles": [
            {"id": "editor", "name": "Editor", "permissions": ["edit:documents:*"]}
        ]
    }
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from warden_config.settings import Settings
from warden_obs.logging import get_logger
from warden_rbac.catalog import PermissionCatalog
from warden_rbac.engine import AuthorizationEngine
from warden_rbac.errors import DefinitionsError, DuplicateIdError
from warden_rbac.parser import coerce_permission
from warden_rbac.roles import RoleStore

logger = get_logger(__name__)


@dataclass
class Authorizer:
    """Catalog, role store and engine wired together."""

    catalog: PermissionCatalog = field(default_factory=PermissionCatalog)
    roles: RoleStore = field(default_factory=RoleStore)
    engine: AuthorizationEngine = field(init=False)

    def __post_init__(self) -> None:
        self.engine = AuthorizationEngine(self.roles)


def create_authorizer(settings: Settings | None = None) -> Authorizer:
    """
    Build an Authorizer, seeded from settings.DEFINITIONS_FILE when set.

    Raises:
        DefinitionsError: File missing, not JSON, or wrong shape
        DuplicateIdError: Duplicate ids in the file (STRICT_DEFINITIONS only)
    """
    settings = settings or Settings()
    authorizer = Authorizer()

    if settings.DEFINITIONS_FILE:
        data = read_definitions(settings.DEFINITIONS_FILE)
        load_definitions(authorizer, data, strict=settings.STRICT_DEFINITIONS)

    return authorizer


def read_definitions(path: str | Path) -> dict[str, Any]:
    """Read and decode a JSON definitions file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise DefinitionsError(f"Cannot read definitions file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DefinitionsError(f"Definitions file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise DefinitionsError(f"Definitions file {path} must contain a JSON object")
    return data


def load_definitions(
    authorizer: Authorizer,
    data: Mapping[str, Any],
    strict: bool = True,
) -> None:
    """
    Register the permissions and roles described by ``data``.

    Args:
        authorizer: Target authorizer
        data: Mapping with optional ``permissions`` and ``roles`` lists
        strict: Raise on duplicate ids; when False, log and skip them
    """
    permissions = data.get("permissions", [])
    roles = data.get("roles", [])
    if not isinstance(permissions, list) or not isinstance(roles, list):
        raise DefinitionsError("'permissions' and 'roles' must be lists")

    for entry in permissions:
        try:
            authorizer.catalog.register(coerce_permission(entry))
        except DuplicateIdError:
            if strict:
                raise
            logger.warning("definition_skipped", kind="permission", entry=repr(entry))

    for entry in roles:
        if not isinstance(entry, Mapping) or "id" not in entry or "name" not in entry:
            raise DefinitionsError(f"Role definition needs 'id' and 'name': {entry!r}")
        if not isinstance(entry.get("permissions", []), list):
            raise DefinitionsError(f"Role {entry['id']} 'permissions' must be a list: {entry!r}")
        try:
            authorizer.roles.create(entry)
        except DuplicateIdError:
            if strict:
                raise
            logger.warning("definition_skipped", kind="role", entry=repr(entry))

    logger.info(
        "definitions_loaded",
        permissions=len(authorizer.catalog),
        roles=len(authorizer.roles),
    )
