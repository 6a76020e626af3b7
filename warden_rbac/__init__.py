"""Warden RBAC.

Permission catalog, role store and authorization engine.
"""

from warden_rbac.bootstrap import Authorizer, create_authorizer, load_definitions
from warden_rbac.catalog import PermissionCatalog
from warden_rbac.engine import AuthorizationEngine, permission_matches
from warden_rbac.errors import (
    AuthorizationError,
    DefinitionsError,
    DuplicateIdError,
    InvalidPermissionError,
    RoleNotFoundError,
)
from warden_rbac.models import WILDCARD, Permission, Role, Subject
from warden_rbac.parser import coerce_permission, format_permission, parse_permission
from warden_rbac.roles import RoleStore

__all__ = [
    "Authorizer",
    "create_authorizer",
    "load_definitions",
    "PermissionCatalog",
    "AuthorizationEngine",
    "permission_matches",
    "AuthorizationError",
    "DefinitionsError",
    "DuplicateIdError",
    "InvalidPermissionError",
    "RoleNotFoundError",
    "WILDCARD",
    "Permission",
    "Role",
    "Subject",
    "coerce_permission",
    "format_permission",
    "parse_permission",
    "RoleStore",
]
