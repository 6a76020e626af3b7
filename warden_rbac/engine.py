"""Authorization Engine.

Decides whether a subject holds a requested permission, directly or through
one of its roles.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Protocol

from pydantic import ValidationError

from warden_obs.logging import get_logger
from warden_obs.metrics import authorization_checks_total
from warden_rbac.errors import InvalidPermissionError
from warden_rbac.models import WILDCARD, Permission, Role, Subject
from warden_rbac.parser import coerce_permission
from warden_rbac.roles import RoleStore

logger = get_logger(__name__)

ENTRY_SEQUENCES = (list, tuple)


class SubjectLike(Protocol):
    """User-like object carrying role and permission lists."""

    roles: list[Role | str] | None
    permissions: list[Permission | str] | None


SubjectInput = Subject | Mapping[str, Any] | SubjectLike


def permission_matches(
    candidate: Permission,
    action: str,
    resource: str,
    scope: str | None = None,
) -> bool:
    """
    Check if a held permission satisfies a requested (action, resource, scope).

    Supports:
    - Super-permission: action "*" matches everything, whatever its resource/scope
    - Exact action match (no prefix matching)
    - Resource wildcard: resource "*" matches any resource
    - Scope wildcard: scope "*" matches any scope, including none

    Args:
        candidate: Permission held by the subject
        action: Requested action
        resource: Requested resource
        scope: Requested scope (None for an unscoped request)

    Returns:
        bool: True if candidate grants the request

    Example:
        permission_matches(parse_permission("*"), "delete", "users")  # True
        permission_matches(parse_permission("edit:documents:*"), "edit", "documents")  # True
        permission_matches(parse_permission("edit:documents:1"), "edit", "documents", "2")  # False
    """
    if candidate.action == WILDCARD:
        return True

    if candidate.action != action:
        return False

    if candidate.resource != WILDCARD and candidate.resource != resource:
        return False

    return candidate.resource_scope == scope or candidate.resource_scope == WILDCARD


class AuthorizationEngine:
    """
    Evaluates subjects against requested permissions.

    Direct permissions are checked first, then each role's permissions, and
    the first match wins. The result only depends on the set of reachable
    permissions, so the scan order never changes the answer.

    Role-id strings are resolved through the role store at check time. The
    catalog is never consulted.
    """

    def __init__(self, role_store: RoleStore):
        self.role_store = role_store

    def has_permission(self, subject: SubjectInput, requested: Permission | str) -> bool:
        """
        Check if subject holds the requested permission.

        Args:
            subject: Subject, mapping or object with ``roles`` and ``permissions``
            requested: Permission or permission string

        Returns:
            bool: True if any direct or role permission matches

        Raises:
            InvalidPermissionError: ``requested`` is a malformed string
        """
        allowed = self.find_match(subject, requested) is not None
        authorization_checks_total.labels(result="allowed" if allowed else "denied").inc()
        return allowed

    def find_match(self, subject: SubjectInput, requested: Permission | str) -> Permission | None:
        """Return the first permission that grants ``requested``, or None."""
        wanted = coerce_permission(requested)
        action, resource, scope = wanted.key

        for candidate in self._iter_permissions(subject):
            if permission_matches(candidate, action, resource, scope):
                logger.debug(
                    "permission_granted",
                    requested=wanted.id,
                    granted_by=candidate.id,
                )
                return candidate

        logger.debug("permission_denied", requested=wanted.id)
        return None

    def has_all_permissions(self, subject: SubjectInput, requested: Iterable[Permission | str]) -> bool:
        """Check if subject holds every requested permission (AND)."""
        return all(self.has_permission(subject, perm) for perm in requested)

    def has_any_permission(self, subject: SubjectInput, requested: Iterable[Permission | str]) -> bool:
        """Check if subject holds at least one requested permission (OR)."""
        return any(self.has_permission(subject, perm) for perm in requested)

    def effective_permissions(self, subject: SubjectInput) -> list[Permission]:
        """All permissions reachable from subject: direct first, then by role."""
        return list(self._iter_permissions(subject))

    # ============================================================
    # SUBJECT TRAVERSAL
    # ============================================================

    def _iter_permissions(self, subject: SubjectInput) -> Iterator[Permission]:
        roles, direct = _subject_entries(subject)

        yield from _normalized(direct)

        for entry in roles:
            role = self._resolve_role(entry)
            if role is not None:
                yield from _normalized(role.permissions)

    def _resolve_role(self, entry: Role | str | Mapping[str, Any]) -> Role | None:
        if isinstance(entry, Role):
            return entry

        if isinstance(entry, str):
            role = self.role_store.get(entry)
            if role is None:
                logger.debug("unknown_role_skipped", role_id=entry)
            return role

        try:
            permissions = entry.get("permissions", [])
            if not isinstance(permissions, ENTRY_SEQUENCES):
                raise TypeError("role permissions must be a list")
            return Role(
                id=entry["id"],
                name=entry.get("name", entry["id"]),
                permissions=list(_normalized(permissions)),
            )
        except (KeyError, TypeError, AttributeError, ValidationError):
            logger.warning("malformed_role_skipped", role=repr(entry))
            return None


def _subject_entries(subject: SubjectInput) -> tuple[Iterable[Any], Iterable[Any]]:
    """Extract (roles, permissions) from a Subject, mapping or user-like object."""
    if isinstance(subject, Mapping):
        roles, permissions = subject.get("roles"), subject.get("permissions")
    else:
        roles, permissions = getattr(subject, "roles", None), getattr(subject, "permissions", None)
    return _entry_list(roles, "roles"), _entry_list(permissions, "permissions")


def _entry_list(value: Any, field: str) -> Iterable[Any]:
    """Subject lists must be lists or tuples; anything else contributes nothing.

    A bare string would otherwise be scanned one character at a time, and a
    lone "*" character parses as the super-permission.
    """
    if value is None:
        return []
    if not isinstance(value, ENTRY_SEQUENCES):
        logger.warning("malformed_subject_field_skipped", field=field, value=repr(value))
        return []
    return value


def _normalized(entries: Iterable[Any]) -> Iterator[Permission]:
    """Yield entries as Permissions, skipping malformed ones."""
    for entry in entries:
        try:
            yield coerce_permission(entry)
        except (InvalidPermissionError, ValidationError):
            logger.warning("malformed_permission_skipped", permission=repr(entry))
