"""Permission string parsing.

Grammar: ``action[:resource[:scope]]``, colon-delimited, 1 to 3 segments.

    parse_permission("edit:documents:1234")
    # Permission(id="edit:documents:1234", action="edit", resource="documents", resource_scope="1234")

    parse_permission("view:documents")
    # Permission(id="view:documents", action="view", resource="documents", resource_scope=None)

A single-segment string such as ``"*"`` leaves ``resource`` as the empty
token.
"""

from warden_rbac.errors import InvalidPermissionError
from warden_rbac.models import Permission

SEPARATOR = ":"
MAX_SEGMENTS = 3


def format_permission(action: str, resource: str = "", scope: str | None = None) -> str:
    """Build the permission id from the segments that are present."""
    segments = [action]
    if resource or scope is not None:
        segments.append(resource)
    if scope is not None:
        segments.append(scope)
    return SEPARATOR.join(segments)


def parse_permission(value: str) -> Permission:
    """
    Convert a permission string into a Permission.

    Args:
        value: String in ``action[:resource[:scope]]`` form

    Returns:
        Permission whose id re-joins the supplied segments

    Raises:
        InvalidPermissionError: Empty string, empty segment or too many segments
    """
    if not value:
        raise InvalidPermissionError(value, "empty permission string")

    segments = value.split(SEPARATOR)
    if len(segments) > MAX_SEGMENTS:
        raise InvalidPermissionError(value, f"expected at most {MAX_SEGMENTS} segments")
    if any(not segment for segment in segments):
        raise InvalidPermissionError(value, "empty segment")

    action = segments[0]
    resource = segments[1] if len(segments) > 1 else ""
    scope = segments[2] if len(segments) > 2 else None

    return Permission(
        id=format_permission(action, resource, scope),
        action=action,
        resource=resource,
        resource_scope=scope,
    )


def coerce_permission(value: Permission | str) -> Permission:
    """Normalize a permission, permission string or mapping to a Permission."""
    if isinstance(value, Permission):
        return value
    if isinstance(value, str):
        return parse_permission(value)
    return Permission.model_validate(value)
