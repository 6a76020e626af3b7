"""Warden RBAC exceptions.

Custom exception hierarchy for registration and parsing errors.
Authorization checks never raise these for a denied request.
"""


class AuthorizationError(Exception):
    """Base exception for the RBAC package."""

    pass


class DuplicateIdError(AuthorizationError):
    """A permission or role with the same id is already registered."""

    def __init__(self, kind: str, id: str):
        self.kind = kind
        self.id = id
        super().__init__(f"{kind.capitalize()} with ID {id} already exists.")


class RoleNotFoundError(AuthorizationError, LookupError):
    """Mutating call referenced an unknown role id."""

    def __init__(self, role_id: str):
        self.role_id = role_id
        super().__init__(f"Role with ID {role_id} not found.")


class InvalidPermissionError(AuthorizationError, ValueError):
    """Permission string does not follow action[:resource[:scope]]."""

    def __init__(self, value: str, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid permission string {value!r}: {reason}")


class DefinitionsError(AuthorizationError):
    """Definitions file could not be read or has the wrong shape."""

    pass
