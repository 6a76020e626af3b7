"""Role Store Tests."""

import pytest

from warden_rbac.errors import DuplicateIdError, InvalidPermissionError, RoleNotFoundError
from warden_rbac.models import Permission, Role


class TestCreateRole:
    """Tests for role creation."""

    def test_create_role(self, role_store):
        """Created role is retrievable by id."""
        role = Role(id="admin", name="Admin", permissions=[])
        role_store.create(role)

        assert role_store.get("admin") == role
        assert "admin" in role_store

    def test_create_role_from_mapping_with_string_permissions(self, role_store):
        """String permissions are parsed into Permission objects."""
        role_store.create(
            {"id": "editor", "name": "Editor", "permissions": ["view:documents", "edit:documents:*"]}
        )

        stored = role_store.get("editor")
        assert stored.permissions == [
            Permission(id="view:documents", action="view", resource="documents", resource_scope=None),
            Permission(id="edit:documents:*", action="edit", resource="documents", resource_scope="*"),
        ]

    def test_mixed_permission_entries(self, role_store):
        """Permission objects pass through next to parsed strings."""
        custom = Permission(id="approve-any", action="approve", resource="*")
        role = role_store.create({"id": "approver", "name": "Approver", "permissions": [custom, "view:invoices"]})

        assert role.permissions[0] is custom
        assert role.permissions[1].id == "view:invoices"

    def test_duplicate_permissions_allowed(self, role_store):
        """Permission lists have no uniqueness constraint."""
        role = role_store.create({"id": "viewer", "name": "Viewer", "permissions": ["view:documents"] * 2})
        assert len(role.permissions) == 2

    def test_duplicate_role_rejected(self, role_store):
        """Second role with the same id raises and keeps the first."""
        first = role_store.create({"id": "admin", "name": "Admin", "permissions": []})

        with pytest.raises(DuplicateIdError) as exc_info:
            role_store.create({"id": "admin", "name": "Other Admin", "permissions": ["*"]})

        assert str(exc_info.value) == "Role with ID admin already exists."
        assert role_store.get("admin") is first
        assert len(role_store) == 1

    def test_malformed_permission_string_rejected(self, role_store):
        """A bad permission string fails creation and nothing is stored."""
        with pytest.raises(InvalidPermissionError):
            role_store.create({"id": "broken", "name": "Broken", "permissions": ["view::x"]})

        assert role_store.get("broken") is None

    @pytest.mark.parametrize("permissions", ["edit:docs:*", "admin*"])
    def test_string_permissions_field_rejected(self, role_store, permissions):
        """A bare string in place of the permission list is refused, nothing stored."""
        with pytest.raises(TypeError):
            role_store.create({"id": "r", "name": "R", "permissions": permissions})

        assert role_store.get("r") is None
        assert len(role_store) == 0

    def test_create_many(self, role_store):
        """Roles are created in order."""
        role_store.create_many(
            [
                {"id": "viewer", "name": "Viewer", "permissions": ["view:documents"]},
                {"id": "editor", "name": "Editor", "permissions": ["edit:documents"]},
            ]
        )

        assert [role.id for role in role_store.list_all()] == ["viewer", "editor"]


def test_get_unknown_role_returns_none(role_store):
    """Unknown role ids are absent, not an error."""
    assert role_store.get("ghost") is None


class TestAssignPermission:
    """Tests for assign_permission."""

    def test_assign_permission_object(self, role_store):
        """Permission objects are appended as given."""
        role_store.create({"id": "admin", "name": "Admin", "permissions": []})
        permission = Permission(id="edit:documents:*", action="edit", resource="documents", resource_scope="*")

        role_store.assign_permission("admin", permission)

        assert permission in role_store.get("admin").permissions

    def test_assign_permission_string(self, role_store):
        """Strings are parsed before being appended."""
        role_store.create({"id": "editor", "name": "Editor", "permissions": []})

        role_store.assign_permission("editor", "view:documents")

        assert role_store.get("editor").permissions == [
            Permission(id="view:documents", action="view", resource="documents")
        ]

    def test_previously_returned_role_sees_grant(self, role_store):
        """Holders of the Role object observe later grants."""
        role = role_store.create({"id": "editor", "name": "Editor", "permissions": []})

        role_store.assign_permission("editor", "edit:documents")

        assert [p.id for p in role.permissions] == ["edit:documents"]

    def test_grant_replaces_list(self, role_store):
        """A list obtained before the grant is left untouched."""
        role = role_store.create({"id": "editor", "name": "Editor", "permissions": ["view:documents"]})
        snapshot = role.permissions

        role_store.assign_permission("editor", "edit:documents")

        assert len(snapshot) == 1
        assert len(role.permissions) == 2

    def test_unknown_role_rejected(self, role_store):
        """Assigning to an unknown role raises and leaves the store unchanged."""
        role_store.create({"id": "editor", "name": "Editor", "permissions": ["view:documents"]})

        with pytest.raises(RoleNotFoundError) as exc_info:
            role_store.assign_permission("nonexistent_role", "edit:documents:*")

        assert str(exc_info.value) == "Role with ID nonexistent_role not found."
        assert exc_info.value.role_id == "nonexistent_role"
        assert len(role_store) == 1
        assert [p.id for p in role_store.get("editor").permissions] == ["view:documents"]
