"""Pytest fixtures."""

import pytest
from prometheus_client import REGISTRY

from warden_rbac.bootstrap import Authorizer
from warden_rbac.catalog import PermissionCatalog
from warden_rbac.engine import AuthorizationEngine
from warden_rbac.roles import RoleStore


@pytest.fixture
def catalog():
    """Empty permission catalog."""
    return PermissionCatalog()


@pytest.fixture
def role_store():
    """Empty role store."""
    return RoleStore()


@pytest.fixture
def engine(role_store):
    """Engine bound to the role_store fixture."""
    return AuthorizationEngine(role_store)


@pytest.fixture
def authorizer():
    """Fresh authorizer with nothing registered."""
    return Authorizer()


@pytest.fixture
def sample_value():
    """Read a Prometheus sample, 0.0 when the label set was never used."""

    def _read(name: str, labels: dict[str, str]) -> float:
        return REGISTRY.get_sample_value(name, labels) or 0.0

    return _read
