"""RBAC Pydantic models.

Permission, Role and the decision-time Subject.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

WILDCARD = "*"


class Permission(BaseModel):
    """A single (action, resource, scope) grant.

    ``id`` is a label and the catalog key; matching only looks at
    ``action``, ``resource`` and ``resource_scope``. A ``None`` scope means
    the permission applies to the resource as a whole, not to any scope.
    Unknown keys are rejected so a misspelled scope never reads as None.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., description="Catalog key, e.g. 'edit:documents:1234'")
    action: str = Field(..., description="Action token or '*'")
    resource: str = Field(..., description="Resource token or '*'")
    resource_scope: str | None = Field(
        None,
        validation_alias=AliasChoices("resource_scope", "resourceScope"),
        description="Scoped instance, '*' or None",
    )

    @property
    def key(self) -> tuple[str, str, str | None]:
        return (self.action, self.resource, self.resource_scope)

    def __str__(self) -> str:
        return self.id


class Role(BaseModel):
    """Named bundle of permissions.

    Roles are flat: no parent roles, no inheritance. Duplicate permissions
    in the list are allowed.
    """

    id: str
    name: str
    permissions: list[Permission] = Field(default_factory=list)


class Subject(BaseModel):
    """The caller being authorized.

    Entries may be structured records or their string forms (role ids and
    permission strings); the engine normalizes them per check.
    """

    model_config = ConfigDict(frozen=True)

    roles: list[Role | str] = Field(default_factory=list)
    permissions: list[Permission | str] = Field(default_factory=list)
