"""Unit tests for PermissionStore.

Tests cover:
- Create, uniqueness per guard, validation (discrete and wildcard mode)
- Lookups, find_or_create race, rename, delete with cascade
- Permissions are not team-scoped
"""

import asyncio
from uuid import uuid4

import pytest

from warden.core.enums import ErrorCode
from warden.core.errors import ConflictError, NotFoundError, ValidationError
from warden.core.result import Failure, Success
from warden.domain.events import PermissionCreated, PermissionDeleted, PermissionUpdated


@pytest.mark.unit
class TestPermissionCreate:
    """Test PermissionStore.create()."""

    async def test_create(self, services, published):
        """Test creation with the default guard publishes PermissionCreated."""
        result = await services.permissions.create("posts.edit")

        assert isinstance(result, Success)
        assert result.value.guard_name == "web"
        event = published()[0]
        assert isinstance(event, PermissionCreated)
        assert event.permission_id == result.value.id
        assert event.name == "posts.edit"

    async def test_duplicate_conflicts(self, services):
        """Test (name, guard) uniqueness."""
        await services.permissions.create("posts.edit")

        result = await services.permissions.create("posts.edit")

        assert isinstance(result.error, ConflictError)
        assert result.error.code == ErrorCode.PERMISSION_ALREADY_EXISTS

    async def test_same_name_other_guard(self, services):
        """Test guards partition permission names."""
        await services.permissions.create("posts.edit", "web")

        result = await services.permissions.create("posts.edit", "api")

        assert isinstance(result, Success)

    async def test_empty_name(self, services):
        """Test empty names are rejected."""
        result = await services.permissions.create("")

        assert isinstance(result.error, ValidationError)
        assert result.error.code == ErrorCode.INVALID_NAME

    async def test_discrete_mode_accepts_any_name(self, services):
        """Test pattern rules only apply in wildcard mode."""
        result = await services.permissions.create("post*")

        assert isinstance(result, Success)

    async def test_wildcard_mode_rejects_malformed_pattern(self, make_services):
        """Test wildcard mode validates pattern syntax."""
        services = make_services(wildcard_enabled=True)

        result = await services.permissions.create("post*")

        assert isinstance(result.error, ValidationError)
        assert result.error.code == ErrorCode.INVALID_WILDCARD_PATTERN

    async def test_wildcard_mode_accepts_pattern(self, make_services):
        """Test wildcard mode stores patterns."""
        services = make_services(wildcard_enabled=True)

        result = await services.permissions.create("posts.*")

        assert result.value.name == "posts.*"

    async def test_concurrent_creates(self, services, registry):
        """Test exactly one of two racing creates succeeds."""
        results = await asyncio.gather(
            services.permissions.create("posts.edit"),
            services.permissions.create("posts.edit"),
        )

        assert sorted(type(r).__name__ for r in results) == ["Failure", "Success"]
        assert len(registry.permissions) == 1


@pytest.mark.unit
class TestPermissionLookupAndLifecycle:
    """Test lookups, find_or_create, rename, delete, all."""

    async def test_find_by_name_and_id(self, services):
        """Test both lookups return the same record."""
        created = await services.permissions.create("posts.edit")

        assert await services.permissions.find_by_name("posts.edit") == created
        assert await services.permissions.find_by_id(created.value.id) == created

    async def test_find_by_name_rejects_empty_name(self, services):
        """Test an empty lookup name is a validation failure."""
        result = await services.permissions.find_by_name(" ")

        assert isinstance(result.error, ValidationError)
        assert result.error.code == ErrorCode.INVALID_NAME

    async def test_empty_name_check_is_invalid_argument(self, services, user):
        """Test checking an empty permission name fails validation."""
        result = await services.resolver.has_permission_to(user, "")

        assert isinstance(result.error, ValidationError)

    async def test_find_by_id_wrong_guard(self, services):
        """Test lookups are guard-exact."""
        created = await services.permissions.create("posts.edit", "api")

        result = await services.permissions.find_by_id(created.value.id)

        assert isinstance(result.error, NotFoundError)
        assert result.error.code == ErrorCode.PERMISSION_NOT_FOUND

    async def test_find_or_create_race(self, services, registry):
        """Test racing find_or_create calls converge on one record."""
        first, second = await asyncio.gather(
            services.permissions.find_or_create("posts.edit"),
            services.permissions.find_or_create("posts.edit"),
        )

        assert first == second
        assert isinstance(first, Success)
        assert len(registry.permissions) == 1

    async def test_rename(self, services, published):
        """Test rename publishes PermissionUpdated."""
        permission = (await services.permissions.create("posts.edit")).value

        result = await services.permissions.rename(permission.id, "posts.update")

        assert result.value.name == "posts.update"
        assert isinstance(published()[-1], PermissionUpdated)

    async def test_rename_conflict(self, services):
        """Test rename keeps names unique."""
        await services.permissions.create("posts.update")
        permission = (await services.permissions.create("posts.edit")).value

        result = await services.permissions.rename(permission.id, "posts.update")

        assert isinstance(result.error, ConflictError)

    async def test_delete_detaches_from_roles(self, services, registry, published):
        """Test deleting a permission removes its role edges."""
        role = (await services.roles.create("editor")).value
        permission = (await services.permissions.create("posts.edit")).value
        await services.graph.attach(role.id, permission.id)

        result = await services.permissions.delete(permission.id)

        assert result == Success(value=None)
        assert registry.role_permissions == set()
        assert await services.graph.permissions_of(role.id) == frozenset()
        assert isinstance(published()[-1], PermissionDeleted)

    async def test_delete_missing(self, services):
        """Test deleting an unknown permission is NotFound."""
        result = await services.permissions.delete(uuid4())

        assert isinstance(result, Failure)
        assert isinstance(result.error, NotFoundError)

    async def test_all(self, services):
        """Test listing by guard."""
        await services.permissions.create("b")
        await services.permissions.create("a")
        await services.permissions.create("c", "api")

        assert [p.name for p in (await services.permissions.all("web")).value] == [
            "a",
            "b",
        ]


@pytest.mark.unit
class TestPermissionsAreGlobal:
    """Permissions ignore team scoping even when roles are scoped."""

    async def test_permission_created_in_one_team_visible_in_another(
        self, make_services
    ):
        """Test a permission created under team T1 is found under T2."""
        services = make_services(teams_enabled=True)
        team_1, team_2 = uuid4(), uuid4()

        with services.teams.scoped(team_1):
            created = await services.permissions.create("posts.edit")
        with services.teams.scoped(team_2):
            found = await services.permissions.find_by_name("posts.edit")
            duplicate = await services.permissions.create("posts.edit")

        assert found == created
        assert isinstance(duplicate.error, ConflictError)
