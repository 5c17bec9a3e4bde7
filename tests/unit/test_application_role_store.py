"""Unit tests for RoleStore.

Tests cover:
- Create with default guard, validation, uniqueness per guard
- Lookups by name and id
- find_or_create (existing, new, concurrent race)
- Concurrent create: exactly one winner
- Rename and delete (with cascade), events and logging
- Team scoping (NULL-or-match, default-filled team id)
"""

import asyncio
from uuid import uuid4

import pytest

from warden.core.enums import ErrorCode
from warden.core.errors import ConflictError, NotFoundError, ValidationError
from warden.core.result import Failure, Success
from warden.domain.events import RoleCreated, RoleDeleted, RoleUpdated
from warden.domain.value_objects import PrincipalRef


@pytest.mark.unit
class TestRoleCreate:
    """Test RoleStore.create()."""

    async def test_create_uses_default_guard(self, services, published):
        """Test omitted guard falls back to the configured default."""
        result = await services.roles.create("editor")

        assert isinstance(result, Success)
        role = result.value
        assert role.name == "editor"
        assert role.guard_name == "web"
        assert role.team_id is None
        assert published() == [
            RoleCreated(
                role_id=role.id,
                name="editor",
                guard_name="web",
                team_id=None,
                event_id=published()[0].event_id,
                occurred_at=published()[0].occurred_at,
            )
        ]

    async def test_create_strips_name(self, services):
        """Test surrounding whitespace is removed."""
        result = await services.roles.create("  editor  ")

        assert result.value.name == "editor"

    @pytest.mark.parametrize("name", ["", "   "])
    async def test_create_rejects_empty_name(self, services, published, name):
        """Test empty names are InvalidArgument."""
        result = await services.roles.create(name)

        assert isinstance(result, Failure)
        assert isinstance(result.error, ValidationError)
        assert result.error.code == ErrorCode.INVALID_NAME
        assert published() == []

    async def test_duplicate_name_same_guard_conflicts(self, services):
        """Test (name, guard) uniqueness."""
        await services.roles.create("editor", "web")

        result = await services.roles.create("editor", "web")

        assert isinstance(result, Failure)
        assert isinstance(result.error, ConflictError)
        assert result.error.code == ErrorCode.ROLE_ALREADY_EXISTS

    async def test_same_name_other_guard_is_allowed(self, services):
        """Test guards partition role names."""
        web = await services.roles.create("editor", "web")
        api = await services.roles.create("editor", "api")

        assert isinstance(web, Success)
        assert isinstance(api, Success)
        assert web.value.id != api.value.id

    async def test_concurrent_creates_yield_exactly_one_role(self, services, registry):
        """Test two racing creates: one Success, one ConflictError."""
        results = await asyncio.gather(
            services.roles.create("editor", "web"),
            services.roles.create("editor", "web"),
        )

        successes = [r for r in results if isinstance(r, Success)]
        failures = [r for r in results if isinstance(r, Failure)]
        assert len(successes) == 1
        assert len(failures) == 1
        assert isinstance(failures[0].error, ConflictError)
        assert len(registry.roles) == 1


@pytest.mark.unit
class TestRoleLookup:
    """Test find_by_name / find_by_id / all."""

    async def test_find_by_name(self, services):
        """Test lookup returns the stored role."""
        created = await services.roles.create("editor")

        found = await services.roles.find_by_name("editor")

        assert found == created

    async def test_find_by_name_missing(self, services):
        """Test absence is NotFound."""
        result = await services.roles.find_by_name("ghost")

        assert isinstance(result, Failure)
        assert isinstance(result.error, NotFoundError)
        assert result.error.code == ErrorCode.ROLE_NOT_FOUND
        assert result.error.resource_id == "ghost"

    @pytest.mark.parametrize("name", ["", "  "])
    async def test_find_by_name_rejects_empty_name(self, services, name):
        """Test an empty lookup name is InvalidArgument, not NotFound."""
        result = await services.roles.find_by_name(name)

        assert isinstance(result.error, ValidationError)
        assert result.error.code == ErrorCode.INVALID_NAME

    async def test_find_by_name_respects_guard(self, services):
        """Test a role under another guard is not found."""
        await services.roles.create("editor", "api")

        assert isinstance(await services.roles.find_by_name("editor"), Failure)
        assert isinstance(await services.roles.find_by_name("editor", "api"), Success)

    async def test_find_by_id(self, services):
        """Test lookup by id."""
        created = await services.roles.create("editor")

        found = await services.roles.find_by_id(created.value.id)

        assert found == created

    async def test_find_by_id_missing(self, services):
        """Test unknown id is NotFound."""
        result = await services.roles.find_by_id(uuid4())

        assert isinstance(result.error, NotFoundError)

    async def test_all_sorted_and_filtered(self, services):
        """Test listing is ordered by name and filterable by guard."""
        await services.roles.create("writer")
        await services.roles.create("admin")
        await services.roles.create("bot", "api")

        everything = await services.roles.all()
        web_only = await services.roles.all("web")

        assert [r.name for r in everything.value] == ["admin", "bot", "writer"]
        assert [r.name for r in web_only.value] == ["admin", "writer"]


@pytest.mark.unit
class TestRoleFindOrCreate:
    """Test find_or_create()."""

    async def test_returns_existing(self, services, published):
        """Test an existing role is returned without an event."""
        created = await services.roles.create("editor")
        count = len(published())

        result = await services.roles.find_or_create("editor")

        assert result == created
        assert len(published()) == count

    async def test_creates_missing(self, services):
        """Test a missing role is created."""
        result = await services.roles.find_or_create("editor")

        assert isinstance(result, Success)
        assert result.value.name == "editor"

    async def test_concurrent_find_or_create_returns_same_record(
        self, services, registry, mock_logger
    ):
        """Test the race loser re-reads and returns the winner."""
        first, second = await asyncio.gather(
            services.roles.find_or_create("editor", "web"),
            services.roles.find_or_create("editor", "web"),
        )

        assert isinstance(first, Success)
        assert isinstance(second, Success)
        assert first.value == second.value
        assert len(registry.roles) == 1
        logged = [c.args[0] for c in mock_logger.info.call_args_list]
        assert "find_or_create_race_lost" in logged

    async def test_validation_failure_propagates(self, services):
        """Test invalid names are not swallowed."""
        result = await services.roles.find_or_create(" ")

        assert isinstance(result.error, ValidationError)


@pytest.mark.unit
class TestRoleRenameAndDelete:
    """Test rename() and delete()."""

    async def test_rename(self, services, published):
        """Test rename updates name and timestamp and publishes RoleUpdated."""
        role = (await services.roles.create("editor")).value

        result = await services.roles.rename(role.id, "author")

        assert isinstance(result, Success)
        assert result.value.name == "author"
        assert result.value.updated_at >= role.updated_at
        assert (await services.roles.find_by_name("author")).value.id == role.id
        event = published()[-1]
        assert isinstance(event, RoleUpdated)
        assert (event.old_name, event.new_name) == ("editor", "author")

    async def test_rename_to_taken_name_conflicts(self, services):
        """Test rename re-validates uniqueness."""
        await services.roles.create("author")
        role = (await services.roles.create("editor")).value

        result = await services.roles.rename(role.id, "author")

        assert isinstance(result.error, ConflictError)

    async def test_rename_to_same_name_is_noop(self, services, published):
        """Test renaming to the current name publishes nothing."""
        role = (await services.roles.create("editor")).value
        count = len(published())

        result = await services.roles.rename(role.id, "editor")

        assert result == Success(value=role)
        assert len(published()) == count

    async def test_rename_missing(self, services):
        """Test renaming an unknown role is NotFound."""
        result = await services.roles.rename(uuid4(), "author")

        assert isinstance(result.error, NotFoundError)

    async def test_delete_cascades_edges(self, services, registry, user, published):
        """Test deleting a role removes its permission and principal edges."""
        role = (await services.roles.create("editor")).value
        permission = (await services.permissions.create("posts.edit")).value
        await services.graph.attach(role.id, permission.id)
        await services.graph.assign_role(user, role.id)

        result = await services.roles.delete(role.id)

        assert result == Success(value=None)
        assert registry.role_permissions == set()
        assert registry.principal_roles == set()
        assert permission.id in registry.permissions
        assert await services.graph.roles_of(user) == frozenset()
        assert isinstance(published()[-1], RoleDeleted)

    async def test_delete_missing(self, services):
        """Test deleting an unknown role is NotFound."""
        result = await services.roles.delete(uuid4())

        assert isinstance(result.error, NotFoundError)


@pytest.mark.unit
class TestRoleTeamScoping:
    """Test team scoping of roles."""

    async def test_create_fills_team_from_context(self, make_services):
        """Test omitted team_id is taken from the current team."""
        services = make_services(teams_enabled=True)
        teams = services.teams
        team_id = uuid4()

        with teams.scoped(team_id):
            role = (await services.roles.create("editor")).value

        assert role.team_id == team_id

    async def test_explicit_none_creates_global_role(self, make_services):
        """Test team_id=None is honored even inside a team context."""
        services = make_services(teams_enabled=True)
        teams = services.teams

        with teams.scoped(uuid4()):
            role = (await services.roles.create("editor", team_id=None)).value

        assert role.team_id is None

    async def test_team_id_ignored_when_teams_disabled(self, services):
        """Test roles are always global without teams."""
        role = (await services.roles.create("editor", team_id=uuid4())).value

        assert role.team_id is None

    async def test_null_or_match_visibility(self, make_services):
        """Test global roles are visible to all teams, team roles only to theirs."""
        services = make_services(teams_enabled=True)
        teams = services.teams
        team_a, team_b = uuid4(), uuid4()

        await services.roles.create("viewer", team_id=None)
        await services.roles.create("editor", team_id=team_a)

        with teams.scoped(team_a):
            names_a = {r.name for r in (await services.roles.all()).value}
        with teams.scoped(team_b):
            names_b = {r.name for r in (await services.roles.all()).value}
            missing = await services.roles.find_by_name("editor")

        assert names_a == {"viewer", "editor"}
        assert names_b == {"viewer"}
        assert isinstance(missing.error, NotFoundError)

    async def test_same_name_in_two_teams(self, make_services):
        """Test the uniqueness key includes the team."""
        services = make_services(teams_enabled=True)

        a = await services.roles.create("editor", team_id=uuid4())
        b = await services.roles.create("editor", team_id=uuid4())

        assert isinstance(a, Success)
        assert isinstance(b, Success)

    async def test_team_role_conflicts_with_visible_global_role(self, make_services):
        """Test the creation probe uses NULL-or-match."""
        services = make_services(teams_enabled=True)
        await services.roles.create("editor", team_id=None)

        result = await services.roles.create("editor", team_id=uuid4())

        assert isinstance(result.error, ConflictError)

    async def test_roles_of_filters_edges_by_team(self, make_services):
        """Test assignments made in one team are invisible in another."""
        services = make_services(teams_enabled=True)
        teams = services.teams
        user = PrincipalRef(principal_type="User", principal_id="42")
        team_a, team_b = uuid4(), uuid4()
        viewer = (await services.roles.create("viewer", team_id=None)).value

        with teams.scoped(team_a):
            await services.graph.assign_role(user, viewer.id)
            in_a = await services.graph.roles_of(user)
        with teams.scoped(team_b):
            in_b = await services.graph.roles_of(user)

        assert in_a == frozenset({viewer})
        assert in_b == frozenset()
