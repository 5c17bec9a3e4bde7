"""SQL translation of the TeamScope predicate."""

from typing import Any

from sqlalchemy import ColumnElement, or_, true

from warden.domain.value_objects import TeamScope


def team_predicate(column: Any, scope: TeamScope) -> ColumnElement[bool]:
    """Build `column IS NULL OR column = :team_id`, or TRUE when disabled.

    Args:
        column: Team id column (RoleModel.team_id, PrincipalRoleModel.team_id).
        scope: Team scope to translate.

    Returns:
        SQL boolean expression usable in a WHERE clause.
    """
    if not scope.enabled:
        return true()
    if scope.team_id is None:
        return column.is_(None)
    return or_(column.is_(None), column == scope.team_id)


def edge_team_predicate(column: Any, scope: TeamScope) -> ColumnElement[bool]:
    """Build `column = :team_id` (or IS NULL), or TRUE when disabled.

    Principal-role edges belong to exactly one team context.
    """
    if not scope.enabled:
        return true()
    if scope.team_id is None:
        return column.is_(None)
    return column == scope.team_id
