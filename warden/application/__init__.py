"""Application layer - stores, resolvers and event handlers.

Structure:
- services/: RoleStore, PermissionStore, AssignmentGraph, PermissionResolver
  and the guard/team resolvers they share
- event_handlers/: Reactions to registry events (cache invalidation)

The application layer orchestrates repositories through domain protocols; it
never touches SQLAlchemy or Redis directly.
"""
