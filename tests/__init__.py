"""Test suite for warden.

- unit/: Stores, resolvers and adapters over in-memory repositories and mocks
- integration/: SQLAlchemy repositories against PostgreSQL (needs DATABASE_URL)
"""
