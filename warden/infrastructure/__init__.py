"""Infrastructure adapters (persistence, in-memory store, events, logging, cache)."""
