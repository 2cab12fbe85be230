"""Shared infrastructure helpers (database pool, requester identity)."""
