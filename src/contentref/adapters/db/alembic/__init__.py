"""Alembic migration scripts for contentref (forward-only)."""
