"""Alembic environment and migration scripts for STAYBOOK."""
