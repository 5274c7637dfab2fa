"""Unit tests: domain rules, handlers on the in-memory store, CLI helpers.

The only database used here is SQLite (in memory or in ``tmp_path``), for the
engine and column-type checks.
"""
