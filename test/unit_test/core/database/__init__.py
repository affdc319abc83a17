"""Unit tests for the database layer: entities, repositories and engine helpers.

Everything runs against in-memory SQLite through aiosqlite.
"""
