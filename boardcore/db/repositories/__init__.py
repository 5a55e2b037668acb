"""
Per-domain repository modules for database access.

Each module exposes plain functions taking the store (a SQLAlchemy
``Session``) as their first argument; none of them keeps state between calls.
"""
