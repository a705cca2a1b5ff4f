"""Database schema for RenoBoard Core.

schema.sql is the source of truth for the data model and is applied by
renoboard_core.db.init_db() on a fresh database.
"""
