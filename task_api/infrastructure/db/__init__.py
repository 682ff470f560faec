"""
Database layer: engine, session factory and ORM models.
"""
