"""Persistence layer - SQLAlchemy models, repositories and read queries."""
