"""Database-backed data sources and seed tooling."""

from shopquery.db.base import Base, get_database_url, get_engine

__all__ = ["Base", "get_database_url", "get_engine"]
