"""PostgreSQL and Redis connection bundle."""

from jarvis.db.database import Database, build_postgres_dsn, build_redis_client

__all__ = ["Database", "build_postgres_dsn", "build_redis_client"]
