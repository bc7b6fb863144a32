"""
Jarvis - Database Connection Bundle

Pairs an asyncpg connection pool with a redis.asyncio client. Both are
verified with a round trip before the bundle is handed out; if anything
fails, handles acquired so far are closed before the error is raised.

Examples:
    >>> async with await Database.connect(settings) as db:
    ...     await db.postgres.fetchval("SELECT 1")
    ...     await db.redis.ping()
"""

from types import TracebackType
from urllib.parse import quote

import asyncpg
import redis.asyncio as aioredis

from jarvis.core.config import Settings
from jarvis.core.exceptions import DatabaseConnectionError
from jarvis.core.logging import get_logger

logger = get_logger(__name__)


def build_postgres_dsn(settings: Settings) -> str:
    """DATABASE_URL when set, otherwise a DSN assembled from the DB_* fields."""
    if settings.database_url:
        return settings.database_url
    return (
        f"postgresql://{quote(settings.db_user, safe='')}:{quote(settings.db_password, safe='')}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
        f"?sslmode={settings.db_ssl_mode}"
    )


def build_redis_client(settings: Settings) -> aioredis.Redis:
    """Create (but do not connect) the Redis client.

    Raises:
        ValueError: If REDIS_URL is malformed or REDIS_PORT is not a number
    """
    if settings.redis_url:
        return aioredis.from_url(settings.redis_url)
    return aioredis.Redis(
        host=settings.redis_host,
        port=int(settings.redis_port),
        password=settings.redis_password or None,
        db=settings.redis_db,
    )


async def _close_pool(pool: asyncpg.Pool) -> None:
    try:
        await pool.close()
    except Exception as exc:  # noqa: BLE001
        logger.warning("postgres_close_failed", error=str(exc))


async def _close_redis(client: aioredis.Redis) -> None:
    try:
        await client.aclose()
    except Exception as exc:  # noqa: BLE001
        logger.warning("redis_close_failed", error=str(exc))


class Database:
    """PostgreSQL pool and Redis client, opened and closed together."""

    def __init__(self, postgres: asyncpg.Pool, redis: aioredis.Redis) -> None:
        self.postgres = postgres
        self.redis = redis

    @classmethod
    async def connect(
        cls,
        settings: Settings,
        min_size: int = 1,
        max_size: int = 10,
    ) -> "Database":
        """Open and verify both connections.

        Args:
            settings: Application settings
            min_size: Minimum pooled PostgreSQL connections
            max_size: Maximum pooled PostgreSQL connections

        Returns:
            Connected Database bundle

        Raises:
            DatabaseConnectionError: If either store cannot be configured or reached
        """
        try:
            pool = await asyncpg.create_pool(
                build_postgres_dsn(settings),
                min_size=min_size,
                max_size=max_size,
            )
        except Exception as exc:
            raise DatabaseConnectionError(f"failed to connect to PostgreSQL: {exc}") from exc

        try:
            await pool.fetchval("SELECT 1")
        except Exception as exc:
            await _close_pool(pool)
            raise DatabaseConnectionError(f"failed to ping PostgreSQL: {exc}") from exc

        try:
            client = build_redis_client(settings)
        except ValueError as exc:
            await _close_pool(pool)
            if settings.redis_url:
                raise DatabaseConnectionError(f"failed to parse Redis URL: {exc}") from exc
            raise DatabaseConnectionError(
                f"invalid Redis address {settings.redis_host}:{settings.redis_port}: {exc}"
            ) from exc

        try:
            await client.ping()
        except Exception as exc:
            await _close_redis(client)
            await _close_pool(pool)
            raise DatabaseConnectionError(f"failed to connect to Redis: {exc}") from exc

        logger.info("database_connected", pool_min=min_size, pool_max=max_size)
        return cls(postgres=pool, redis=client)

    async def close(self) -> None:
        """Close both handles.

        Both are always attempted; the first failure is raised afterwards.
        """
        failures: list[tuple[str, Exception]] = []

        try:
            await self.postgres.close()
        except Exception as exc:  # noqa: BLE001 - re-raised below
            failures.append(("PostgreSQL", exc))

        try:
            await self.redis.aclose()
        except Exception as exc:  # noqa: BLE001 - re-raised below
            failures.append(("Redis", exc))

        if failures:
            name, exc = failures[0]
            raise DatabaseConnectionError(f"{name} close error: {exc}") from exc

    async def __aenter__(self) -> "Database":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
