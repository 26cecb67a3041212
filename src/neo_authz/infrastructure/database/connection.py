"""
Database connection management using asyncpg for the permission store.
"""
import asyncio
from contextlib import asynccontextmanager
from typing import Optional, List, Any

import asyncpg
from asyncpg import Pool, Record
from loguru import logger


class DatabaseManager:
    """Manages the asyncpg pool used by the permission store."""
    
    def __init__(self, database_url: str, application_name: str = "neo-authz", **pool_config):
        """Initialize DatabaseManager.
        
        Args:
            database_url: Database URL
            application_name: Reported to PostgreSQL for connection tracing
            **pool_config: Additional pool configuration options
        """
        self.pool: Optional[Pool] = None
        self.dsn = database_url.replace("+asyncpg", "") if database_url else ""
        self.application_name = application_name
        self._pool_lock = asyncio.Lock()
        
        # Pool configuration with sensible defaults
        self.pool_config = {
            "min_size": 5,
            "max_size": 20,
            "max_inactive_connection_lifetime": 300,
            "command_timeout": 60,
            **pool_config
        }
    
    @classmethod
    def from_settings(cls, settings) -> "DatabaseManager":
        """Build a manager from AuthorizationSettings."""
        if not settings.database_url:
            raise ValueError("database_url is not configured")
        return cls(
            settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            command_timeout=settings.db_command_timeout,
        )
    
    async def create_pool(self) -> Pool:
        """Create and return a connection pool."""
        async with self._pool_lock:
            if self.pool is None:
                logger.info(f"Creating database pool with size {self.pool_config['max_size']}")
                self.pool = await asyncpg.create_pool(
                    self.dsn,
                    server_settings={'application_name': self.application_name},
                    **self.pool_config
                )
                logger.info("Database pool created successfully")
        return self.pool
    
    async def close_pool(self):
        """Close the connection pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Database pool closed")
    
    @asynccontextmanager
    async def acquire(self):
        """Acquire a connection from the pool."""
        if not self.pool:
            await self.create_pool()
        
        async with self.pool.acquire() as connection:
            yield connection
    
    async def fetch(self, query: str, *args, timeout: float = None) -> List[Record]:
        """Fetch multiple rows."""
        async with self.acquire() as connection:
            return await connection.fetch(query, *args, timeout=timeout)
    
    async def fetchrow(self, query: str, *args, timeout: float = None) -> Optional[Record]:
        """Fetch a single row."""
        async with self.acquire() as connection:
            return await connection.fetchrow(query, *args, timeout=timeout)
    
    async def fetchval(self, query: str, *args, column: int = 0, timeout: float = None) -> Any:
        """Fetch a single value."""
        async with self.acquire() as connection:
            return await connection.fetchval(query, *args, column=column, timeout=timeout)
