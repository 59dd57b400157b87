import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool
from src.config import REDIS_HOST, REDIS_PORT, REDIS_PASSWORD, REDIS_DB
from src.utils.logger import get_current_logger


class RedisConnection:
    """
    Redis connection manager with a lazily created async connection pool.

    Nothing touches the network until the first ``get_client()`` call.
    """

    def __init__(
        self,
        host: str = REDIS_HOST,
        port: int = REDIS_PORT,
        password: str | None = REDIS_PASSWORD,
        db: int = REDIS_DB,
    ):
        self.host = host
        self.port = port
        self.password = password or None
        self.db = db
        self.pool: ConnectionPool | None = None
        self.client: redis.Redis | None = None

    async def get_client(self) -> redis.Redis:
        """
        Get Redis async client instance.

        Returns:
            Redis async client object
        """
        logger = get_current_logger()
        if self.client is None:
            self.pool = self.pool or ConnectionPool(
                host=self.host,
                port=self.port,
                password=self.password,
                db=self.db,
                decode_responses=True,  # Auto decode bytes to str
                max_connections=20,
                socket_keepalive=True,
                socket_connect_timeout=2,
                retry_on_timeout=True
            )
            client = redis.Redis(connection_pool=self.pool)
            await client.ping()
            self.client = client
            logger.info(f"✅ Redis async client connected: {self.host}:{self.port}")
        return self.client

    async def health_check(self) -> bool:
        """
        Check Redis connection health.

        Returns:
            True if connection is healthy, False otherwise
        """
        logger = get_current_logger()
        try:
            client = await self.get_client()
            return await client.ping()
        except Exception as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    async def close(self):
        """Close Redis connection and cleanup resources."""
        logger = get_current_logger()
        if self.client:
            await self.client.aclose()
            self.client = None
        if self.pool:
            await self.pool.aclose()
            self.pool = None
        logger.info("✅ Redis connection closed")


redis_connection = RedisConnection()
