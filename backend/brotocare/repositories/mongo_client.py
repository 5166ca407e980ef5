"""MongoDB Client - Connection and Collection Management"""
import functools
import inspect
from typing import Any, Callable, Dict, Optional, TypeVar
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import MongoClient as PyMongoClient
from pymongo.client_session import ClientSession
from pymongo.database import Database
from pymongo.collection import Collection
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from ..config.settings import settings
from ..domain.errors import UpstreamUnavailableError
from ..utils.logger import get_logger

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# Sync client for the complaint, timeline, comment and role repositories
_client: Optional[PyMongoClient] = None
_database: Optional[Database] = None

# Motor client for the concurrent profile lookups
_async_client: Optional[AsyncIOMotorClient] = None
_async_database: Optional[AsyncIOMotorDatabase] = None

# Shared by both clients; tz_aware keeps stored datetimes in UTC on read
CLIENT_OPTIONS: Dict[str, Any] = {
    "tz_aware": True,
    "serverSelectionTimeoutMS": 5000,
    "connectTimeoutMS": 5000,
    "socketTimeoutMS": 30000,
}


def get_client() -> PyMongoClient:
    """Get or create MongoDB client"""
    global _client
    if _client is None:
        logger.info(f"Connecting to MongoDB: {settings.mongo_uri}")
        _client = PyMongoClient(settings.mongo_uri, **CLIENT_OPTIONS)
    return _client


def get_database() -> Database:
    """Get the application database"""
    global _database
    if _database is None:
        client = get_client()
        _database = client[settings.mongo_db]
        logger.info(f"Using database: {settings.mongo_db}")
    return _database


def get_collection(name: str) -> Collection:
    """Get a collection from the database"""
    db = get_database()
    return db[name]


def start_session() -> ClientSession:
    """Start a client session for multi-document transactions"""
    return get_client().start_session()


def close_connection() -> None:
    """Close MongoDB connection"""
    global _client, _database
    if _client is not None:
        _client.close()
        _client = None
        _database = None
        logger.info("MongoDB connection closed")


def get_async_database() -> AsyncIOMotorDatabase:
    """Get the application database through the Motor client"""
    global _async_client, _async_database
    if _async_database is None:
        _async_client = AsyncIOMotorClient(settings.mongo_uri, **CLIENT_OPTIONS)
        _async_database = _async_client[settings.mongo_db]
        logger.info(f"Using async database: {settings.mongo_db}")
    return _async_database


def close_async_connection() -> None:
    """Close the Motor client"""
    global _async_client, _async_database
    if _async_client is not None:
        _async_client.close()
        _async_client = None
        _async_database = None
        logger.info("Async MongoDB connection closed")


def translate_store_errors(func: F) -> F:
    """
    Re-raise driver failures (timeouts, lost connections, write errors) as
    UpstreamUnavailableError so callers see one retryable error type.
    """
    if inspect.iscoroutinefunction(func):
        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except PyMongoError as e:
                logger.error(f"Store call {func.__qualname__} failed: {e}")
                raise UpstreamUnavailableError(
                    "Backing store unavailable",
                    details={"operation": func.__qualname__}
                ) from e
        return async_wrapper  # type: ignore[return-value]
    
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except PyMongoError as e:
            logger.error(f"Store call {func.__qualname__} failed: {e}")
            raise UpstreamUnavailableError(
                "Backing store unavailable",
                details={"operation": func.__qualname__}
            ) from e
    return wrapper  # type: ignore[return-value]


def create_indexes() -> None:
    """Create all required indexes"""
    db = get_database()
    logger.info("Creating MongoDB indexes...")
    
    # Complaints collection
    complaints = db["complaints"]
    complaints.create_index("complaint_id", unique=True)
    complaints.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])
    complaints.create_index("created_at", background=True)
    
    # Timeline collection (append-only)
    timeline = db["complaint_timeline"]
    timeline.create_index("entry_id", unique=True)
    timeline.create_index([("complaint_id", ASCENDING), ("created_at", ASCENDING)])
    
    # Comments collection (append-only)
    comments = db["complaint_comments"]
    comments.create_index("comment_id", unique=True)
    comments.create_index([("complaint_id", ASCENDING), ("created_at", ASCENDING)])
    
    # Tables owned by the identity provider; lookups are by user_id
    db["profiles"].create_index("user_id", unique=True)
    db["role_assignments"].create_index("user_id")
    
    logger.info("MongoDB indexes created successfully")


def health_check() -> Dict[str, Any]:
    """Check MongoDB health"""
    try:
        client = get_client()
        client.admin.command("ping")
        return {
            "status": "healthy",
            "database": settings.mongo_db,
            "connection": "ok"
        }
    except PyMongoError as e:
        logger.error(f"MongoDB health check failed: {e}")
        return {
            "status": "unhealthy",
            "database": settings.mongo_db,
            "error": str(e)
        }


def supports_transactions() -> bool:
    """True when the server is a replica set member or mongos"""
    hello = get_client().admin.command("hello")
    return bool(hello.get("setName")) or hello.get("msg") == "isdbgrid"
