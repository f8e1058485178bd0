import logging
from typing import Optional

import redis
from pydantic import ValidationError

from config.settings import AssessmentSettings, assessment_settings
from services.readiness_engine.models import AssessmentScores
from services.readiness_engine.storage import InMemoryResultStore, ResultStore, StorageError

logger = logging.getLogger(__name__)

NAMESPACE = "readiness:"

class RedisResultStore:
    """
    Stores the persisted assessment shape as JSON under a single Redis key.
    """
    def __init__(self, client: redis.Redis, session_key: str, expire_seconds: Optional[int] = None):
        self.client = client
        self.key = f"{NAMESPACE}{session_key}"
        self.expire_seconds = expire_seconds

    @classmethod
    def from_url(cls, url: str, session_key: str, expire_seconds: Optional[int] = None) -> "RedisResultStore":
        logger.info(f"Creating Redis result store at {url}")
        client = redis.Redis.from_url(url, decode_responses=True, socket_connect_timeout=1, socket_timeout=2)
        return cls(client, session_key, expire_seconds)

    def load(self) -> Optional[AssessmentScores]:
        try:
            payload = self.client.get(self.key)
        except redis.exceptions.RedisError as e:
            logger.error(f"Error reading assessment key '{self.key}': {e}")
            raise StorageError(f"Could not read stored assessment: {e}") from e

        if payload is None:
            logger.debug(f"Cache miss: key='{self.key}'")
            return None
        try:
            return AssessmentScores.model_validate_json(payload)
        except ValidationError as e:
            # A corrupt entry cannot be scored; treat the session as incomplete.
            logger.warning(f"Discarding unreadable assessment under '{self.key}': {e}")
            return None

    def save(self, scores: AssessmentScores) -> None:
        try:
            self.client.set(self.key, scores.model_dump_json(by_alias=True), ex=self.expire_seconds)
        except redis.exceptions.RedisError as e:
            logger.error(f"Error writing assessment key '{self.key}': {e}")
            raise StorageError(f"Could not store assessment: {e}") from e
        logger.info(f"Stored assessment scores under '{self.key}', expiry={self.expire_seconds}s")

    def close(self) -> None:
        self.client.close()

def build_result_store(settings: AssessmentSettings = assessment_settings) -> ResultStore:
    """Redis when a URL is configured, otherwise a process-local store."""
    if settings.redis_url:
        return RedisResultStore.from_url(
            settings.redis_url,
            session_key=settings.session_key,
            expire_seconds=settings.result_ttl_seconds,
        )
    logger.debug("No Redis URL configured; using in-memory result store.")
    return InMemoryResultStore()

# Process-wide store, created on first use and discarded by close_result_store()
_result_store: Optional[ResultStore] = None

def shared_result_store(settings: AssessmentSettings = assessment_settings) -> ResultStore:
    """Returns the process-wide store so one Redis connection pool serves every request."""
    global _result_store
    if _result_store is None:
        _result_store = build_result_store(settings)
    return _result_store

def close_result_store() -> None:
    """Close and discard the cached store."""
    global _result_store
    store, _result_store = _result_store, None
    if isinstance(store, RedisResultStore):
        logger.info("Closing Redis connection pool...")
        try:
            store.close()
            logger.info("Redis connection pool closed.")
        except redis.exceptions.RedisError as e:
            logger.warning(f"Error closing Redis connection: {e}")
