# shopzone/services/lock_service.py
import uuid
from contextlib import contextmanager
from typing import Iterator

import redis
from redis.exceptions import RedisError

from shopzone.domain.errors import CheckoutInProgress
from shopzone.utils import settings
from shopzone.utils.logging import get_logger
from shopzone.utils.retry import redis_retry

logger = get_logger(__name__)

# compare-and-delete: only the owner that set the key may remove it.
# Redis runs the script atomically, nothing can slip in between GET and DEL.
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


class LockService:
    """
    Short-lived per-user checkout lock in Redis.

    - acquire: SET key owner NX EX ttl
    - release: Lua compare-and-delete
    - a crashed holder is covered by the TTL, no manual cleanup needed
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or settings.REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def checkout_key(user_id: str) -> str:
        return f"checkout:{user_id}:lock"

    @redis_retry()
    def acquire_checkout_lock(self, user_id: str, owner: str, ttl: int) -> bool:
        key = self.checkout_key(user_id)
        logger.debug(f"Acquire lock {key}")
        return bool(self.redis.set(name=key, value=owner, nx=True, ex=ttl))

    @redis_retry()
    def release_checkout_lock(self, user_id: str, owner: str) -> bool:
        key = self.checkout_key(user_id)
        logger.debug(f"Release lock {key}")
        return bool(self.redis.eval(_RELEASE_LUA, 1, key, owner))

    @contextmanager
    def checkout_lock(self, user_id: str, ttl: int | None = None) -> Iterator[str]:
        owner = uuid.uuid4().hex
        if not self.acquire_checkout_lock(user_id, owner, ttl or settings.CHECKOUT_LOCK_TTL_SECONDS):
            logger.warning(f"Checkout already running for user {user_id}")
            raise CheckoutInProgress()
        try:
            yield owner
        finally:
            try:
                self.release_checkout_lock(user_id, owner)
            except RedisError as e:
                # the key still expires on its own after ttl
                logger.warning(f"Failed to release checkout lock for user {user_id}: {e}")
