"""Redis-backed storage for issued tokens and session data."""

import json
from datetime import timedelta
from typing import Any, Optional

from redis import Redis
from redis.exceptions import RedisError

from gym_backend.config import settings
from gym_backend.utils.logger import logger

TOKEN_PREFIX = "token:"


class RedisTokenStore:
    """
    Keeps the most recently issued tokens per username.

    Keys:
        token:access:<username>   access token, TOKEN_TTL_HOURS
        token:refresh:<username>  refresh token, 7 * TOKEN_TTL_HOURS
        token:session:<username>  JSON session data, TOKEN_TTL_HOURS

    Redis is optional: when a command fails the error is logged, writes are
    skipped and token validation falls back to the JWT signature alone.
    """

    def __init__(self, client: Redis, ttl_hours: int = 24):
        self.client = client
        self.ttl = timedelta(hours=ttl_hours)
        self.refresh_ttl = timedelta(hours=7 * ttl_hours)

    @classmethod
    def from_url(cls, url: str, ttl_hours: int = 24) -> "RedisTokenStore":
        return cls(Redis.from_url(url, decode_responses=True), ttl_hours=ttl_hours)

    @staticmethod
    def _key(kind: str, username: str) -> str:
        return f"{TOKEN_PREFIX}{kind}:{username}"

    def _set(self, key: str, value: str, ttl: timedelta) -> bool:
        try:
            self.client.set(key, value, ex=ttl)
            return True
        except RedisError as e:
            logger.warning(f"Token store unavailable, not storing {key}: {e}")
            return False

    def _delete(self, *keys: str) -> None:
        try:
            self.client.delete(*keys)
        except RedisError as e:
            logger.warning(f"Token store unavailable, could not delete {', '.join(keys)}: {e}")

    def store_access_token(self, username: str, access_token: str) -> None:
        if self._set(self._key("access", username), access_token, self.ttl):
            logger.info(f"Stored access token for user: {username}")

    def store_refresh_token(self, username: str, refresh_token: str) -> None:
        if self._set(self._key("refresh", username), refresh_token, self.refresh_ttl):
            logger.info(f"Stored refresh token for user: {username}")

    def get_access_token(self, username: str) -> Optional[str]:
        try:
            return self.client.get(self._key("access", username))
        except RedisError as e:
            logger.warning(f"Token store unavailable: {e}")
            return None

    def get_refresh_token(self, username: str) -> Optional[str]:
        try:
            return self.client.get(self._key("refresh", username))
        except RedisError as e:
            logger.warning(f"Token store unavailable: {e}")
            return None

    def _validate(self, kind: str, username: str, token: str) -> bool:
        try:
            return self.client.get(self._key(kind, username)) == token
        except RedisError as e:
            logger.warning(
                f"Token store unavailable, accepting signed {kind} token for {username}: {e}"
            )
            return True

    def validate_access_token(self, username: str, access_token: str) -> bool:
        return self._validate("access", username, access_token)

    def validate_refresh_token(self, username: str, refresh_token: str) -> bool:
        return self._validate("refresh", username, refresh_token)

    def delete_tokens(self, username: str) -> None:
        """Delete all tokens for a user (logout)."""
        self._delete(self._key("access", username), self._key("refresh", username))
        logger.info(f"Deleted all tokens for user: {username}")

    def store_user_session(self, username: str, session_data: dict[str, Any]) -> None:
        if self._set(
            self._key("session", username), json.dumps(session_data, default=str), self.ttl
        ):
            logger.info(f"Stored session data for user: {username}")

    def get_user_session(self, username: str) -> Optional[dict[str, Any]]:
        try:
            raw = self.client.get(self._key("session", username))
        except RedisError as e:
            logger.warning(f"Token store unavailable: {e}")
            return None
        return json.loads(raw) if raw else None

    def delete_user_session(self, username: str) -> None:
        self._delete(self._key("session", username))


def create_token_store() -> Optional[RedisTokenStore]:
    """Build the token store from settings, or None when Redis is not configured."""
    if not settings.redis_url:
        logger.info("REDIS_URL not set, token storage disabled")
        return None
    store = RedisTokenStore.from_url(settings.redis_url, ttl_hours=settings.token_ttl_hours)
    try:
        store.client.ping()
    except RedisError as e:
        logger.warning(
            f"Redis token store unreachable at startup, "
            f"tokens are checked by signature until it returns: {e}"
        )
    return store
