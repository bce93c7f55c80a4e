"""
Rate limiting of generative calls using MongoDB for persistence.
Uses a sliding window per user.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from pymongo.errors import PyMongoError

from answerbot.constants import RATE_LIMIT_AI_MAX, RATE_LIMIT_AI_WINDOW_SECONDS
from answerbot.logger import logger
from answerbot.utils import sanitize_slack_id


def _utcnow() -> datetime:
    # MongoDB hands back naive UTC datetimes
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _to_naive_utc(value) -> datetime | None:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, str):
        try:
            return _to_naive_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            return None
    return None


class RateLimiter:
    """
    Sliding-window rate limiter backed by a MongoDB collection.
    Tracks requests per user with a fixed limit per window.
    """

    def __init__(
        self,
        collection,
        max_requests: int,
        window_seconds: int,
        operation_name: str = "default",
    ):
        """
        Args:
            collection: MongoDB collection holding one document per key
            max_requests: Maximum number of requests allowed in the window
            window_seconds: Time window in seconds
            operation_name: Name of the operation being rate limited
        """
        self.collection = collection
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.operation_name = operation_name

    def _get_rate_limit_key(self, user_id: str) -> str:
        return f"{self.operation_name}:{user_id}"

    def _valid_requests(self, doc: dict | None, window_start: datetime) -> list[datetime]:
        if not doc:
            return []
        valid = []
        for req in doc.get("requests", []):
            req_dt = _to_naive_utc(req)
            if req_dt is not None and req_dt >= window_start:
                valid.append(req_dt)
        return valid

    def _wait_message(self, valid_requests: list[datetime], now: datetime) -> str:
        reset_time = min(valid_requests) + timedelta(seconds=self.window_seconds)
        time_until_reset = max(0.0, (reset_time - now).total_seconds())
        hours = int(time_until_reset // 3600)
        minutes = int((time_until_reset % 3600) // 60)

        if hours > 0:
            wait_msg = f"{hours} hour{'s' if hours != 1 else ''}"
            if minutes > 0:
                wait_msg += f" and {minutes} minute{'s' if minutes != 1 else ''}"
        else:
            wait_msg = f"{minutes} minute{'s' if minutes != 1 else ''}"

        return (
            f"You've reached the limit of {self.max_requests} AI requests. "
            f"Please try again in {wait_msg}."
        )

    def is_allowed(self, user_id: str, now: datetime | None = None) -> tuple[bool, Optional[str]]:
        """
        Check if a request is allowed and, if so, count it.

        Args:
            user_id: Slack user ID
            now: Current time (naive UTC); defaults to the clock

        Returns:
            Tuple of (is_allowed, error_message)
        """
        try:
            user_id = sanitize_slack_id(user_id, "user_id")
            key = self._get_rate_limit_key(user_id)
            now = now or _utcnow()
            window_start = now - timedelta(seconds=self.window_seconds)

            doc = self.collection.find_one({"rate_limit_key": key})
            if not doc:
                self.collection.insert_one({
                    "rate_limit_key": key,
                    "user_id": user_id,
                    "requests": [now],
                    "created_at": now,
                    "updated_at": now,
                })
                return True, None

            valid_requests = self._valid_requests(doc, window_start)
            if len(valid_requests) >= self.max_requests:
                logger.info("AI rate limit reached for user_id=%s", user_id)
                return False, self._wait_message(valid_requests, now)

            valid_requests.append(now)
            self.collection.update_one(
                {"rate_limit_key": key},
                {"$set": {"requests": valid_requests, "updated_at": now}},
            )
            return True, None

        except PyMongoError as e:
            logger.exception("MongoDB error in rate limiter for user_id=%s: %s", user_id, e)
            # On database error, allow the request (fail open)
            return True, None
        except ValueError as e:
            logger.warning("Invalid user id for rate limiting: %s", e)
            return True, None

    def get_remaining_requests(self, user_id: str, now: datetime | None = None) -> int:
        try:
            user_id = sanitize_slack_id(user_id, "user_id")
            now = now or _utcnow()
            window_start = now - timedelta(seconds=self.window_seconds)
            doc = self.collection.find_one({"rate_limit_key": self._get_rate_limit_key(user_id)})
            return max(0, self.max_requests - len(self._valid_requests(doc, window_start)))
        except (PyMongoError, ValueError) as e:
            logger.exception("Error getting remaining requests for user_id=%s: %s", user_id, e)
            return self.max_requests  # Fail open


def create_ai_rate_limiter(collection) -> RateLimiter:
    return RateLimiter(
        collection,
        max_requests=RATE_LIMIT_AI_MAX,
        window_seconds=RATE_LIMIT_AI_WINDOW_SECONDS,
        operation_name="ai_response",
    )
