import re


def strip_leading_mention(text: str) -> str:
    """
    Remove a leading Slack user mention like '<@U123ABC>' plus any following whitespace.
    """
    return re.sub(r"^<@[^>]+>\s*", "", text or "").strip()


def strip_bot_mention(text: str, bot_user_id: str | None) -> str:
    """
    Remove every mention of the bot from the text.

    Slack renders mentions as '<@U123ABC>' or '<@U123ABC|name>'. When the bot's
    user id is unknown only a leading mention is removed.

    Args:
        text: Raw message text
        bot_user_id: The bot's Slack user id, if known

    Returns:
        The text without bot mentions, stripped of surrounding whitespace
    """
    if not bot_user_id:
        return strip_leading_mention(text)
    pattern = rf"<@{re.escape(bot_user_id)}(\|[^>]*)?>"
    cleaned = re.sub(pattern, "", text or "")
    return re.sub(r"\s+", " ", cleaned).strip()


def mentions_user(text: str, user_id: str | None) -> bool:
    if not user_id:
        return False
    return re.search(rf"<@{re.escape(user_id)}(\|[^>]*)?>", text or "") is not None


def sanitize_slack_id(identifier: str | None, name: str = "identifier", allow_none: bool = False) -> str | None:
    """
    Validate a Slack user id before it becomes part of a rate-limit key.

    Rejects MongoDB operators and anything outside letters, digits, hyphens
    and underscores.

    Args:
        identifier: The user id to check
        name: Label used in error messages
        allow_none: If True, return None for None input instead of raising error

    Returns:
        Sanitized identifier (or None if allow_none=True and input is None)

    Raises:
        ValueError: If identifier is invalid or contains dangerous characters
    """
    if identifier is None:
        if allow_none:
            return None
        raise ValueError(f"{name} cannot be None")

    if not isinstance(identifier, str):
        raise ValueError(f"{name} must be a string, got {type(identifier).__name__}")

    identifier = identifier.strip()

    if not identifier:
        raise ValueError(f"{name} cannot be empty")

    if re.search(r"\$[a-z]+|^\$|\{|\}", identifier, re.IGNORECASE):
        raise ValueError(
            f"{name} contains invalid characters that could be used for injection: {identifier}"
        )

    if not re.match(r"^[A-Za-z0-9_-]+$", identifier):
        raise ValueError(
            f"{name} contains invalid characters. "
            f"Only alphanumeric characters, hyphens, and underscores are allowed: {identifier}"
        )

    MAX_ID_LENGTH = 256
    if len(identifier) > MAX_ID_LENGTH:
        raise ValueError(f"{name} is too long (max {MAX_ID_LENGTH} characters): {len(identifier)}")

    return identifier


def get_mongodb_error_message(error: Exception, operation_name: str = "operation") -> str:
    """
    Log a storage failure and return the reply to send to the user.

    Args:
        error: The exception raised by a command handler or a routing lookup
        operation_name: What was running, e.g. "command ask" or "message routing"

    Returns:
        User-friendly error message string
    """
    from pymongo.errors import (
        ConnectionFailure,
        ServerSelectionTimeoutError,
        OperationFailure,
        PyMongoError,
    )
    from answerbot.logger import logger

    logger.exception("MongoDB error in %s: %s", operation_name, str(error))

    if isinstance(error, (ConnectionFailure, ServerSelectionTimeoutError)):
        return (
            "I'm having trouble connecting to the database. "
            "Please try again in a moment."
        )
    elif isinstance(error, OperationFailure):
        return (
            "A database operation failed. "
            "Please try again or contact support if the issue persists."
        )
    elif isinstance(error, PyMongoError):
        return (
            "A database error occurred. "
            "Please try again in a moment."
        )
    else:
        return (
            "An unexpected error occurred while accessing the database. "
            "Please try again or contact support."
        )
