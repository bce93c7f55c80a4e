"""
Per-message context passed to the router, the command handlers and the
direct-message path. Nothing here outlives a single inbound message.
"""
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Callable

from answerbot.models import BotConfig

Reply = Callable[[Any], None]


@dataclass
class InboundMessage:
    text: str
    sender_id: str
    sender_name: str
    channel_id: str | None = None
    is_direct: bool = False
    mentions_bot: bool = False


@dataclass
class BotServices:
    """Long-lived collaborators, shared by every message."""
    storage: Any
    generator: Any = None
    rate_limiter: Any = None
    bot_user_id: str | None = None


@dataclass
class MessageContext:
    message: InboundMessage
    services: BotServices
    reply: Reply

    @cached_property
    def config(self) -> BotConfig:
        # Read once per message so admin changes apply on the next one.
        return self.services.storage.get_bot_config()

    @property
    def storage(self):
        return self.services.storage
