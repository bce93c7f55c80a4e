from datetime import datetime, timezone

from answerbot.constants import DIRECT_MESSAGE_CHANNEL
from answerbot.context import MessageContext
from answerbot.logger import logger
from answerbot.models import Conversation


def record_conversation(ctx: MessageContext, query: str, response: str) -> Conversation:
    """
    Append a resolved exchange to the conversation log.
    """
    message = ctx.message
    conversation = Conversation(
        user_id=message.sender_id,
        username=message.sender_name,
        channel=message.channel_id or DIRECT_MESSAGE_CHANNEL,
        query=query,
        response=response,
        timestamp=datetime.now(timezone.utc),
    )
    ctx.storage.add_conversation(conversation)
    logger.debug("Recorded conversation for user_id=%s channel=%s", conversation.user_id, conversation.channel)
    return conversation
