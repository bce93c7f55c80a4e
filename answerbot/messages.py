"""
Routing of inbound messages: commands first, then direct messages, mentions
and authorized channels.

Unlike the ask command, the direct-message path always falls back to the
generative model on a knowledge miss, whatever the use_ai setting says.
"""
from pymongo.errors import PyMongoError

from answerbot.commands import execute_command, reject_long_query, reply_with_ai
from answerbot.constants import DIRECT_MESSAGE_ERROR_MESSAGE
from answerbot.context import MessageContext
from answerbot.formatter import render_entry
from answerbot.knowledge import find_relevant_knowledge
from answerbot.logger import logger
from answerbot.models import BotConfig
from answerbot.recorder import record_conversation
from answerbot.utils import get_mongodb_error_message, strip_bot_mention

DEFAULT_COMMAND_PREFIX = BotConfig().command_prefix


def handle_direct_message(ctx: MessageContext, query: str) -> None:
    """
    Answer a free-text query from a DM, a mention or an authorized channel.

    No argument guard: empty and whole-sentence queries are both accepted.
    Errors are logged and answered with an apology, never raised.
    """
    query = (query or "").strip()
    try:
        knowledge = find_relevant_knowledge(query, ctx.storage.get_knowledge_base_entries())
        if knowledge:
            ctx.reply(render_entry(knowledge, ctx.config))
            record_conversation(ctx, query, knowledge.answer)
            return

        reply_with_ai(ctx, query)
    except Exception:
        logger.exception("Error handling direct message from user_id=%s", ctx.message.sender_id)
        try:
            ctx.reply(DIRECT_MESSAGE_ERROR_MESSAGE)
        except Exception:
            logger.exception("Error sending error reply")


def _route_free_text(ctx: MessageContext, text: str) -> bool:
    message = ctx.message
    config = ctx.config

    if message.is_direct:
        if not config.respond_to_direct_messages:
            return False
        query = text
    elif message.mentions_bot and config.respond_to_mentions:
        query = strip_bot_mention(text, ctx.services.bot_user_id)
    elif message.channel_id and message.channel_id in ctx.storage.get_authorized_channels():
        query = text
    else:
        return False

    if not reject_long_query(ctx, query):
        handle_direct_message(ctx, query)
    return True


def process_message(ctx: MessageContext) -> bool:
    """
    Route one inbound message to the command router or the direct-message path.

    Messages that are not addressed to the bot get no reply, whatever their
    length. A storage failure during routing is answered only when the message
    was addressed to the bot (a DM, a mention or a prefixed command).

    Returns:
        True if the message was handled (a reply path ran)
    """
    message = ctx.message
    text = (message.text or "").strip()
    prefix = DEFAULT_COMMAND_PREFIX

    try:
        prefix = ctx.config.command_prefix
        if execute_command(ctx):
            return True
        return _route_free_text(ctx, text)
    except PyMongoError as e:
        if not (message.is_direct or message.mentions_bot or (prefix and text.startswith(prefix))):
            logger.exception("Storage error routing message in channel=%s", message.channel_id)
            return False
        ctx.reply(get_mongodb_error_message(e, "message routing"))
        return True
