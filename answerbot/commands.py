"""
Prefixed commands: parsing, dispatch and the command handlers.

Handlers are plain functions registered in COMMAND_HANDLERS by name. A command
runs only when it is both registered here and enabled in storage; anything
else is declined exactly like a message that is not a command.
"""
from typing import Callable

from pymongo.errors import PyMongoError

from answerbot.ai import GenerationError, ModelUnavailableError, get_ai_response
from answerbot.constants import (
    AI_DISABLED_MESSAGE,
    AI_UNAVAILABLE_MESSAGE,
    AI_WARMING_UP_MESSAGE,
    COMMAND_ERROR_MESSAGE,
    MAX_QUERY_LENGTH,
)
from answerbot.context import MessageContext
from answerbot.formatter import render_ai, render_entry
from answerbot.knowledge import find_context_entries, find_relevant_knowledge, get_random_entry
from answerbot.logger import logger
from answerbot.recorder import record_conversation
from answerbot.utils import get_mongodb_error_message

CommandHandler = Callable[[MessageContext, list[str]], None]


def parse_command(text: str, prefix: str) -> tuple[str, list[str]] | None:
    """
    Split a prefixed message into a lower-cased command name and its arguments.

    Returns None when the text does not start with the prefix or names no command.
    """
    if not prefix or not text.startswith(prefix):
        return None
    parts = text[len(prefix):].split()
    if not parts:
        return None
    return parts[0].lower(), parts[1:]


def reject_long_query(ctx: MessageContext, text: str) -> bool:
    """Reply and return True when text is over MAX_QUERY_LENGTH characters."""
    if len(text) <= MAX_QUERY_LENGTH:
        return False
    ctx.reply(
        f"Your message is too long ({len(text)} characters). "
        f"Please shorten it to under {MAX_QUERY_LENGTH} characters."
    )
    return True


def reply_with_ai(ctx: MessageContext, query: str) -> bool:
    """
    Answer a query with the generative model, reply, and record the exchange.

    Failures and rate limiting are replied to directly and not recorded.

    Returns:
        True if a generated answer was sent
    """
    limiter = ctx.services.rate_limiter
    if limiter is not None:
        is_allowed, error_msg = limiter.is_allowed(ctx.message.sender_id)
        if not is_allowed:
            ctx.reply(error_msg)
            return False

    entries = ctx.storage.get_knowledge_base_entries()
    try:
        answer = get_ai_response(
            ctx.services.generator,
            query,
            ctx.config,
            context_entries=find_context_entries(entries, query),
        )
    except ModelUnavailableError:
        ctx.reply(AI_WARMING_UP_MESSAGE)
        return False
    except GenerationError as e:
        logger.error("Error getting AI response for user_id=%s: %s", ctx.message.sender_id, e)
        ctx.reply(AI_UNAVAILABLE_MESSAGE)
        return False

    ctx.reply(render_ai(answer, ctx.config))
    record_conversation(ctx, query, answer)
    return True


def help_command(ctx: MessageContext, args: list[str]) -> None:
    prefix = ctx.config.command_prefix
    enabled_commands = [cmd for cmd in ctx.storage.get_commands() if cmd.enabled]

    if args:
        requested = args[0].lower()
        for cmd in enabled_commands:
            if cmd.name.lower() == requested:
                ctx.reply(
                    f"*Help for: {prefix}{cmd.name}*\n\n"
                    f"*Description:* {cmd.description}\n"
                    f"*Usage:* `{prefix}{cmd.usage}`"
                )
                return

    lines = ["*Available commands:*", ""]
    for cmd in enabled_commands:
        lines.append(f"*{prefix}{cmd.name}* - {cmd.description}")
        lines.append(f"Usage: `{prefix}{cmd.usage}`")
        lines.append("")
    lines.append(f"For more detailed help, use `{prefix}help <command name>`")
    ctx.reply("\n".join(lines))


def ask_command(ctx: MessageContext, args: list[str]) -> None:
    prefix = ctx.config.command_prefix
    if not args:
        ctx.reply(f"Please ask a question. For example: `{prefix}ask Who founded the Ahmadiyya community?`")
        return

    question = " ".join(args)
    knowledge = find_relevant_knowledge(question, ctx.storage.get_knowledge_base_entries())

    if knowledge:
        ctx.reply(render_entry(knowledge, ctx.config))
        record_conversation(ctx, question, knowledge.answer)
        return

    if not ctx.config.use_ai:
        ctx.reply(AI_DISABLED_MESSAGE)
        return

    reply_with_ai(ctx, question)


def _category_command(ctx: MessageContext, args: list[str], command: str, category: str,
                      title: str, synthetic_query: str, example: str) -> None:
    prefix = ctx.config.command_prefix
    if not args:
        ctx.reply(f"Please specify a {category} topic. For example: `{prefix}{command} {example}`")
        return

    topic = " ".join(args)
    recorded_query = f"{prefix}{command} {topic}"

    entries = [
        entry for entry in ctx.storage.get_knowledge_base_entries_by_topic(topic)
        if entry.category.lower() == category
    ]
    if entries:
        entry = entries[0]
        ctx.reply(render_entry(entry, ctx.config, title=f"{title}: {entry.topic}"))
        record_conversation(ctx, recorded_query, entry.answer)
        return

    knowledge = find_relevant_knowledge(
        synthetic_query.format(topic=topic),
        ctx.storage.get_knowledge_base_entries(),
    )
    if knowledge:
        ctx.reply(render_entry(knowledge, ctx.config, title=f"Related Information: {knowledge.topic}"))
        record_conversation(ctx, recorded_query, knowledge.answer)
        return

    ctx.reply(f'I don\'t have specific information about {category} on "{topic}".')


def beliefs_command(ctx: MessageContext, args: list[str]) -> None:
    _category_command(ctx, args, "beliefs", "beliefs", "Belief", "beliefs about {topic}", "khilafat")


def history_command(ctx: MessageContext, args: list[str]) -> None:
    _category_command(ctx, args, "history", "history", "History", "history of {topic}", "founding")


def quote_command(ctx: MessageContext, args: list[str]) -> None:
    prefix = ctx.config.command_prefix
    category = " ".join(args) if args else None

    entry = get_random_entry(ctx.storage.get_knowledge_base_entries(), category)
    if entry is None:
        if category:
            ctx.reply(f'I don\'t have any quotes in the category "{category}".')
        else:
            ctx.reply("I don't have any quotes available at the moment.")
        return

    ctx.reply(render_entry(entry, ctx.config))
    record_conversation(ctx, f"{prefix}quote {category}" if category else f"{prefix}quote", entry.answer)


COMMAND_HANDLERS: dict[str, CommandHandler] = {
    "help": help_command,
    "ask": ask_command,
    "beliefs": beliefs_command,
    "history": history_command,
    "quote": quote_command,
}


def execute_command(ctx: MessageContext) -> bool:
    """
    Parse and run a prefixed command.

    Returns:
        False if the message was declined (not a command, unknown, disabled or
        without handler), True once a handler ran, even if it failed
    """
    parsed = parse_command(ctx.message.text, ctx.config.command_prefix)
    if parsed is None:
        return False
    command_name, args = parsed

    command_info = ctx.storage.get_command_by_name(command_name)
    if command_info is None or not command_info.enabled:
        logger.debug("Declining unknown or disabled command: %s", command_name)
        return False

    handler = COMMAND_HANDLERS.get(command_name)
    if handler is None:
        logger.warning("Command %s is enabled but has no handler", command_name)
        return False

    if reject_long_query(ctx, ctx.message.text.strip()):
        return True

    logger.info("Executing command %s for user_id=%s", command_name, ctx.message.sender_id)
    try:
        handler(ctx, args)
    except PyMongoError as e:
        ctx.reply(get_mongodb_error_message(e, f"command {command_name}"))
    except Exception:
        logger.exception("Error executing command %s", command_name)
        ctx.reply(COMMAND_ERROR_MESSAGE)
    return True
