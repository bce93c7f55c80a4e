"""
Rendering of answers as Slack messages.

Two equivalent forms: a plain-text string, and a message payload with a
coloured attachment (used when the bot config enables embeds). The payload's
top-level ``text`` carries the plain-text form for notifications and clients
that do not render attachments.
"""
from answerbot.constants import AI_LABEL, CATEGORY_COLORS, DEFAULT_EMBED_COLOR
from answerbot.models import BotConfig, KnowledgeEntry


def format_response(answer: str, source: str | None = None, include_citation: bool = True) -> str:
    if source and include_citation:
        return f"{answer}\n\nSource: {source}"
    return answer


def format_ai_response(text: str) -> str:
    return f"{text}\n\n{AI_LABEL}"


def get_category_color(category: str | None) -> str:
    return CATEGORY_COLORS.get((category or "").lower(), DEFAULT_EMBED_COLOR)


def build_embed(
    title: str,
    body: str,
    category: str | None = None,
    source: str | None = None,
    include_citation: bool = True,
    footer: str | None = None,
) -> dict:
    """
    Build a Slack message payload with a single attachment.

    Args:
        title: Attachment title
        body: Main text
        category: Knowledge category, picks the attachment colour
        source: Citation, shown as a field when citations are enabled
        include_citation: Whether to show the source
        footer: Footer text, usually the bot name

    Returns:
        Keyword arguments for Slack's chat.postMessage / say()
    """
    attachment = {
        "color": get_category_color(category),
        "title": title,
        "text": body,
        "fields": [],
    }
    if source and include_citation:
        attachment["fields"].append({"title": "Source", "value": source, "short": False})
    if footer:
        attachment["footer"] = footer

    return {
        "text": format_response(body, source, include_citation),
        "attachments": [attachment],
    }


def render_entry(entry: KnowledgeEntry, config: BotConfig, title: str | None = None) -> str | dict:
    if config.use_embeds:
        return build_embed(
            title or entry.topic,
            entry.answer,
            category=entry.category,
            source=entry.source,
            include_citation=config.include_citations,
            footer=config.name,
        )
    return format_response(entry.answer, entry.source, config.include_citations)


def render_ai(text: str, config: BotConfig) -> str | dict:
    if config.use_embeds:
        payload = build_embed("AI Response", text, category="ai", footer="AI-Generated Response")
        payload["text"] = format_ai_response(text)
        return payload
    return format_ai_response(text)
