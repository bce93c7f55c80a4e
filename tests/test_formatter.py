# FILE: tests/test_formatter.py
"""
Tests for plain-text and attachment rendering.
"""
from answerbot.constants import AI_LABEL, CATEGORY_COLORS, DEFAULT_EMBED_COLOR
from answerbot.formatter import build_embed, format_response, render_ai, render_entry
from answerbot.models import BotConfig

from tests.conftest import FOUNDER, JIHAD, KHILAFAT


class TestFormatResponse:

    def test_appends_source_when_enabled(self):
        assert format_response("Answer.", "Book", True) == "Answer.\n\nSource: Book"

    def test_no_source_when_disabled(self):
        assert format_response("Answer.", "Book", False) == "Answer."

    def test_no_source_when_missing(self):
        assert format_response("Answer.", None, True) == "Answer."
        assert format_response("Answer.", "", True) == "Answer."


class TestBuildEmbed:

    def test_colour_by_category(self):
        assert build_embed("t", "b", category="Beliefs")["attachments"][0]["color"] == CATEGORY_COLORS["beliefs"]
        assert build_embed("t", "b", category="History")["attachments"][0]["color"] == CATEGORY_COLORS["history"]
        assert build_embed("t", "b", category="Misc")["attachments"][0]["color"] == DEFAULT_EMBED_COLOR

    def test_source_field_follows_citation_setting(self):
        with_source = build_embed("t", "b", source="Book", include_citation=True)
        without = build_embed("t", "b", source="Book", include_citation=False)
        assert with_source["attachments"][0]["fields"] == [{"title": "Source", "value": "Book", "short": False}]
        assert without["attachments"][0]["fields"] == []

    def test_fallback_text_matches_plain_rendering(self):
        payload = build_embed("Founder", FOUNDER.answer, source=FOUNDER.source)
        assert payload["text"] == format_response(FOUNDER.answer, FOUNDER.source, True)


class TestRender:

    def test_plain_text_when_embeds_disabled(self):
        config = BotConfig(use_embeds=False, include_citations=True)
        assert render_entry(KHILAFAT, config) == f"{KHILAFAT.answer}\n\nSource: {KHILAFAT.source}"

    def test_embed_when_enabled(self):
        config = BotConfig(use_embeds=True, name="Helper")
        payload = render_entry(JIHAD, config, title="Belief: Jihad")
        attachment = payload["attachments"][0]
        assert attachment["title"] == "Belief: Jihad"
        assert attachment["text"] == JIHAD.answer
        assert attachment["footer"] == "Helper"
        assert attachment["fields"] == []

    def test_ai_label_in_both_forms(self):
        assert render_ai("Hello.", BotConfig(use_embeds=False)) == f"Hello.\n\n{AI_LABEL}"
        payload = render_ai("Hello.", BotConfig(use_embeds=True))
        assert payload["attachments"][0]["title"] == "AI Response"
        assert payload["attachments"][0]["color"] == CATEGORY_COLORS["ai"]
        assert payload["text"].endswith(AI_LABEL)
