# FILE: tests/test_nlp.py
"""
Tests for term extraction.

Test Commands:
    pytest tests/test_nlp.py -v
"""
from answerbot.nlp import extract_terms, extract_topic, get_query_type, get_search_terms


class TestExtractTerms:

    def test_strips_question_lead_and_punctuation(self):
        assert extract_terms("What is Khilafat?") == ["khilafat"]

    def test_removes_stop_words_and_short_tokens(self):
        assert extract_terms("Tell me about the history of Qadian in India") == ["history", "qadian", "india"]

    def test_believe_about_variant(self):
        assert extract_terms("What do Ahmadis believe about Jesus?") == ["jesus"]

    def test_wh_words_only_removed_as_whole_words(self):
        """'show' and 'somehow' keep their letters."""
        assert extract_terms("show somehow") == ["show", "somehow"]

    def test_empty_input(self):
        assert extract_terms("") == []
        assert extract_terms(None) == []


class TestExtractTopic:

    def test_khilafat(self):
        assert extract_topic("What is Khilafat?") == "khilafat"

    def test_longest_term_wins(self):
        assert extract_topic("tell me about prophethood finality") == "prophethood"

    def test_tie_goes_to_first_occurrence(self):
        assert extract_topic("jihad peace") == "jihad"

    def test_none_when_nothing_survives(self):
        assert extract_topic("what is it?") is None


class TestGetSearchTerms:

    def test_capped_at_five_in_order(self):
        text = "alpha bravo charlie delta echo foxtrot golf"
        assert get_search_terms(text) == ["alpha", "bravo", "charlie", "delta", "echo"]

    def test_smaller_stop_word_set_keeps_auxiliaries(self):
        """'does' is filtered by extract_terms but kept for search."""
        assert "does" not in extract_terms("does jihad mean war")
        assert get_search_terms("does jihad mean war") == ["does", "jihad", "mean", "war"]


class TestGetQueryType:

    def test_leading_word(self):
        assert get_query_type("Who founded the community?") == "who"
        assert get_query_type("why is that") == "why"

    def test_defaults_to_what(self):
        assert get_query_type("khilafat please") == "what"
