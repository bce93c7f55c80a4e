"""
Term extraction for free-text queries.

All functions are pure: lower-case the text, drop question-lead phrases and
punctuation, split on whitespace and filter stop words and short tokens.
"""
import re

# Longer phrases first so "what is" wins over the bare "what".
QUESTION_LEAD_PATTERN = re.compile(
    r"\b(?:"
    r"what do \w+ believe about|what does \w+ say about|"
    r"what is|who is|tell me about|can you explain|"
    r"how|why|when|where|what|who"
    r")\b"
)
PUNCTUATION_PATTERN = re.compile(r"[?.,!'\";:/\\]")

# Used by get_search_terms
BASIC_STOP_WORDS = frozenset({
    "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for", "with",
    "about", "of", "by", "from", "as", "into", "through", "during", "after",
    "before", "above", "below", "since", "yes", "no", "not",
})

# Used by extract_terms / extract_topic
STOP_WORDS = BASIC_STOP_WORDS | frozenset({
    "please", "tell", "me", "i", "we", "you", "they", "he", "she", "it",
    "this", "that", "these", "those", "am", "is", "are", "was", "were", "be",
    "being", "been", "have", "has", "had", "do", "does", "did", "will",
    "would", "shall", "should", "may", "might", "must", "can", "could",
})

MAX_SEARCH_TERMS = 5
MIN_TERM_LENGTH = 3


def _clean(text: str) -> list[str]:
    cleaned = QUESTION_LEAD_PATTERN.sub(" ", (text or "").lower())
    cleaned = PUNCTUATION_PATTERN.sub("", cleaned)
    return cleaned.split()


def _filter(words: list[str], stop_words: frozenset) -> list[str]:
    return [w for w in words if w not in stop_words and len(w) >= MIN_TERM_LENGTH]


def extract_terms(text: str) -> list[str]:
    """Return the significant terms of ``text`` in their original order."""
    return _filter(_clean(text), STOP_WORDS)


def extract_topic(text: str) -> str | None:
    """
    Guess the topic of a query: the longest significant term.

    Ties go to the term that appears first. Returns None when nothing survives
    the cleaning.
    """
    terms = extract_terms(text)
    if not terms:
        return None
    return max(terms, key=len)


def get_search_terms(text: str) -> list[str]:
    """Terms worth searching the knowledge base for, at most five."""
    return _filter(_clean(text), BASIC_STOP_WORDS)[:MAX_SEARCH_TERMS]


def get_query_type(text: str) -> str:
    lowered = (text or "").lower().strip()
    for query_type in ("who", "what", "when", "where", "why", "how"):
        if lowered.startswith(query_type):
            return query_type
    return "what"
