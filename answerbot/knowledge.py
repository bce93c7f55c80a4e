"""
Knowledge matching over the curated knowledge base.

Entries are expected in insertion order (the storage layer sorts by id). The
direct-match pass returns the first qualifying entry in that order, so the
order decides which entry wins when several tags or topics appear in a query.
"""
import random
from typing import Iterable, Sequence

from answerbot.constants import DEFAULT_MATCH_THRESHOLD, MAX_CONTEXT_ENTRIES
from answerbot.logger import logger
from answerbot.models import KnowledgeEntry, MatchResult
from answerbot.nlp import get_search_terms
from answerbot.similarity import calculate_similarity


def _is_direct_match(entry: KnowledgeEntry, lowered_query: str) -> bool:
    # Empty tags/topics would match every query.
    if any(tag and tag.lower() in lowered_query for tag in entry.tags):
        return True
    return bool(entry.topic) and entry.topic.lower() in lowered_query


def find_direct_match(query: str, entries: Iterable[KnowledgeEntry]) -> KnowledgeEntry | None:
    lowered_query = (query or "").lower()
    for entry in entries:
        if _is_direct_match(entry, lowered_query):
            return entry
    return None


def score_knowledge(query: str, entries: Iterable[KnowledgeEntry]) -> list[MatchResult]:
    """
    Score every entry's question against the query, best first.

    The sort is stable, so entries with equal scores keep their original order.
    """
    results = [MatchResult(entry=entry, score=calculate_similarity(query, entry.question)) for entry in entries]
    results.sort(key=lambda result: result.score, reverse=True)
    return results


def find_relevant_knowledge(
    query: str,
    entries: Sequence[KnowledgeEntry],
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> KnowledgeEntry | None:
    """
    Find the knowledge entry that answers a query, if any.

    A tag or topic contained in the query wins outright. Otherwise the entry
    whose question is most similar to the query is returned when its score
    reaches the threshold.

    Args:
        query: Free-text user query
        entries: Knowledge entries in insertion order
        threshold: Minimum cosine similarity for the fallback pass

    Returns:
        The matching entry, or None
    """
    direct = find_direct_match(query, entries)
    if direct is not None:
        logger.debug("Direct knowledge match for query=%r: topic=%s", query, direct.topic)
        return direct

    scored = score_knowledge(query, entries)
    if scored and scored[0].score >= threshold:
        best = scored[0]
        logger.debug(
            "Similarity knowledge match for query=%r: topic=%s score=%.3f",
            query, best.entry.topic, best.score,
        )
        return best.entry

    logger.debug(
        "No knowledge match for query=%r (best score=%.3f, threshold=%.3f)",
        query, scored[0].score if scored else 0.0, threshold,
    )
    return None


def get_entries_by_topic(entries: Iterable[KnowledgeEntry], topic: str) -> list[KnowledgeEntry]:
    lowered = (topic or "").lower()
    return [entry for entry in entries if entry.topic.lower() == lowered]


def get_entries_by_category(entries: Iterable[KnowledgeEntry], category: str) -> list[KnowledgeEntry]:
    lowered = (category or "").lower()
    return [entry for entry in entries if entry.category.lower() == lowered]


def get_random_entry(
    entries: Sequence[KnowledgeEntry],
    category: str | None = None,
    rng: random.Random | None = None,
) -> KnowledgeEntry | None:
    """Pick an entry uniformly at random, optionally within one category."""
    pool = get_entries_by_category(entries, category) if category else list(entries)
    if not pool:
        return None
    return (rng or random).choice(pool)


def search_knowledge_base(entries: Iterable[KnowledgeEntry], query: str) -> list[KnowledgeEntry]:
    """
    Case-insensitive substring search across topic, question, answer and tags.

    Broader than find_relevant_knowledge: every entry mentioning the query
    anywhere is returned.
    """
    lowered = (query or "").lower()
    return [
        entry for entry in entries
        if lowered in entry.topic.lower()
        or lowered in entry.question.lower()
        or lowered in entry.answer.lower()
        or any(lowered in tag.lower() for tag in entry.tags)
    ]


def find_context_entries(
    entries: Sequence[KnowledgeEntry],
    query: str,
    limit: int = MAX_CONTEXT_ENTRIES,
) -> list[KnowledgeEntry]:
    """Entries mentioning any search term of the query, used as generation context."""
    found: list[KnowledgeEntry] = []
    for term in get_search_terms(query):
        for entry in search_knowledge_base(entries, term):
            if entry not in found:
                found.append(entry)
            if len(found) >= limit:
                return found
    return found
