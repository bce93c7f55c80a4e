import math
import re
from collections import Counter

TOKEN_SPLIT_PATTERN = re.compile(r"\W+")


def _term_frequencies(text: str) -> Counter:
    # No stop-word removal here: short questions need every token for recall.
    return Counter(token for token in TOKEN_SPLIT_PATTERN.split((text or "").lower()) if token)


def calculate_similarity(first: str, second: str) -> float:
    """
    Cosine similarity of the term-frequency vectors of two strings.

    Counts are integers, so the dot product and squared magnitudes are exact
    and the score is symmetric. Returns 0.0 when either string has no terms.
    """
    freq1 = _term_frequencies(first)
    freq2 = _term_frequencies(second)

    magnitude1 = sum(count * count for count in freq1.values())
    magnitude2 = sum(count * count for count in freq2.values())
    if magnitude1 == 0 or magnitude2 == 0:
        return 0.0

    dot_product = sum(count * freq2[word] for word, count in freq1.items() if word in freq2)
    return dot_product / math.sqrt(magnitude1 * magnitude2)
