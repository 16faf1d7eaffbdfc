from __future__ import annotations

ACADEMIC_INDICATORS = (
    "research", "study", "analysis", "scientific", "algorithm", "method",
    "machine learning", "ai", "artificial intelligence", "deep learning",
    "neural network", "computer science", "physics", "mathematics",
    "quantum", "cryptography", "blockchain", "paper", "academic",
)
"""Keywords whose presence (as a substring, case-insensitive) marks a query as academic."""


def is_academic_query(query: str) -> bool:
    """
    Decides whether free text reads like an academic research query.

    This is a plain substring test, so short indicators such as "ai" also match
    inside longer words ("maintain"). No state and no network.

    Args:
        query (str): The reconstructed user query.

    Returns:
        bool: True if any indicator occurs in the lowercased query.
    """
    q = query.lower()
    return any(indicator in q for indicator in ACADEMIC_INDICATORS)
