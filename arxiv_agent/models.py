# arxiv_agent/models.py
from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class PaperRecord:
    """
    Represents one paper scanned out of an arXiv search response.
    Built fresh for every search and dropped once the reply is rendered.
    """
    title: str
    """The paper title, trimmed, newlines collapsed to spaces."""
    authors: str
    """Up to three author names joined with ", " ("Unknown Author" if none)."""
    published: str
    """First 10 characters of the published timestamp ("Unknown Date" if missing)."""
    abstract: str
    """The full summary text; truncated only when rendered."""
    link: str
    """The arXiv identifier URL, or an empty string."""
    category: str
    """The first subject tag found in the entry ("Unknown" if none)."""


@dataclass
class QualityAssessment:
    """
    Aggregate counts over the papers of one search.
    """
    total: int
    """Number of papers found."""
    recent: int
    """Papers whose published date starts with one of the recent year prefixes."""
    ai_ml: int
    """Papers tagged with an AI/ML subject category."""
