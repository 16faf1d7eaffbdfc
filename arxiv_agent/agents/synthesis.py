from __future__ import annotations
from typing import Sequence

from ..models import PaperRecord
from .quality import assess_quality

ABSTRACT_PREVIEW_CHARS = 400


def render_results(query: str, records: Sequence[PaperRecord]) -> str:
    """
    Builds the reply text for one search: a header naming the query, one
    numbered block per paper (input order), then the quality assessment.
    """
    header = f"**arXiv Academic Research for: {query}**\n\n"
    if not records:
        return header + "No relevant academic papers found on arXiv."

    parts = [header]
    for i, paper in enumerate(records, start=1):
        parts.append(
            f"**Paper {i}: {paper.title}**\n"
            f"Authors: {paper.authors}\n"
            f"Published: {paper.published}\n"
            f"Category: {paper.category}\n"
            f"Abstract: {paper.abstract[:ABSTRACT_PREVIEW_CHARS]}...\n"
            f"Link: {paper.link}\n\n"
        )
    parts.append(assess_quality(records))
    return "".join(parts)
