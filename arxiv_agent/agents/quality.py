from __future__ import annotations
from typing import Sequence

from ..models import PaperRecord, QualityAssessment

# Fixed policy: only these two publication years count as "recent".
RECENT_YEAR_PREFIXES = ("2024", "2025")
AI_ML_CATEGORIES = ("cs.ai", "cs.lg", "cs.cv", "stat.ml")


def compute_assessment(records: Sequence[PaperRecord]) -> QualityAssessment:
    """Counts total, recent and AI/ML-tagged papers."""
    recent = sum(1 for r in records if r.published.startswith(RECENT_YEAR_PREFIXES))
    ai_ml = sum(
        1 for r in records
        if any(cat in r.category.lower() for cat in AI_ML_CATEGORIES)
    )
    return QualityAssessment(total=len(records), recent=recent, ai_ml=ai_ml)


def assess_quality(records: Sequence[PaperRecord]) -> str:
    """
    Renders the quality assessment block appended to every non-empty result.

    Args:
        records: The papers of one search.

    Returns:
        str: The assessment text, or "" when there are no papers.
    """
    if not records:
        return ""

    qa = compute_assessment(records)
    years = "-".join(RECENT_YEAR_PREFIXES)

    text = "**Research Quality Assessment:**\n"
    text += f"• Papers found: {qa.total}\n"
    text += f"• Recent papers ({years}): {qa.recent}/{qa.total}\n"
    if qa.ai_ml > 0:
        text += f"• AI/ML papers: {qa.ai_ml}\n"
    text += "• Authority level: High (peer-reviewed preprints)\n\n"
    return text
