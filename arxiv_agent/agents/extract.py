from __future__ import annotations
from typing import List
import re

from ..models import PaperRecord

_ENTRY_RE = re.compile(r"<entry>(.*?)</entry>", re.S)
_TITLE_RE = re.compile(r"<title>(.*?)</title>", re.S)
_SUMMARY_RE = re.compile(r"<summary>(.*?)</summary>", re.S)
_PUBLISHED_RE = re.compile(r"<published>(.*?)</published>")
_ID_RE = re.compile(r"<id>(.*?)</id>")
_NAME_RE = re.compile(r"<name>(.*?)</name>")
_TERM_RE = re.compile(r'term="([^"]+)"')

MAX_AUTHORS = 3


def _field(pattern: re.Pattern[str], block: str) -> str | None:
    """First capture of `pattern` inside `block`, or None when the field is absent."""
    m = pattern.search(block)
    return m.group(1) if m else None


def _clean(text: str) -> str:
    return text.strip().replace("\n", " ")


class ExtractAgent:
    """
    Scans raw arXiv responses (Atom XML) into PaperRecord objects.

    This is deliberately a text scan and not an XML parse: entries with missing
    or out-of-order fields, stray markup, or a truncated document still yield
    whatever complete records can be found. An entry without a title or a
    summary is skipped.
    """

    def process(self, raw_text: str) -> List[PaperRecord]:
        """
        Extracts paper records from an arXiv API response.

        Args:
            raw_text (str): The response body returned by the search client.

        Returns:
            List[PaperRecord]: Records in the order their entries appear (possibly empty).
        """
        if not raw_text or not raw_text.strip():
            return []
        records: List[PaperRecord] = []
        for block in _ENTRY_RE.findall(raw_text):
            record = self._from_entry(block)
            if record is not None:
                records.append(record)
        return records

    def _from_entry(self, block: str) -> PaperRecord | None:
        """
        Builds one record from the text between <entry> and </entry>.

        Args:
            block (str): The entry body.

        Returns:
            PaperRecord | None: The record, or None if title or summary is missing.
        """
        title = _field(_TITLE_RE, block)
        summary = _field(_SUMMARY_RE, block)
        if title is None or summary is None:
            return None

        published = _field(_PUBLISHED_RE, block)
        link = _field(_ID_RE, block)
        category = _field(_TERM_RE, block)
        names = _NAME_RE.findall(block)[:MAX_AUTHORS]

        return PaperRecord(
            title=_clean(title),
            authors=", ".join(names) or "Unknown Author",
            published=published[:10] if published is not None else "Unknown Date",
            abstract=_clean(summary),
            link=link if link is not None else "",
            category=category if category is not None else "Unknown",
        )
