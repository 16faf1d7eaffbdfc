from __future__ import annotations


class ResearchAgentError(Exception):
    """Base class for errors raised inside the research pipeline."""


class SearchError(ResearchAgentError):
    """The arXiv search could not produce a response body."""


class SearchUnavailable(SearchError):
    """arXiv answered with a non-success status, or the transport failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SearchTimeout(SearchError):
    """The transport reported a timeout while talking to arXiv."""
