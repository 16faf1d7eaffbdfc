from __future__ import annotations
import asyncio

import pytest

from arxiv_agent.agents.research import ResearchAgent, build_manifest
from arxiv_agent.utils.logging import RunLogger

AGENT_URI = "tag:test,2025:arxiv-agent"
AGENT_URL = "https://agent.example.org/"
USER_URI = "tag:test,2025:user"


def entry_xml(
    title="Attention Is All You Need",
    summary="We propose a new simple network architecture, the Transformer.",
    published="2024-06-12T17:59:59Z",
    arxiv_id="http://arxiv.org/abs/2406.00001v1",
    authors=("Ashish Vaswani", "Noam Shazeer"),
    term="cs.LG",
):
    """One Atom <entry>; pass None to leave a field out."""
    parts = ["<entry>"]
    if arxiv_id is not None:
        parts.append(f"<id>{arxiv_id}</id>")
    if published is not None:
        parts.append(f"<published>{published}</published>")
    if title is not None:
        parts.append(f"<title>{title}</title>")
    if summary is not None:
        parts.append(f"<summary>{summary}</summary>")
    for a in authors:
        parts.append(f"<author><name>{a}</name></author>")
    parts.append(f'<link href="{arxiv_id}" rel="alternate" type="text/html"/>')
    if term is not None:
        parts.append(f'<arxiv:primary_category xmlns:arxiv="http://arxiv.org/schemas/atom" term="{term}" scheme="http://arxiv.org/schemas/atom"/>')
        parts.append(f'<category term="{term}" scheme="http://arxiv.org/schemas/atom"/>')
    parts.append("</entry>")
    return "\n".join(parts)


def feed_xml(*entries):
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<feed xmlns="http://www.w3.org/2005/Atom">\n'
        '<title type="html">ArXiv Query: search_query=all:test</title>\n'
        + "\n".join(entries)
        + "\n</feed>\n"
    )


class StubSearch:
    """Stands in for SearchAgent: returns canned text or raises."""
    def __init__(self, result="", error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list[tuple[str, int]] = []

    async def search(self, query, max_results=5):
        self.calls.append((query, max_results))
        if self.error is not None:
            raise self.error
        return self.result


def utterance(text=None, to=None, tokens=None):
    """Wire dict for an utterance event; `tokens` overrides the single-token text."""
    if tokens is None:
        tokens = [] if text is None else [{"value": text}]
    ev = {
        "eventType": "utterance",
        "parameters": {
            "dialogEvent": {
                "speakerUri": USER_URI,
                "features": {"text": {"mimeType": "text/plain", "tokens": tokens}},
            }
        },
    }
    if to is not None:
        ev["to"] = to
    return ev


def envelope_dict(*events, version="1.0.0", conversation_id="conv-42"):
    return {
        "schema": {"version": version},
        "conversation": {"id": conversation_id},
        "sender": {"speakerUri": USER_URI, "serviceUrl": "https://user.example.org/"},
        "events": list(events),
    }


@pytest.fixture()
def logger(tmp_path):
    return RunLogger(tmp_path / "logs")


@pytest.fixture()
def make_agent(logger):
    def _make(search):
        return ResearchAgent(
            speaker_uri=AGENT_URI,
            service_url=AGENT_URL,
            manifest=build_manifest(AGENT_URI, AGENT_URL),
            search_agent=search,
            logger=logger,
        )
    return _make


class FakeClock:
    """Manual clock whose sleep() just advances time."""
    def __init__(self, start=100.0):
        self.now = start
        self.sleeps = []

    def __call__(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds
        await asyncio.sleep(0)
