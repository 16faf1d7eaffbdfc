# arxiv_agent/agents/research.py
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List

from .. import config
from ..envelope import (
    Conversation,
    Envelope,
    Event,
    PublishManifestsEvent,
    Schema,
    Sender,
    To,
    UtteranceEvent,
    create_text_utterance,
)
from ..errors import SearchTimeout
from ..models import PaperRecord
from ..utils.logging import RunLogger
from ..utils.ratelimit import RateLimiter
from .extract import ExtractAgent
from .intent import ACADEMIC_INDICATORS, is_academic_query
from .search import SearchAgent
from .synthesis import render_results

NEED_QUERY_MESSAGE = "📚 I need a research query to search arXiv for academic papers!"
NON_ACADEMIC_MESSAGE = (
    "📚 I specialize in academic research. Try queries about scientific topics, algorithms, "
    "machine learning, physics, mathematics, or other research areas. Use terms like "
    + ", ".join(f"'{k}'" for k in ACADEMIC_INDICATORS)
)
SEARCH_ERROR_MESSAGE = (
    "📚 I encountered an error while searching arXiv. Please try again with a different query."
)


def timeout_message(query: str) -> str:
    return (
        f"**arXiv Research for: {query}**\n\n"
        "Request timeout - arXiv may be experiencing high load. "
        "Research available but slower than expected."
    )


class ResearchAgent:
    """
    The conversational front of the agent: routes inbound envelope events and
    runs intent → search → extract → synthesis for addressed utterances.

    One instance serves every conversation. Its SearchAgent (and so its
    RateLimiter) is shared by all envelopes in flight.
    """

    def __init__(
        self,
        speaker_uri: str,
        service_url: str,
        manifest: Dict[str, Any],
        search_agent: SearchAgent,
        logger: RunLogger,
        extractor: ExtractAgent | None = None,
        max_results: int = config.MAX_RESULTS_DEFAULT,
    ):
        """
        Initializes the ResearchAgent.

        Args:
            speaker_uri: The speaker URI this agent answers to and speaks as.
            service_url: The service URL this agent answers to.
            manifest: Static capability manifest returned for getManifests.
            search_agent: Rate-limited arXiv client.
            logger: JSON-lines run logger.
            extractor: Record extractor; a fresh ExtractAgent by default.
            max_results: Number of papers requested per search.
        """
        self.speaker_uri = speaker_uri
        self.service_url = service_url
        self.manifest = manifest
        self.search_agent = search_agent
        self.logger = logger
        self.extractor = extractor or ExtractAgent()
        self.max_results = max_results

    def _addressed_to_me(self, event: Event) -> bool:
        to = event.to
        return (
            to is None
            or to.speaker_uri == self.speaker_uri
            or to.service_url == self.service_url
        )

    async def process_envelope(self, in_envelope: Envelope) -> Envelope:
        """
        Handles every event of one inbound envelope, in order, and collects
        the replies into a single outbound envelope.

        Args:
            in_envelope: The validated inbound envelope.

        Returns:
            Envelope: Same schema version and conversation id, sent by this agent.
        """
        log = self.logger.bind(conversation_id=in_envelope.conversation.id)
        log.info(
            "envelope_received",
            sender=in_envelope.sender.speaker_uri,
            events=len(in_envelope.events),
        )
        response_events: List[Event] = []

        for event in in_envelope.events:
            if not self._addressed_to_me(event):
                log.info("event_ignored", event_type=event.event_type, reason="not_addressed")
                continue

            match event.event_type:
                case "utterance":
                    reply = await self.handle_research_query(event, in_envelope)
                    if reply is not None:
                        response_events.append(reply)
                case "getManifests":
                    response_events.append(PublishManifestsEvent(
                        to=To(speaker_uri=in_envelope.sender.speaker_uri),
                        parameters={"servicingManifests": [self.manifest]},
                    ))
                case _:
                    log.info("event_ignored", event_type=event.event_type, reason="unrecognized")

        out = Envelope(
            schema_=Schema(version=in_envelope.schema_.version),
            conversation=Conversation(id=in_envelope.conversation.id),
            sender=Sender(speaker_uri=self.speaker_uri, service_url=self.service_url),
            events=response_events,
        )
        log.info("envelope_done", events=len(response_events))
        return out

    async def handle_research_query(self, event: UtteranceEvent, in_envelope: Envelope) -> Event | None:
        """
        Answers one addressed utterance. Never raises: any failure becomes the
        generic apology so that the other events of the envelope still run.
        """
        reply_to = To(speaker_uri=in_envelope.sender.speaker_uri)
        log = self.logger.bind(conversation_id=in_envelope.conversation.id)
        try:
            tokens = event.text_tokens()
            if not tokens:
                return create_text_utterance(self.speaker_uri, NEED_QUERY_MESSAGE, to=reply_to)

            query = "".join(tokens)
            academic = is_academic_query(query)
            log.info("query_classified", query=query, academic=academic)
            if not academic:
                return create_text_utterance(self.speaker_uri, NON_ACADEMIC_MESSAGE, to=reply_to)

            text = await self.search_and_summarize(query)
            return create_text_utterance(self.speaker_uri, text, to=reply_to)

        except Exception as e:
            log.error("search_failed", error=repr(e))
            return create_text_utterance(self.speaker_uri, SEARCH_ERROR_MESSAGE, to=reply_to)

    async def search_and_summarize(self, query: str) -> str:
        """
        Searches arXiv and renders the reply text. A transport timeout is
        turned into a "try again" message; other errors propagate.
        """
        self.logger.info("search_dispatched", query=query, max_results=self.max_results)
        try:
            raw = await self.search_agent.search(query, self.max_results)
        except SearchTimeout as e:
            self.logger.warn("search_timeout", query=query, error=str(e))
            return timeout_message(query)

        papers: List[PaperRecord] = self.extractor.process(raw)
        self.logger.info("search_done", query=query, count=len(papers))
        return render_results(query, papers)


def build_manifest(
    speaker_uri: str,
    service_url: str,
    name: str = "ArXiv Research Agent",
    organization: str = "OpenFloor Research",
) -> Dict[str, Any]:
    """Static Open Floor manifest advertised by the agent."""
    return {
        "identification": {
            "speakerUri": speaker_uri,
            "serviceUrl": service_url,
            "organization": organization,
            "conversationalName": name,
            "synopsis": "Academic research specialist for finding and analyzing scientific papers on arXiv",
        },
        "capabilities": [
            {
                "keyphrases": [
                    "research", "academic", "papers", "scientific", "arxiv",
                    "machine learning", "ai", "physics", "mathematics", "algorithm",
                ],
                "descriptions": [
                    "Search arXiv for academic papers and research publications",
                    "Find scientific literature on machine learning, AI, physics, and mathematics",
                    "Provide quality assessment of research papers and recent publications",
                ],
            }
        ],
    }


def create_research_agent(
    speaker_uri: str = config.SPEAKER_URI,
    service_url: str = config.SERVICE_URL,
    name: str = config.AGENT_NAME,
    organization: str = config.AGENT_ORGANIZATION,
    log_dir: Path | None = None,
    rate_limit_seconds: float = config.RATE_LIMIT_SECONDS,
    timeout: float = config.REQUEST_TIMEOUT,
    search_agent: SearchAgent | None = None,
) -> ResearchAgent:
    """
    Wires a ResearchAgent from configuration.

    Args:
        speaker_uri: The agent's speaker URI.
        service_url: The agent's service URL.
        name: Conversational name for the manifest.
        organization: Organization for the manifest.
        log_dir: Where the JSON-lines log goes; defaults to ARXIV_AGENT_LOG_DIR.
        rate_limit_seconds: Minimum spacing between arXiv calls.
        timeout: Transport timeout for arXiv calls.
        search_agent: Prebuilt search client (tests pass one with a mock transport).
    """
    if search_agent is None:
        search_agent = SearchAgent(RateLimiter(rate_limit_seconds), timeout=timeout)
    return ResearchAgent(
        speaker_uri=speaker_uri,
        service_url=service_url,
        manifest=build_manifest(speaker_uri, service_url, name=name, organization=organization),
        search_agent=search_agent,
        logger=RunLogger(log_dir or config.LOG_DIR),
    )
