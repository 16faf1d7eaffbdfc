import asyncio
import json

from arxiv_agent.agents.research import (
    NEED_QUERY_MESSAGE,
    NON_ACADEMIC_MESSAGE,
    SEARCH_ERROR_MESSAGE,
)
from arxiv_agent.envelope import Envelope, PublishManifestsEvent, UtteranceEvent
from arxiv_agent.errors import SearchTimeout, SearchUnavailable
from conftest import (
    AGENT_URI, AGENT_URL, USER_URI, StubSearch, entry_xml, envelope_dict, feed_xml, utterance,
)


def _run(agent, *events, **kw):
    env = Envelope.model_validate(envelope_dict(*events, **kw))
    return asyncio.run(agent.process_envelope(env))

def _text(event):
    assert isinstance(event, UtteranceEvent)
    return "".join(event.text_tokens())


def test_outbound_echoes_schema_and_conversation(make_agent):
    """
    The reply keeps the inbound schema version and conversation id; the sender is the agent.
    """
    out = _run(make_agent(StubSearch()), version="1.2.3", conversation_id="abc-9")
    assert out.schema_.version == "1.2.3"
    assert out.conversation.id == "abc-9"
    assert out.sender.speaker_uri == AGENT_URI
    assert out.sender.service_url == AGENT_URL
    assert out.events == []

def test_event_for_someone_else_is_ignored(make_agent):
    search = StubSearch(feed_xml(entry_xml()))
    to_other = {"speakerUri": "tag:other", "serviceUrl": "https://other.example.org/"}
    out = _run(make_agent(search), utterance("quantum research", to=to_other))
    assert out.events == []
    assert search.calls == []

def test_addressed_by_service_url_only(make_agent):
    search = StubSearch(feed_xml(entry_xml()))
    out = _run(make_agent(search), utterance("quantum research", to={"serviceUrl": AGENT_URL}))
    assert len(out.events) == 1
    assert len(search.calls) == 1

def test_empty_tokens_ask_for_query(make_agent):
    """
    An utterance without tokens gets the "need a query" reply and never searches.
    """
    search = StubSearch()
    out = _run(make_agent(search), utterance(None))
    assert _text(out.events[0]) == NEED_QUERY_MESSAGE
    assert out.events[0].to.speaker_uri == USER_URI
    assert search.calls == []

def test_non_academic_query_gets_guidance(make_agent):
    search = StubSearch()
    out = _run(make_agent(search), utterance("what's the weather today"))
    assert _text(out.events[0]) == NON_ACADEMIC_MESSAGE
    assert "'machine learning'" in NON_ACADEMIC_MESSAGE
    assert search.calls == []

def test_academic_query_is_searched_and_summarized(make_agent):
    """
    Tokens are concatenated without a separator to rebuild the query.
    """
    search = StubSearch(feed_xml(entry_xml(title="Paper A"), entry_xml(title="Paper B")))
    tokens = [{"value": "deep "}, {"value": "learning"}, {"value": " survey"}]
    out = _run(make_agent(search), utterance(tokens=tokens))
    assert search.calls == [("deep learning survey", 5)]
    text = _text(out.events[0])
    assert text.startswith("**arXiv Academic Research for: deep learning survey**")
    assert "**Paper 1: Paper A**" in text
    assert "**Paper 2: Paper B**" in text
    assert "• AI/ML papers: 2" in text
    assert out.events[0].to.speaker_uri == USER_URI

def test_timeout_degrades_to_try_again(make_agent):
    search = StubSearch(error=SearchTimeout("read timeout"))
    out = _run(make_agent(search), utterance("quantum algorithm"))
    text = _text(out.events[0])
    assert "timeout" in text
    assert "quantum algorithm" in text

def test_failure_does_not_stop_later_events(make_agent):
    """
    A failing search yields the generic apology and the next event still runs.
    """
    search = StubSearch(error=SearchUnavailable("ArXiv API error: 500", status_code=500))
    out = _run(
        make_agent(search),
        utterance("physics paper"),
        {"eventType": "getManifests"},
    )
    assert _text(out.events[0]) == SEARCH_ERROR_MESSAGE
    assert "500" not in _text(out.events[0])
    assert isinstance(out.events[1], PublishManifestsEvent)

def test_unexpected_exception_is_contained(make_agent):
    search = StubSearch(error=ValueError("boom"))
    out = _run(make_agent(search), utterance("method study"))
    assert _text(out.events[0]) == SEARCH_ERROR_MESSAGE

def test_get_manifests_publishes_to_sender(make_agent):
    out = _run(make_agent(StubSearch()), {"eventType": "getManifests", "to": {"speakerUri": AGENT_URI}})
    (ev,) = out.events
    assert isinstance(ev, PublishManifestsEvent)
    assert ev.to.speaker_uri == USER_URI
    (manifest,) = ev.parameters["servicingManifests"]
    assert manifest["identification"]["speakerUri"] == AGENT_URI

def test_unrecognized_events_are_ignored(make_agent):
    search = StubSearch()
    out = _run(
        make_agent(search),
        {"eventType": "invite"},
        {"eventType": "bye", "reason": "done"},
    )
    assert out.events == []

def test_search_errors_are_logged(make_agent, logger):
    search = StubSearch(error=SearchUnavailable("ArXiv API error: 503", status_code=503))
    _run(make_agent(search), utterance("cryptography research"))
    log = logger.log_path.read_text(encoding="utf-8")
    assert '"msg": "search_failed"' in log
    assert '"msg": "envelope_done"' in log

def test_log_lines_carry_the_conversation_id(make_agent, logger):
    _run(make_agent(StubSearch(error=RuntimeError("x"))), utterance("biology research"), conversation_id="conv-log")
    lines = [json.loads(l) for l in logger.log_path.read_text(encoding="utf-8").splitlines()]
    tagged = {l["msg"] for l in lines if l.get("conversation_id") == "conv-log"}
    assert {"envelope_received", "query_classified", "search_failed", "envelope_done"} <= tagged
