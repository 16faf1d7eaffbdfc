# arxiv_agent/client.py
from __future__ import annotations
import uuid
from typing import Any, Dict, List

import requests

from .envelope import (
    Conversation,
    Envelope,
    Payload,
    Schema,
    Sender,
    To,
    UtteranceEvent,
    create_text_utterance,
)

SCHEMA_VERSION = "1.0.0"
CLIENT_SPEAKER_URI = "tag:openfloor-research.com,2025:cli-user"
TIMEOUT = (10, 120)  # (connect, read)


def build_utterance_envelope(
    text: str,
    speaker_uri: str = CLIENT_SPEAKER_URI,
    conversation_id: str | None = None,
    to: To | None = None,
) -> Envelope:
    """
    Wraps a single text utterance into a fresh envelope.

    Args:
        text: The query text.
        speaker_uri: Who is speaking.
        conversation_id: Conversation to continue; a new one when omitted.
        to: Optional addressee (broadcast when None).
    """
    return Envelope(
        schema_=Schema(version=SCHEMA_VERSION),
        conversation=Conversation(id=conversation_id or f"conv-{uuid.uuid4()}"),
        sender=Sender(speaker_uri=speaker_uri),
        events=[create_text_utterance(speaker_uri, text, to=to)],
    )


def post_envelope(url: str, envelope: Envelope) -> Dict[str, Any]:
    """POSTs an envelope to an agent endpoint; returns the JSON reply.

    Raises RuntimeError on non-2xx responses.
    """
    body = Payload(open_floor=envelope).to_wire()
    r = requests.post(url, json=body, timeout=TIMEOUT)
    if not r.ok:
        raise RuntimeError(f"POST {url} -> {r.status_code}: {r.text}")
    return r.json()


def extract_texts(envelope: Envelope) -> List[str]:
    """Text of every utterance in an envelope, in order."""
    return [
        "".join(e.text_tokens())
        for e in envelope.events
        if isinstance(e, UtteranceEvent)
    ]
