# arxiv_agent/envelope.py
"""
Open Floor conversation envelopes.

Wire shape (JSON, camelCase keys):

    {"openFloor": {
        "schema": {"version": "1.0.0"},
        "conversation": {"id": "conv-1"},
        "sender": {"speakerUri": "...", "serviceUrl": "..."},
        "events": [{"eventType": "utterance", "to": {...}, "parameters": {...}}]
    }}

Events are a tagged family keyed by `eventType`. Tags this agent does not
know parse into UnrecognizedEvent so that the rest of the envelope survives.
"""
from __future__ import annotations
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Wire(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class Schema(_Wire):
    version: str
    url: Optional[str] = None


class Conversation(_Wire):
    id: str


class Sender(_Wire):
    speaker_uri: str = Field(alias="speakerUri")
    service_url: Optional[str] = Field(None, alias="serviceUrl")


class To(_Wire):
    """Addressee of an event. Either identifier may be given."""
    speaker_uri: Optional[str] = Field(None, alias="speakerUri")
    service_url: Optional[str] = Field(None, alias="serviceUrl")
    private: Optional[bool] = None


class Token(_Wire):
    value: str


class TextFeature(_Wire):
    mime_type: str = Field("text/plain", alias="mimeType")
    tokens: List[Token] = Field(default_factory=list)


class Features(_Wire):
    text: Optional[TextFeature] = None


class Span(_Wire):
    start_time: str = Field(alias="startTime")
    end_time: Optional[str] = Field(None, alias="endTime")


class DialogEvent(_Wire):
    id: Optional[str] = None
    speaker_uri: Optional[str] = Field(None, alias="speakerUri")
    span: Optional[Span] = None
    features: Optional[Features] = None


class UtteranceParameters(_Wire):
    dialog_event: Optional[DialogEvent] = Field(None, alias="dialogEvent")


class Event(_Wire):
    """Common fields of every event."""
    event_type: str = Field(alias="eventType")
    to: Optional[To] = None
    reason: Optional[str] = None


class UtteranceEvent(Event):
    event_type: Literal["utterance"] = Field("utterance", alias="eventType")
    parameters: UtteranceParameters = Field(default_factory=UtteranceParameters)

    def text_tokens(self) -> List[str]:
        """Token values of the text feature; empty when the utterance carries no text."""
        de = self.parameters.dialog_event
        if de is None or de.features is None or de.features.text is None:
            return []
        return [t.value for t in de.features.text.tokens]


class GetManifestsEvent(Event):
    event_type: Literal["getManifests"] = Field("getManifests", alias="eventType")
    parameters: Dict[str, Any] = Field(default_factory=dict)


class PublishManifestsEvent(Event):
    event_type: Literal["publishManifests"] = Field("publishManifests", alias="eventType")
    parameters: Dict[str, Any] = Field(default_factory=dict)


class UnrecognizedEvent(Event):
    """Any event whose tag this agent does not handle; kept verbatim."""
    parameters: Dict[str, Any] = Field(default_factory=dict)


AnyEvent = Union[UtteranceEvent, GetManifestsEvent, PublishManifestsEvent, UnrecognizedEvent]

_EVENT_TYPES: Dict[str, type[Event]] = {
    "utterance": UtteranceEvent,
    "getManifests": GetManifestsEvent,
    "publishManifests": PublishManifestsEvent,
}


def parse_event(raw: Any) -> Event:
    """
    Builds the event class matching `raw["eventType"]`.

    Unknown tags become UnrecognizedEvent. A recognized tag with a malformed
    body still raises pydantic.ValidationError.
    """
    if isinstance(raw, Event):
        return raw
    if not isinstance(raw, dict):
        raise TypeError(f"event must be an object, got {type(raw).__name__}")
    cls = _EVENT_TYPES.get(raw.get("eventType"), UnrecognizedEvent)
    return cls.model_validate(raw)


class Envelope(_Wire):
    schema_: Schema = Field(alias="schema")
    conversation: Conversation
    sender: Sender
    events: List[AnyEvent] = Field(default_factory=list)

    @field_validator("events", mode="before")
    @classmethod
    def _tag_events(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [parse_event(e) for e in v]
        return v


class Payload(_Wire):
    open_floor: Envelope = Field(alias="openFloor")

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys and no null fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def create_text_utterance(speaker_uri: str, text: str, to: To | None = None) -> UtteranceEvent:
    """
    Builds a plain-text utterance event spoken by `speaker_uri`, stamped
    with a fresh dialog event id and a span starting now.

    Args:
        speaker_uri (str): The speaker of the utterance (this agent).
        text (str): The full text, carried as a single token.
        to (To | None): Optional addressee.

    Returns:
        UtteranceEvent: The event, ready to append to an outbound envelope.
    """
    dialog_event = DialogEvent(
        id=f"de:{uuid.uuid4()}",
        speaker_uri=speaker_uri,
        span=Span(start_time=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")),
        features=Features(text=TextFeature(tokens=[Token(value=text)])),
    )
    return UtteranceEvent(to=to, parameters=UtteranceParameters(dialog_event=dialog_event))
