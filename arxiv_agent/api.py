from __future__ import annotations
from datetime import datetime, timezone
from json import JSONDecodeError

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from . import __version__, config
from .agents.research import ResearchAgent, create_research_agent
from .envelope import Payload

app = FastAPI(title="arXiv Research Agent", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.ALLOWED_ORIGIN],
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

HEALTH_CAPABILITIES = ["academic research", "scientific papers", "arXiv search"]

_agent: ResearchAgent | None = None


def get_agent() -> ResearchAgent:
    """Returns the process-wide agent, building it on first use."""
    global _agent
    if _agent is None:
        _agent = create_research_agent()
    return _agent


@app.get("/health")
def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "agent": "arxiv-research-agent",
        "capabilities": HEALTH_CAPABILITIES,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }


@app.post("/")
async def receive_envelope(request: Request, agent: ResearchAgent = Depends(get_agent)):
    """Main Open Floor endpoint: one envelope in, one envelope out."""
    try:
        body = await request.json()
    except (JSONDecodeError, UnicodeDecodeError) as e:
        agent.logger.warn("payload_invalid", error=str(e))
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid OpenFloor payload", "details": [str(e)]},
        )

    try:
        payload = Payload.model_validate(body)
    except (ValidationError, TypeError) as e:
        details = e.errors(include_url=False, include_context=False) if isinstance(e, ValidationError) else [str(e)]
        agent.logger.warn("payload_invalid", details=details)
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid OpenFloor payload", "details": details},
        )

    in_envelope = payload.open_floor
    agent.logger.info("request_received", sender=in_envelope.sender.speaker_uri)

    try:
        out_envelope = await agent.process_envelope(in_envelope)
        return Payload(open_floor=out_envelope).to_wire()
    except Exception as e:
        agent.logger.error("request_failed", error=repr(e))
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(e)},
        )
