from __future__ import annotations
import os
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=ROOT_DIR / ".env", override=False)

# API endpoint and User-Agent
ARXIV_API = "http://export.arxiv.org/api/query"           # Atom XML
"""The base URL for the arXiv API."""

DEFAULT_USER_AGENT = "OpenFloor Research Agent (research@openfloor.org)"
"""The User-Agent string sent with every arXiv request."""
RATE_LIMIT_SECONDS = float(os.environ.get("ARXIV_RATE_LIMIT_SECONDS", "2.0"))
"""Minimum spacing in seconds between two outbound arXiv calls."""
REQUEST_TIMEOUT = float(os.environ.get("ARXIV_TIMEOUT", "30.0"))
"""Transport timeout in seconds for a single arXiv request."""
MAX_RESULTS_DEFAULT = int(os.environ.get("ARXIV_MAX_RESULTS", "5"))
"""The default number of papers requested per search."""

# Agent identity
SPEAKER_URI = os.environ.get("ARXIV_AGENT_SPEAKER_URI", "tag:openfloor-research.com,2025:arxiv-agent")
"""The speaker URI this agent answers to."""
SERVICE_URL = os.environ.get("SERVICE_URL", "http://localhost:8080/")
"""The service URL this agent answers to."""
AGENT_NAME = os.environ.get("ARXIV_AGENT_NAME", "ArXiv Research Specialist")
"""Conversational name advertised in the manifest."""
AGENT_ORGANIZATION = os.environ.get("ARXIV_AGENT_ORG", "OpenFloor Demo Corp")
"""Organization advertised in the manifest."""

# Server
LOG_DIR = Path(os.environ.get("ARXIV_AGENT_LOG_DIR", "logs"))
"""Directory where the JSON-lines agent log is written."""
PORT = int(os.environ.get("PORT", "8080"))
"""Port used by `arxiv-agent serve` when --port is not given."""
ALLOWED_ORIGIN = os.environ.get("ALLOWED_ORIGIN", "*")
"""Origin allowed by the CORS middleware."""
