from __future__ import annotations
import argparse
import asyncio
import sys

import requests

from . import config
from .agents.research import create_research_agent
from .client import build_utterance_envelope, extract_texts, post_envelope
from .envelope import Payload


def build_parser() -> argparse.ArgumentParser:
    """
    Builds and returns an argument parser for the command-line interface.

    Returns:
        argparse.ArgumentParser: Parser with the `serve` and `ask` subcommands.
    """
    p = argparse.ArgumentParser(
        prog="arxiv-agent",
        description="arXiv Research Specialist agent (Open Floor)"
    )
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("serve", help="Run the HTTP agent server")
    s.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    s.add_argument("--port", type=int, default=config.PORT, help="Port (default from env PORT, else 8080)")

    a = sub.add_parser("ask", help="Send one query to the agent and print the reply")
    a.add_argument("query", help="Research query, e.g. 'quantum cryptography paper'")
    a.add_argument("--url", default=f"http://127.0.0.1:{config.PORT}/",
                   help="Agent endpoint (default: local server)")
    a.add_argument("--local", action="store_true",
                   help="Run the agent in-process instead of calling --url")

    return p


def _serve(args) -> int:
    import uvicorn
    uvicorn.run("arxiv_agent.api:app", host=args.host, port=args.port)
    return 0


def _ask(args) -> int:
    envelope = build_utterance_envelope(args.query)
    if args.local:
        agent = create_research_agent()
        reply = asyncio.run(agent.process_envelope(envelope))
    else:
        try:
            reply = Payload.model_validate(post_envelope(args.url, envelope)).open_floor
        except (RuntimeError, requests.RequestException) as e:
            print(f"⚠ {e}", file=sys.stderr)
            return 1

    texts = extract_texts(reply)
    if not texts:
        print("(no reply)")
    for t in texts:
        print(t)
        print()
    return 0


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for `arxiv-agent`.
    """
    args = build_parser().parse_args(argv)
    if args.command == "serve":
        return _serve(args)
    return _ask(args)


if __name__ == "__main__":
    sys.exit(main())
