from __future__ import annotations
import json, sys
from datetime import datetime, UTC
from pathlib import Path
from typing import Any, Dict, Iterable

class RunLogger:
    """
    JSON-lines logger for the agent. Every line goes to
    `<log_dir>/arxiv_agent.log`; lines at an `echo_levels` level are also
    printed to stderr.

    `bind()` returns a logger that writes to the same file and stamps every
    line with fixed context (e.g. the conversation id of the envelope being
    handled), so lines from interleaved conversations can be told apart.
    """
    def __init__(
        self,
        log_dir: Path,
        echo_levels: Iterable[str] = ("WARN", "ERROR"),
        context: Dict[str, Any] | None = None,
    ):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_path = self.log_dir / "arxiv_agent.log"
        self.echo_levels = frozenset(echo_levels)
        self.context: Dict[str, Any] = dict(context or {})

    def bind(self, **context) -> "RunLogger":
        """Child logger sharing the file, with `context` added to every line."""
        return RunLogger(self.log_dir, self.echo_levels, {**self.context, **context})

    def info(self, msg: str, **kv):
        self._log("INFO", msg, kv)

    def warn(self, msg: str, **kv):
        self._log("WARN", msg, kv)

    def error(self, msg: str, **kv):
        self._log("ERROR", msg, kv)

    def _log(self, level: str, msg: str, kv: Dict[str, Any]):
        ts = datetime.now(UTC).isoformat(timespec="seconds").replace("+00:00", "Z")
        self._write({"ts": ts, "level": level, "msg": msg, **self.context, **kv})

    def _write(self, line: dict):
        txt = json.dumps(line, ensure_ascii=False, default=str)
        with self.log_path.open("a", encoding="utf-8") as f:
            f.write(txt + "\n")
        if line["level"] in self.echo_levels:
            print(txt, file=sys.stderr)
