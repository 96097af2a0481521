from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from flip7.engine.collaborators import EventSink


def log_filename(now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"game-{now:%Y%m%d-%H%M%S}.jsonl"


class TelemetryService:
    """Append-only JSONL game log, one `{"ts", "type", "payload"}` line per event.

    Each record is also forwarded to `mirrors` (e.g. the console narrator)
    once it is on disk. Write failures raise `OSError` to the caller.
    """

    def __init__(self, path: Path, *mirrors: EventSink) -> None:
        self.path = path
        self.mirrors = mirrors
        self.records = 0

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        if self.records == 0:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(
            {"ts": datetime.now(tz=timezone.utc).isoformat(), "type": event_type, "payload": dict(payload)},
            ensure_ascii=False,
        )
        with self.path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")
        self.records += 1
        for mirror in self.mirrors:
            mirror.log(event_type, payload)
