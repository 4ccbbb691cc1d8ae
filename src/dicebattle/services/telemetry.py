from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping


@dataclass
class TelemetryService:
    """Engine observer that appends every ``(tag, payload)`` as one JSON line.

    Records carry the session label and a per-session sequence number so
    several games can share one file and still be replayed in order.
    """

    path: Path
    session: str = "default"
    seq: int = field(default=0, init=False)

    def __call__(self, tag: str, payload: Mapping[str, object]) -> None:
        self.seq += 1
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "session": self.session,
            "seq": self.seq,
            "tag": tag,
            "payload": dict(payload),
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")
