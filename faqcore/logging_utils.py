"""JSONL interaction log: one line per answered (or failed) question."""
from __future__ import annotations

import datetime as _dt
import hashlib
import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Iterable, List, Literal, Optional

from faqcore.schemas import Answer, HitSource


Channel = Literal["line", "web"]


def hash_user_id(user_id: str | None) -> str:
    """LINE の userId や IP アドレスはそのまま残さない。"""

    if not user_id:
        return ""
    return hashlib.sha256(user_id.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class InteractionLogEntry:
    timestamp: str
    user_id: str
    channel: Channel
    hit_source: HitSource
    query: str
    top_score: Optional[float]
    url: Optional[str]
    latency_ms: float
    errors: List[str] = field(default_factory=list)

    @classmethod
    def for_answer(
        cls,
        answer: Answer | None,
        *,
        user_id: str | None,
        channel: Channel,
        query: str,
        latency_ms: float,
        errors: Iterable[str] | None = None,
        timestamp: Optional[_dt.datetime] = None,
    ) -> "InteractionLogEntry":
        """Describe how ``query`` was answered; ``answer=None`` records a failure."""

        when = timestamp or _dt.datetime.now(_dt.timezone.utc)
        return cls(
            timestamp=when.isoformat(),
            user_id=hash_user_id(user_id),
            channel=channel,
            hit_source=answer.hit_source if answer is not None else "error",
            query=query,
            top_score=round(float(answer.score), 4) if answer is not None and answer.score is not None else None,
            url=answer.url if answer is not None else None,
            latency_ms=round(float(latency_ms), 1),
            errors=[str(err) for err in (errors or []) if str(err)],
        )

    def to_json(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)


def log_interaction(
    path: str | Path,
    answer: Answer | None,
    *,
    user_id: str | None,
    channel: Channel,
    query: str,
    latency_ms: float,
    errors: Iterable[str] | None = None,
    timestamp: Optional[_dt.datetime] = None,
) -> InteractionLogEntry:
    """Append the entry for ``answer`` to the JSONL file at ``path``."""

    entry = InteractionLogEntry.for_answer(
        answer,
        user_id=user_id,
        channel=channel,
        query=query,
        latency_ms=latency_ms,
        errors=errors,
        timestamp=timestamp,
    )
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("a", encoding="utf-8") as fh:
        fh.write(entry.to_json() + "\n")
    return entry


__all__ = ["Channel", "InteractionLogEntry", "hash_user_id", "log_interaction"]
