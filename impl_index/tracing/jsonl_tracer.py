"""JSONL file-based page trace."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from impl_index.tracing.interface import PageEvent, TraceCollector

logger = logging.getLogger(__name__)


class JSONLTraceCollector(TraceCollector):
    """One ``{trace_dir}/{page_id}.jsonl`` file per page, one ``PageEvent`` per line.

    Recorded events stay in memory until ``flush``; ``events`` reads the
    flushed file back and appends whatever is still unflushed.
    """

    def __init__(self, trace_dir: str = "./traces") -> None:
        self._dir = Path(trace_dir)
        self._dir.mkdir(parents=True, exist_ok=True)
        self._pending: dict[str, list[PageEvent]] = {}

    @property
    def trace_dir(self) -> Path:
        return self._dir

    def path_for(self, page_id: str) -> Path:
        return self._dir / f"{page_id}.jsonl"

    async def record(self, event: PageEvent) -> None:
        self._pending.setdefault(event.page_id, []).append(event)

    async def flush(self, page_id: str) -> None:
        events = self._pending.pop(page_id, [])
        if not events:
            return
        with open(self.path_for(page_id), "a") as f:
            for ev in events:
                f.write(ev.model_dump_json() + "\n")

    async def events(self, page_id: str) -> list[PageEvent]:
        out: list[PageEvent] = []
        path = self.path_for(page_id)
        if path.exists():
            with open(path) as f:
                for lineno, line in enumerate(f, 1):
                    if not line.strip():
                        continue
                    try:
                        out.append(PageEvent.model_validate_json(line))
                    except ValidationError:
                        logger.warning("Skipping unreadable trace line %s:%d", path, lineno)
        out.extend(self._pending.get(page_id, []))
        return out
