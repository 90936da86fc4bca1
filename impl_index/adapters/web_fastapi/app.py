"""FastAPI adapter — one page store, one bridge per page, no business logic."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from impl_index import load_settings
from impl_index.viewer.page import InMemoryPageStore, PageStore
from impl_index.tracing.interface import TraceCollector, summarize
from impl_index.tracing.jsonl_tracer import JSONLTraceCollector

logger = logging.getLogger(__name__)


class FragmentBody(BaseModel):
    implementors: dict[str, list[str]] = Field(default_factory=dict)


class ViewerBody(BaseModel):
    current_crate: str | None = None


def create_app(
    page_store: PageStore | None = None,
    trace_collector: TraceCollector | None = None,
) -> FastAPI:
    settings = load_settings()
    pages = page_store if page_store is not None else InMemoryPageStore()
    tracer = trace_collector if trace_collector is not None else JSONLTraceCollector(settings.trace_dir)
    app = FastAPI(title="impl-index API", version="0.1.0")

    @app.post("/pages/{page_id}/fragments")
    async def deposit_fragment(page_id: str, body: FragmentBody) -> JSONResponse:
        page = await pages.get_or_create(page_id)
        outcome = page.bridge.deposit(body.implementors)
        await pages.save(page)
        await tracer.record_deposit(page_id, outcome, list(body.implementors))
        await tracer.flush(page_id)
        return JSONResponse({"outcome": outcome.value})

    @app.post("/pages/{page_id}/viewer")
    async def start_viewer(page_id: str, body: ViewerBody | None = None) -> JSONResponse:
        page = await pages.get_or_create(page_id)
        if page.index is not None:
            raise HTTPException(status_code=409, detail=f"viewer already started for page '{page_id}'")
        current_crate = settings.current_crate
        if body is not None and "current_crate" in body.model_fields_set:
            current_crate = body.current_crate
        picked_up = page.start_viewer(current_crate=current_crate)
        await pages.save(page)
        await tracer.record_register(page_id, picked_up)
        await tracer.flush(page_id)
        return JSONResponse({"picked_up_pending": picked_up})

    @app.get("/pages/{page_id}/implementors")
    async def implementors(page_id: str) -> JSONResponse:
        page = await pages.get(page_id)
        if page is None or page.index is None:
            raise HTTPException(status_code=404, detail=f"no viewer on page '{page_id}'")
        return JSONResponse({
            "contributions": page.index.contribution_count,
            "entries": [e.model_dump() for e in page.index.entries],
        })

    @app.get("/pages/{page_id}/trace")
    async def trace(page_id: str) -> JSONResponse:
        events = await tracer.events(page_id)
        if not events:
            raise HTTPException(status_code=404, detail=f"no trace for page '{page_id}'")
        summary = summarize(page_id, events)
        return JSONResponse({
            "summary": summary.model_dump(),
            "events": [e.model_dump(mode="json") for e in events],
        })

    @app.get("/health")
    async def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    return app


def serve() -> None:
    """Entry-point for ``impl-index-web`` console script."""
    import uvicorn

    uvicorn.run(
        "impl_index.adapters.web_fastapi.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        log_level="info",
    )
