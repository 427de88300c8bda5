"""
itemstore.api  ──  HTTP list view over one RecordStore.

    from itemstore.api import create_app

    app = create_app(RecordStore(in_memory=True))
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel

from .config import Settings, get_settings
from .manager import RecordStore


class DeleteRequest(BaseModel):
    offsets: List[int]


def _store(request: Request) -> RecordStore:
    return request.app.state.store


def create_app(
    store: Optional[RecordStore] = None,
    *,
    settings: Optional[Settings] = None,
    **fastapi_kwargs: Any,
) -> FastAPI:
    """
    Build the app; without an explicit store one is opened from settings.
    """
    if store is None:
        settings = settings or get_settings()
        store = RecordStore(in_memory=settings.in_memory, settings=settings)

    app = FastAPI(title="itemstore", **fastapi_kwargs)
    app.state.store = store

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "running"}

    @app.get("/items")
    def list_items(request: Request) -> Dict[str, Any]:
        return _store(request).snapshot()

    @app.post("/items", status_code=201)
    def add_item(request: Request) -> Dict[str, Any]:
        store = _store(request)
        store.create_record()
        return store.snapshot()

    @app.post("/items/delete")
    def delete_items(body: DeleteRequest, request: Request) -> Dict[str, Any]:
        store = _store(request)
        try:
            store.delete_records(body.offsets)
        except IndexError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return store.snapshot()

    @app.delete("/error")
    def dismiss_error(request: Request) -> Dict[str, Any]:
        store = _store(request)
        store.clear_error()
        return store.snapshot()

    return app
