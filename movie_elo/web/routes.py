from __future__ import annotations

import logging
import threading

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse, Response

from movie_elo.core.config import Settings
from movie_elo.core.csv_io import CsvImportError, export_filename, export_movies_csv, parse_movies_csv
from movie_elo.core.models import (
    ImportRequest,
    ImportResponse,
    StoreStateResponse,
    UndoResponse,
    VoteRequest,
    VoteResponse,
)
from movie_elo.runtime.rating_store import NoActiveMatchupError, RatingStore
from movie_elo.web.page_arena import arena_js, arena_section_html
from movie_elo.web.page_shell import head_html, header_html, init_js, shared_js


logger = logging.getLogger(__name__)


def build_web_router(*, settings: Settings, store: RatingStore) -> APIRouter:
    router = APIRouter()
    lock = threading.Lock()
    # Rating header of the last import, reused on export so a round trip keeps it.
    columns = {"rating": settings.rating_column}

    def _state() -> StoreStateResponse:
        matchup = store.current_matchup
        return StoreStateResponse(
            items=store.ranked_items(),
            matchup=list(matchup) if matchup else None,
            can_undo=store.can_undo,
            can_compare=store.can_compare,
            history_size=len(store.history),
            k_factor=settings.default_k_factor,
        )

    @router.get("/web", response_class=HTMLResponse)
    @router.get("/web/", response_class=HTMLResponse)
    def web_home() -> HTMLResponse:
        return HTMLResponse(_web_page_html())

    @router.get("/api/web/state", response_model=StoreStateResponse)
    def web_state() -> StoreStateResponse:
        with lock:
            return _state()

    @router.post("/api/web/import", response_model=ImportResponse)
    def web_import(payload: ImportRequest) -> ImportResponse:
        title_column = payload.title_column or settings.title_column
        rating_column = payload.rating_column or settings.rating_column
        try:
            records = parse_movies_csv(payload.csv_text, title_column=title_column, rating_column=rating_column)
        except CsvImportError as exc:
            logger.warning("Rejected CSV import: %s", exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        with lock:
            items = store.load(records)
            columns["rating"] = rating_column
            return ImportResponse(imported=len(items), state=_state())

    @router.post("/api/web/next", response_model=StoreStateResponse)
    def web_next() -> StoreStateResponse:
        with lock:
            store.next_matchup()
            return _state()

    @router.post("/api/web/vote", response_model=VoteResponse)
    def web_vote(payload: VoteRequest) -> VoteResponse:
        k_factor = payload.k_factor if payload.k_factor is not None else settings.default_k_factor
        with lock:
            try:
                entry = store.commit_comparison(payload.result, k_factor)
            except NoActiveMatchupError as exc:
                raise HTTPException(status_code=409, detail=str(exc)) from exc
            return VoteResponse(entry=entry, state=_state())

    @router.post("/api/web/skip", response_model=StoreStateResponse)
    def web_skip() -> StoreStateResponse:
        with lock:
            store.skip()
            return _state()

    @router.post("/api/web/undo", response_model=UndoResponse)
    def web_undo() -> UndoResponse:
        with lock:
            entry = store.undo()
            return UndoResponse(entry=entry, state=_state())

    @router.post("/api/web/reset", response_model=StoreStateResponse)
    def web_reset() -> StoreStateResponse:
        with lock:
            store.reset_all()
            return _state()

    @router.get("/api/web/export")
    def web_export() -> Response:
        with lock:
            rows = store.export_rows()
            rating_column = columns["rating"]
        if not rows:
            raise HTTPException(status_code=404, detail="Nothing to export. Import a CSV first.")
        content = export_movies_csv(rows, rating_column=rating_column)
        return Response(
            content=content,
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
        )

    return router


def _web_page_html() -> str:
    return (
        '<!doctype html>\n<html lang="en" class="dark">\n  <head>\n'
        + head_html()
        + "\n  </head>\n"
        + '  <body class="bg-g-bg text-g-text font-sans text-sm leading-relaxed min-h-screen transition-colors duration-200">\n'
        + '    <div class="max-w-[1200px] mx-auto px-5 py-4">\n'
        + header_html()
        + "\n"
        + arena_section_html()
        + "\n"
        + "    </div>\n"
        + '    <div id="toast-container" class="fixed bottom-5 right-5 z-50 flex flex-col gap-2 pointer-events-none"></div>\n'
        + "    <script>\n"
        + shared_js()
        + "\n"
        + arena_js()
        + "\n"
        + init_js()
        + "\n"
        + "    </script>\n"
        + "  </body>\n</html>\n"
    )
