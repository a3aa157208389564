from __future__ import annotations

from datetime import UTC, datetime

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from movie_elo.core.config import Settings, get_settings
from movie_elo.runtime.rating_store import RatingStore
from movie_elo.web.routes import build_web_router


def create_app(settings: Settings | None = None, store: RatingStore | None = None) -> FastAPI:
    settings = settings or get_settings()
    store = store if store is not None else RatingStore()

    app = FastAPI(title="Movie ELO", version="0.1.0")
    app.state.store = store
    app.include_router(build_web_router(settings=settings, store=store))

    @app.get("/", include_in_schema=False)
    def root() -> RedirectResponse:
        return RedirectResponse(url="/web")

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "time": datetime.now(UTC).isoformat()}

    return app
