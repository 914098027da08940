import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from backend.routes import router
from backend.services import Services, build_services
from storymap.config import Settings

STATIC_DIR = Path(__file__).parent / "static"
ENV_FILE = Path(__file__).parent.parent / ".env"


def create_app(settings: Settings | None = None, services: Services | None = None) -> FastAPI:
    resolved = settings or Settings.from_env(ENV_FILE)
    logging.basicConfig(
        level=resolved.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="StoryMap.ai")
    app.state.settings = resolved
    app.state.services = services or build_services(resolved)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[resolved.client_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router, prefix="/api")

    if STATIC_DIR.exists():
        # Serve the built map client (JS, CSS, etc.)
        app.mount("/assets", StaticFiles(directory=STATIC_DIR / "assets"), name="assets")

        # SPA fallback: all non-API routes serve index.html
        @app.get("/{path:path}")
        async def spa_fallback(path: str):
            return FileResponse(STATIC_DIR / "index.html")

    return app


# Default app instance for uvicorn (settings from the environment / .env)
app = create_app()
