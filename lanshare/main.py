from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from lanshare import __version__
from lanshare.api import create_api_router
from lanshare.api.routers import websocket as websocket_router
from lanshare.core.config import Settings, get_settings
from lanshare.core.container import ApplicationContainer, build_container

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _resolve_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return (PROJECT_ROOT / path).resolve()


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: ApplicationContainer = app.state.container
    await container.start()
    try:
        yield
    finally:
        await container.shutdown()


def create_app(settings: Optional[Settings] = None, container: Optional[ApplicationContainer] = None) -> FastAPI:
    settings = settings or (container.settings if container else get_settings())
    container = container or build_container(settings)

    app = FastAPI(
        title=settings.project_name,
        description="Share files and text with every device on the local network",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_api_router(settings.api_prefix))
    app.include_router(websocket_router.router)

    # built frontend, if present, is served last so it never shadows the API
    static_dir = _resolve_path(settings.static_dir)
    if static_dir.exists():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")

    return app


app = create_app()
