import os, sys
from contextlib import asynccontextmanager

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.storage.auth_manager import AuthManager
from core.storage.exceptions import StorageError
from core.storage.file_manager import FileManager

from . import config
from .auth import router as auth_router
from .dependencies import NotAuthenticated
from .files import router as files_router
from .logutil import get_logger

logger = get_logger("fileserver", file_basename="server")


def create_app(data_dir: str | None = None) -> FastAPI:
    data_dir = os.path.abspath(data_dir or config.DATA_DIR)
    files_dir = os.path.join(data_dir, config.FILES_DIR_NAME)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        os.makedirs(files_dir, exist_ok=True)
        app.state.auth.connect()
        app.state.auth.ensure_admin()
        logger.info("server.ready", extra={"data_dir": data_dir})
        yield

    app = FastAPI(title="CloudFiles API", version="1.0", lifespan=lifespan)
    app.state.data_dir = data_dir
    app.state.auth = AuthManager(os.path.join(data_dir, config.USERS_DB_NAME))
    app.state.files = FileManager(files_dir)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(NotAuthenticated)
    def _not_authenticated(request: Request, exc: NotAuthenticated):
        logger.debug("auth.reject", extra={"reason": exc.reason, "route": request.url.path})
        return JSONResponse(status_code=401, content={"error": "Not authenticated"})

    @app.exception_handler(StorageError)
    def _storage_error(request: Request, exc: StorageError):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})

    @app.exception_handler(OSError)
    def _os_error(request: Request, exc: OSError):
        logger.exception("server.os_error", extra={"route": request.url.path})
        return JSONResponse(status_code=500, content={"error": exc.strerror or str(exc)})

    # Routers
    app.include_router(auth_router, prefix="/api", tags=["auth"])
    app.include_router(files_router, prefix="/api/files", tags=["files"])
    return app


app = create_app()


def run():
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
