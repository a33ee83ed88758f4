import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import CORS_ORIGINS, FRONTEND_DIR, LOG_FILE, LOG_LEVEL
from .database import StorageError
from .logging_setup import setup_logging
from .routers import auth, tasks

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Taskboard API",
    description="Personal task lists with ordered tasks",
    version="1.0.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials="*" not in CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected request body for %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"message": "Invalid request body."})


@app.exception_handler(StorageError)
async def storage_exception_handler(request: Request, exc: StorageError):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# Include routers
app.include_router(auth.router, prefix="/api", tags=["auth"])
app.include_router(tasks.router, prefix="/api", tags=["tasks"])


@app.on_event("startup")
def on_startup():
    setup_logging(LOG_LEVEL, LOG_FILE)
    logger.info("Taskboard API starting, frontend dir %s", FRONTEND_DIR)


@app.get("/health")
def health_check():
    return {"status": "healthy"}


@app.get("/{full_path:path}", include_in_schema=False)
def serve_frontend(full_path: str):
    """Serve the built single-page app; unknown paths get its index page."""
    if full_path == "api" or full_path.startswith("api/"):
        return JSONResponse(status_code=404, content={"message": "Not found."})

    build_dir = Path(FRONTEND_DIR).resolve()
    if full_path:
        candidate = (build_dir / full_path).resolve()
        if candidate.is_file() and build_dir in candidate.parents:
            return FileResponse(candidate)

    index = build_dir / "index.html"
    if index.is_file():
        return FileResponse(index)
    return JSONResponse(status_code=404, content={"message": "Frontend build not found."})
