import logging
import os

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from goal_tracker import __version__
from goal_tracker.api import auth, photos, settings as settings_api, subtasks, tasks
from goal_tracker.config import get_settings
from goal_tracker.database import init_db
from goal_tracker.services.upload_service import UPLOAD_URL_PREFIX, get_upload_service

settings = get_settings()

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logging.getLogger("goal_tracker").setLevel(settings.log_level.upper())

# Create FastAPI app
app = FastAPI(
    title="Goal Tracker", description="Track goals, subtasks and photo proof", version=__version__
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router)
app.include_router(settings_api.router)
app.include_router(tasks.router)
app.include_router(subtasks.router)
app.include_router(photos.router)

# Uploaded photos are served read-only
upload_dir = get_upload_service().ensure_upload_dir()
app.mount(UPLOAD_URL_PREFIX.rstrip("/"), StaticFiles(directory=upload_dir), name="uploads")


@app.on_event("startup")
async def startup_event():
    """Initialize database on startup."""
    init_db()


# Static page routes configuration
STATIC_PAGE_ROUTES = {
    auth.AUTH_ERROR_PATH: ("auth-error.html", "Sign-in error page"),
}


def _serve_static_html(filename: str, page_name: str):
    """Serve a static HTML file from the static directory."""
    file_path = os.path.join(os.path.dirname(__file__), "static", filename)
    if os.path.exists(file_path):
        return FileResponse(file_path)
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{page_name} not found")


def _create_page_handler(filename: str, page_name: str):
    """Factory function to create a page handler with captured values."""
    async def page_handler():
        return _serve_static_html(filename, page_name)
    return page_handler


# Register static page routes dynamically
for route, (filename, page_name) in STATIC_PAGE_ROUTES.items():
    handler = _create_page_handler(filename, page_name)
    app.get(route)(handler)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


# Built frontend, mounted last so API routes take precedence
if os.path.isdir(settings.frontend_dist_dir):
    app.mount("/", StaticFiles(directory=settings.frontend_dist_dir, html=True), name="frontend")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("goal_tracker.main:app", host="0.0.0.0", port=3000)
