from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from goat_admin.api.cleanup import router as cleanup_router
from goat_admin.api.goats import router as goats_router
from goat_admin.api.messages import router as messages_router
from goat_admin.api.uploads import router as uploads_router
from goat_admin.api.videos import router as videos_router
from goat_admin.config import configure_logging, get_upload_dir
from goat_admin.database import initialize_database
from goat_admin.errors import register_error_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize logging and the database on startup."""
    configure_logging()
    await initialize_database()
    yield


app = FastAPI(title="Goat Admin", lifespan=lifespan)

register_error_handlers(app)

# Include routers
app.include_router(goats_router)
app.include_router(videos_router)
app.include_router(messages_router)
app.include_router(uploads_router)
app.include_router(cleanup_router)

app.mount(
    "/uploads",
    StaticFiles(directory=get_upload_dir(), check_dir=False),
    name="uploads",
)


@app.get("/")
async def root():
    return {"message": "Goat Admin API"}
