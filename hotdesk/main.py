import asyncio
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from hotdesk.db.init_db import create_database
from hotdesk.db.base import Base
from hotdesk.db.session import engine
from hotdesk.core.config import settings
from hotdesk.core.exceptions import StorageFailure
from hotdesk.api.v1.router import api_router
from hotdesk.services.reaper import LifecycleReaper

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


async def _booking_reaper_loop(reaper: LifecycleReaper, interval: int) -> None:
    """Background task: complete expired hot-desk bookings and free their seats."""
    while True:
        try:
            logger.info("Checking for completed hot-desk bookings...")
            count = await asyncio.to_thread(reaper.sweep)
            if count:
                logger.info("Completed %d expired hot-desk booking(s).", count)
        except Exception:
            logger.exception("Error during hot-desk booking sweep.")
        await asyncio.sleep(interval)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Ensure DB exists and create tables
    create_database()
    Base.metadata.create_all(bind=engine)

    # Run an immediate sweep, then keep running in the background
    reaper_task = None
    if settings.REAPER_ENABLED:
        reaper_task = asyncio.create_task(
            _booking_reaper_loop(LifecycleReaper(), settings.REAPER_INTERVAL_SECONDS)
        )
    app.state.reaper_task = reaper_task
    yield

    # Shutdown: cancel background task
    if reaper_task:
        reaper_task.cancel()
        try:
            await reaper_task
        except asyncio.CancelledError:
            pass


from fastapi.middleware.cors import CORSMiddleware

app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": StorageFailure.default_message},
    )


app.include_router(api_router, prefix=settings.API_V1_STR)

@app.get("/")
def read_root():
    return {"Hello": "Hot-Desk"}
