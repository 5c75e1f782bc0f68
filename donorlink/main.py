# donorlink/main.py
"""
Application entrypoint with storage lifecycle management.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from donorlink.config import settings
from donorlink.dependencies import get_record_store
from donorlink.infrastructure.observability.logging import get_logger, log_request, setup_logging
from donorlink.routes import auth, donors, health, messages, people
from donorlink.services.seed import seed_demo_data
from donorlink.storage.change_bus import RedisChangeBus
from donorlink.storage.redis_store import RedisStore

# Setup logging before creating the app
setup_logging(log_level=settings.LOG_LEVEL, environment=settings.environment)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown with proper resource management."""

    logger.info(
        "Application starting",
        environment=settings.environment,
        debug=settings.debug,
        storage_backend=settings.STORAGE_BACKEND,
    )

    record_store = get_record_store()
    startup_tasks = []

    try:
        if isinstance(record_store.store, RedisStore):
            logger.info("Initializing Redis connection")
            await record_store.store.initialize()
            startup_tasks.append("redis")

        if isinstance(record_store.change_bus, RedisChangeBus):
            await record_store.change_bus.start()
            startup_tasks.append("change_bus")

        if settings.should_seed_demo_data():
            await seed_demo_data(record_store)

        logger.info("All services initialized successfully", services=startup_tasks)

    except Exception as e:
        logger.error("Failed to initialize services", error=str(e), completed_tasks=startup_tasks)
        await _shutdown(record_store, startup_tasks)
        raise

    yield

    logger.info("Application shutting down")
    await _shutdown(record_store, startup_tasks)


async def _shutdown(record_store, started: list[str]) -> None:
    shutdown_errors = []

    if "change_bus" in started:
        try:
            await record_store.change_bus.close()
        except Exception as e:
            logger.error("Error closing change bus", error=str(e))
            shutdown_errors.append(f"ChangeBus: {e}")

    if "redis" in started:
        try:
            await record_store.store.close()
        except Exception as e:
            logger.error("Error closing Redis", error=str(e))
            shutdown_errors.append(f"Redis: {e}")

    if shutdown_errors:
        logger.warning("Some services had shutdown errors", errors=shutdown_errors)
    else:
        logger.info("All services closed successfully")


app = FastAPI(
    title="DonorLink",
    description="Blood donor matching and messaging",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(people.router)
app.include_router(donors.router)
app.include_router(messages.router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log HTTP requests with timing."""
    start_time = time.time()
    response = await call_next(request)
    process_time = (time.time() - start_time) * 1000

    log_request(request.method, request.url.path, response.status_code, round(process_time, 2))
    return response


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
