import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from tortoise import Tortoise
from tortoise.contrib.fastapi import tortoise_exception_handlers

from .core.config import REPORT_RUN_TIME, REPORT_SCHEDULER_ENABLED
from .core.database import TORTOISE_ORM
from .core.logging_config import configure_logging
from .core.scheduler import DailyScheduler
from .features.auth.router import router as auth_router
from .features.products.router import router as products_router
from .features.sales.router import router as sales_router
from .features.expenses.router import router as expenses_router
from .features.reports.router import router as reports_router
from .features.reports.job import JOB_NAME, run_scheduled_daily_report

configure_logging()
logger = logging.getLogger("storefront.main")  # This logger will inherit from 'storefront'


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Connects to the database and starts the daily report scheduler on
    startup; stops both on shutdown.
    """
    logger.info("Starting application...")
    await Tortoise.init(config=TORTOISE_ORM)
    logger.info("Tortoise-ORM has been initialized.")

    scheduler = DailyScheduler()
    if REPORT_SCHEDULER_ENABLED:
        scheduler.add_daily_job(JOB_NAME, REPORT_RUN_TIME, run_scheduled_daily_report)
        scheduler.start()
    app.state.scheduler = scheduler

    yield

    await scheduler.stop()
    await Tortoise.close_connections()
    logger.info("Tortoise-ORM connections have been closed.")


app = FastAPI(
    title="Storefront POS API",
    description="Inventory, sales, expenses and daily reports for a clothing store.",
    version="0.1.0",
    exception_handlers=tortoise_exception_handlers(),
    lifespan=lifespan,
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error."})


@app.get("/api/v1/ping")
async def ping():
    return {"message": "pong"}


app.include_router(auth_router, prefix="/api/v1")
app.include_router(products_router, prefix="/api/v1")
app.include_router(sales_router, prefix="/api/v1")
app.include_router(expenses_router, prefix="/api/v1")
app.include_router(reports_router, prefix="/api/v1")
