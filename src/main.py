"""
Production FastAPI Application

HTTP API plus the attendance auto-cancel worker.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import dispose_engine, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.platform.state.kvrocks_client import kvrocks_client


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Seat Scheduling] Starting up...')

    tracing = TracingConfig(service_name='seat-scheduling')
    tracing.setup()
    Logger.base.info('📊 [Seat Scheduling] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Seat Scheduling] Dependency injection wired')

    tracing.instrument_sqlalchemy(engine=get_engine())
    tracing.instrument_redis()
    Logger.base.info('🗄️  [Seat Scheduling] Database engine ready + instrumented')

    # Fail fast: the lock backend and the deadline store both live in Kvrocks
    await kvrocks_client.initialize()
    Logger.base.info('📡 [Seat Scheduling] Kvrocks initialized')

    async with anyio.create_task_group() as tg:
        scheduler = container.attendance_scheduler()
        await scheduler.start(task_group=tg)
        Logger.base.info('✅ [Seat Scheduling] Ready to serve requests')

        yield

        Logger.base.info('🛑 [Seat Scheduling] Shutting down...')
        scheduler.stop()
        tg.cancel_scope.cancel()

    await dispose_engine()
    Logger.base.info('🗄️  [Seat Scheduling] Database engine disposed')

    await kvrocks_client.disconnect()
    Logger.base.info('📡 [Seat Scheduling] Kvrocks disconnected')

    tracing.shutdown()
    container.unwire()

    Logger.base.info('👋 [Seat Scheduling] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
