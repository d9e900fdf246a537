"""
Production FastAPI Application

    uvicorn cinema_booking.main:app
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from cinema_booking.platform.app_factory import create_app
from cinema_booking.platform.config.di import container
from cinema_booking.platform.config.wire_modules import WIRE_MODULES
from cinema_booking.platform.database.orm_db_setting import dispose_engine, get_engine
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('🚀 [Cinema Booking] Starting up...')

    tracing = TracingConfig(service_name='cinema-booking-service')
    tracing.setup()
    Logger.base.info('📊 [Cinema Booking] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Cinema Booking] Dependency injection wired')

    tracing.instrument_sqlalchemy(engine=get_engine())
    Logger.base.info('🗄️  [Cinema Booking] Database engine ready + instrumented')

    yield

    Logger.base.info('🛑 [Cinema Booking] Shutting down...')
    await dispose_engine()
    tracing.shutdown()
    container.unwire()
    Logger.base.info('👋 [Cinema Booking] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    return RedirectResponse(url='/docs')
