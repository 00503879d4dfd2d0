from contextlib import asynccontextmanager
from fastapi import FastAPI
from app.core.config import settings
from app.db.db import connect_async, init_db
from app.api.users import router as users_router
import logging
import sys

# Logger setup, attached to the app package so route and service loggers share it
logger = logging.getLogger("app")
logger.setLevel(settings.LOG_LEVEL)

# Stream handler for uvicorn console
stream_handler = logging.StreamHandler(sys.stdout)
log_formatter = logging.Formatter("%(asctime)s [%(processName)s: %(process)d] [%(threadName)s: %(thread)d] [%(levelname)s] %(name)s: %(message)s")
stream_handler.setFormatter(log_formatter)
logger.addHandler(stream_handler)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("====== CREATING USERS TABLE IF MISSING ======")
    conn = await connect_async()
    try:
        await init_db(conn)
    finally:
        await conn.close()
    yield

# Fast API app setup
app = FastAPI(title=settings.APP_TITLE, lifespan=lifespan)
app.include_router(users_router)
