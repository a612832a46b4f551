"""
Developer Panel — CRUD admin generator for MySQL and MSSQL tables.
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import health, db, table_config, generator
from config import settings

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger("devpanel")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Developer panel starting up…")
    yield
    db.dispose_all()
    logger.info("Developer panel shutting down.")


# ── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="Developer Panel Backend API",
    description="Introspect MySQL/MSSQL tables and generate CRUD admin panels.",
    version="1.0.0",
    lifespan=lifespan,
)

# ── CORS ──────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ───────────────────────────────────────────────────────────────────
app.include_router(health.router,       prefix="/api")
app.include_router(db.router,           prefix="/api")
app.include_router(table_config.router, prefix="/api")
app.include_router(generator.router,    prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.API_HOST, port=settings.API_PORT)
