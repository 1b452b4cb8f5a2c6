"""
main.py
-------
Entry point for the Chassis ReConnect inventory API.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Build the FastAPI application with all routers and error handlers.
    - Serve it with uvicorn.
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from config import API_HOST, API_PORT, DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from db.access import Database
from db.connection import ConnectionPool
from db.errors import TransportError
from db.init_db import create_tables
from handlers import (
    admin_handler,
    inventory_handler,
    license_handler,
    lookup_handler,
    server_handler,
    software_handler,
)
from handlers.errors import register_error_handlers
from utils.logger import get_logger

logger = get_logger(__name__)

__version__ = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Open the pool and create the schema on startup, close the pool on shutdown.
    Skipped when the application was built around an existing ``Database``.
    """
    pool: Optional[ConnectionPool] = None
    if app.state.db is None:
        logger.info("Initializing database...")
        pool = ConnectionPool(DATABASE_URL, DB_POOL_MIN, DB_POOL_MAX)
        pool.open()
        app.state.db = Database(pool)
        create_tables(app.state.db)
    logger.info("🚀 Chassis ReConnect API is running.")
    try:
        yield
    finally:
        if pool is not None:
            pool.close()
            app.state.db = None
        logger.info("Chassis ReConnect API stopped.")


def create_app(db: Optional[Database] = None) -> FastAPI:
    """
    Build the application.

    Args:
        db: An already-connected access layer. When None, the lifespan
            creates one from DATABASE_URL.
    """
    app = FastAPI(title="Chassis ReConnect", version=__version__, lifespan=lifespan)
    app.state.db = db

    # ── 1. Error mapping ──────────────────────────────────
    register_error_handlers(app)

    # ── 2. Routers ────────────────────────────────────────
    for router in inventory_handler.routers:
        app.include_router(router)
    app.include_router(software_handler.router)
    app.include_router(license_handler.router)
    app.include_router(server_handler.router)
    app.include_router(lookup_handler.router)
    app.include_router(admin_handler.router)

    # ── 3. Health check ───────────────────────────────────
    @app.get("/health", tags=["health"])
    def health():
        try:
            app.state.db.query_one("SELECT 1 AS ok;")
        except TransportError as e:
            return JSONResponse(
                status_code=503,
                content={"status": "unavailable", "database": "disconnected", "details": e.message},
            )
        return {"status": "ok", "database": "connected"}

    return app


app = create_app()


def main() -> None:
    """Run the API with uvicorn."""
    uvicorn.run("main:app", host=API_HOST, port=API_PORT)


if __name__ == "__main__":
    main()
