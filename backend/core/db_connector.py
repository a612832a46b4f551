"""
Database connector — SQLAlchemy engine factory for MySQL and MSSQL.
Engines are owned by the API connection registry; introspection only borrows
connections checked out from them.
"""
import logging
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from config import settings
from models.connection import ConnectionRequest

logger = logging.getLogger(__name__)

_CONNECT_ARGS = {
    "mysql": lambda timeout: {"connect_timeout": timeout},
    "mssql": lambda timeout: {"timeout": timeout},
}


def create_engine_from_request(req: ConnectionRequest) -> Engine:
    """Build and test a SQLAlchemy engine from a ConnectionRequest."""
    url = req.get_sqlalchemy_url()
    try:
        engine = create_engine(
            url,
            pool_pre_ping=True,
            pool_size=10,
            connect_args=_CONNECT_ARGS[req.type](settings.DB_CONNECT_TIMEOUT_SECONDS),
        )
    except (SQLAlchemyError, ImportError) as e:
        raise ValueError(f"{req.type.upper()} driver unavailable: {e}") from e
    # Validate the connection immediately
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        engine.dispose()
        raise ValueError(f"{req.type.upper()} connection failed: {e}") from e
    logger.info("Connected to %s database %s on %s:%s", req.type, req.database, req.host, req.effective_port)
    return engine

