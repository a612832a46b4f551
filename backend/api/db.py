"""/api/db — connect to MySQL/MSSQL, list tables, introspect table schemas."""
import logging
import time
from dataclasses import dataclass
from typing import Optional

from fastapi import APIRouter, HTTPException
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from core.db_connector import create_engine_from_request
from core.errors import ConnectionUnavailable, SchemaFetchFailed
from core.introspector import introspect, list_tables
from models.connection import ConnectionRequest, ConnectionResponse

router = APIRouter(prefix="/db")
logger = logging.getLogger(__name__)


@dataclass
class RegisteredConnection:
    request: ConnectionRequest
    engine: Engine


# In-memory registry: connectionId → engine (one pool per connect call)
_connection_registry: dict[str, RegisteredConnection] = {}


def get_connection(connection_id: str) -> RegisteredConnection:
    if connection_id not in _connection_registry:
        raise HTTPException(404, detail="Connection not found. Please reconnect.")
    return _connection_registry[connection_id]


def list_connection_ids() -> list[str]:
    return list(_connection_registry.keys())


def dispose_all() -> None:
    for connection_id, reg in list(_connection_registry.items()):
        reg.engine.dispose()
        del _connection_registry[connection_id]
    logger.info("Disposed all registered connections")


@router.post("/connect", response_model=ConnectionResponse)
def connect(req: ConnectionRequest):
    try:
        engine = create_engine_from_request(req)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    connection_id = f"{req.type}_{req.host}_{req.database}_{int(time.time() * 1000)}"
    _connection_registry[connection_id] = RegisteredConnection(request=req, engine=engine)
    label = "MySQL" if req.type == "mysql" else "MSSQL"
    return ConnectionResponse(connectionId=connection_id, message=f"{label} connection successful")


@router.get("/{connection_id}/tables")
def get_tables(connection_id: str):
    reg = get_connection(connection_id)
    try:
        with reg.engine.connect() as conn:
            tables = list_tables(conn, reg.request.type, reg.request.database)
    except (ConnectionUnavailable, SchemaFetchFailed, SQLAlchemyError) as e:
        logger.exception("Failed to fetch tables for %s", connection_id)
        raise HTTPException(500, detail=f"Failed to fetch tables: {e}")
    return {"success": True, "tables": tables}


@router.get("/{connection_id}/tables/{table_name}/schema")
def get_table_schema(connection_id: str, table_name: str, schema: Optional[str] = None):
    reg = get_connection(connection_id)
    try:
        with reg.engine.connect() as conn:
            table_schema = introspect(conn, reg.request.type, reg.request.database, table_name, schema)
    except (ConnectionUnavailable, SchemaFetchFailed, SQLAlchemyError) as e:
        logger.exception("Failed to fetch schema for %s", table_name)
        raise HTTPException(500, detail=str(e))

    # An empty column set is indistinguishable from a missing table at the catalog level
    if table_schema.is_empty:
        raise HTTPException(404, detail=f"Table '{table_name}' not found or has no columns")

    return {"success": True, "table": table_name, "fields": table_schema.to_json()["fields"]}


@router.delete("/{connection_id}")
def disconnect(connection_id: str):
    reg = get_connection(connection_id)
    reg.engine.dispose()
    del _connection_registry[connection_id]
    return {"success": True, "message": "Disconnected successfully"}
