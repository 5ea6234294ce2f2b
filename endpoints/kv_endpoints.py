# kv_endpoints.py
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel

from localdb import LocalFileDatabase
from settings import get_settings

router = APIRouter(prefix="/kv", tags=["kv"])
logger = logging.getLogger(__name__)

SETTINGS = get_settings()
DEBUG_LOG_REQUESTS = SETTINGS.debug_log_requests


class PutValueRequest(BaseModel):
    # Files: the payload string. Settings: any JSON value. Operations: a JSON-encoded record.
    value: Any = ""
    metadata: dict[str, Any] | None = None


def get_db(request: Request) -> LocalFileDatabase:
    return request.app.state.db


def _log_request(action: str, key: str) -> None:
    if DEBUG_LOG_REQUESTS:
        logger.info("KV REQUEST: %s key=%s", action, key)


@router.get("/keys")
async def list_keys(
    prefix: str = "",
    limit: int | None = Query(default=None, ge=0),
    cursor: str | None = None,
    processed: bool | None = None,
    db: LocalFileDatabase = Depends(get_db),
):
    _log_request("list", prefix)
    result = await db.list(prefix=prefix, limit=limit, cursor=cursor, processed=processed)
    return result.model_dump(mode="json")


@router.get("/values/{key:path}")
async def get_value(key: str, db: LocalFileDatabase = Depends(get_db)):
    _log_request("get", key)
    value = await db.get(key)
    if value is None:
        raise HTTPException(status_code=404, detail="key not found")
    return {"value": value}


@router.get("/metadata/{key:path}")
async def get_value_with_metadata(key: str, db: LocalFileDatabase = Depends(get_db)):
    _log_request("get_with_metadata", key)
    result = await db.get_with_metadata(key)
    if result is None:
        raise HTTPException(status_code=404, detail="key not found")
    return result.model_dump(mode="json")


@router.put("/values/{key:path}")
async def put_value(key: str, body: PutValueRequest, db: LocalFileDatabase = Depends(get_db)):
    _log_request("put", key)
    try:
        result = await db.put(key, body.value, metadata=body.metadata)
    except ValueError as e:
        logger.info("KV PUT: rejected payload for %s: %r", key, e)
        raise HTTPException(status_code=400, detail=f"invalid value: {e}") from e
    return result.model_dump(mode="json")


@router.delete("/values/{key:path}")
async def delete_value(key: str, db: LocalFileDatabase = Depends(get_db)):
    _log_request("delete", key)
    result = await db.delete(key)
    return result.model_dump(mode="json")
