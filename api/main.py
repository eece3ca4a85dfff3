#!/usr/bin/env python3
import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from engine.album_resolver import build_default_resolver

APP_NAME = "vinylcard API"


class ImageModel(BaseModel):
    url: str
    width: int | None = None
    height: int | None = None


class AlbumResultResponse(BaseModel):
    displayText: str
    imageUrl: str | None = None
    query: str
    thumbnail: ImageModel | None = None


def _setup_logging():
    level_name = os.environ.get("VINYLCARD_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    _setup_logging()
    app.state.resolver = build_default_resolver()
    logging.info("%s started", APP_NAME)
    yield


app = FastAPI(title=APP_NAME, lifespan=lifespan)


@app.get("/api/health")
async def health():
    return {"ok": True}


@app.get("/api/albums/resolve", response_model=AlbumResultResponse)
async def resolve_album(q: str = Query("", description="Free-text album query")):
    if not (q or "").strip():
        raise HTTPException(status_code=400, detail="q is required")
    resolver = getattr(app.state, "resolver", None)
    if resolver is None:
        resolver = build_default_resolver()
        app.state.resolver = resolver
    record = await resolver.resolve(q)
    return record.to_dict()


if __name__ == "__main__":
    uvicorn.run(
        app,
        host=os.environ.get("VINYLCARD_HOST", "127.0.0.1"),
        port=int(os.environ.get("VINYLCARD_PORT", "8000")),
    )
