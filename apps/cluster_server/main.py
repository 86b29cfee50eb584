"""FastAPI server exposing property clustering over HTTP."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .schemas.models import ClusterRequest
from .tools.clusters import cluster_points, resolve_options
from src.cluster import ClusterAssertionError, ClusterOptions

logger = logging.getLogger(__name__)

app = FastAPI(title="Property Cluster Server", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> Dict[str, str]:
    return {"status": "ok"}


def _load_options(profile: Optional[str]) -> ClusterOptions:
    try:
        return ClusterOptions.from_profile(profile)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@app.post("/actions/cluster")
async def cluster_action(request: ClusterRequest) -> Dict[str, Any]:
    options = resolve_options(request, _load_options(request.profile))
    try:
        result = cluster_points(request, options)
    except ClusterAssertionError as exc:
        logger.warning("Clustering rejected: %s", exc)
        raise HTTPException(status_code=422, detail=exc.message) from exc
    return result.model_dump(by_alias=True)


__all__ = ["app"]
