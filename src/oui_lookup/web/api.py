"""
FastAPI Web Server for OUI Vendor Lookup.

Provides a REST API for:
- MAC address vendor lookup
- Forcing a registry update
- Store status
"""

import logging
from typing import Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
import uvicorn

from ..core.config import Config
from ..core.exceptions import OUILookupError
from ..services.lookup_service import LookupService


logger = logging.getLogger(__name__)


# Pydantic models for API
class LookupResponse(BaseModel):
    result: str
    mac: Optional[str] = None
    company_id: Optional[str] = None
    organization: Optional[str] = None
    address: Optional[str] = None


class UpdateResponse(BaseModel):
    status: str
    records: int


class StatusResponse(BaseModel):
    loaded: bool
    records: int
    loaded_at: Optional[str] = None
    skipped_entries: int = 0
    registry_url: str
    cache_backend: str


def create_app(config: Optional[Config] = None, service: Optional[LookupService] = None) -> FastAPI:
    """Create the API application around a lookup service."""
    config = config or Config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        if getattr(app.state, "service", None) is None:
            app.state.service = LookupService.from_config(config)
        logger.info("OUI lookup API started")
        yield
        logger.info("OUI lookup API stopped")

    app = FastAPI(
        title="OUI Vendor Lookup",
        description="Resolve MAC addresses to IEEE registered vendors",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/lookup/{mac}", response_model=LookupResponse, response_model_exclude_none=True)
    def lookup(mac: str, request: Request):
        """Look up the vendor of a MAC address."""
        service: LookupService = request.app.state.service
        try:
            result = service.lookup(mac)
        except OUILookupError as e:
            logger.error(f"Lookup of {mac} failed: {e}")
            raise HTTPException(status_code=503, detail=str(e))
        return LookupResponse(**result.to_dict())

    @app.post("/api/update", response_model=UpdateResponse)
    def update(request: Request):
        """Download and install the latest registry."""
        service: LookupService = request.app.state.service
        try:
            count = service.update()
        except OUILookupError as e:
            logger.error(f"Registry update failed: {e}")
            raise HTTPException(status_code=502, detail=str(e))
        return UpdateResponse(status="ok", records=count)

    @app.get("/api/status", response_model=StatusResponse)
    def status(request: Request):
        """Report what the vendor store currently holds."""
        service: LookupService = request.app.state.service
        store = service.store
        return StatusResponse(
            loaded=store.is_loaded(),
            records=len(store),
            loaded_at=store.loaded_at.isoformat() if store.loaded_at else None,
            skipped_entries=service.skipped_entries,
            registry_url=request.app.state.config.registry.url,
            cache_backend=request.app.state.config.cache.backend,
        )

    return app


def start_web_server(
    host: str = "0.0.0.0",
    port: int = 8000,
    app_config: Optional[Config] = None,
):
    """Start the web server."""
    app = create_app(app_config)

    logger.info(f"Starting web server on http://{host}:{port}")

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level="info",
    )
