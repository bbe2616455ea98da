"""
FastAPI application -- ESG Compass API server.

Run locally:
    uvicorn backend.app:app --reload --port 8000

or ``python start.py`` which also prepares the database.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

import config_env
from backend.database import init_db
from backend.deps import get_repository
from backend.routes import companies, esg, evidence, godmode, schemes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialise database schema
    await init_db()

    # Starter catalog on an empty database
    if config_env.SEED_ON_STARTUP:
        try:
            from backend.import_schemes import seed_catalog

            repo = get_repository()
            if await repo.count_schemes() == 0:
                schemes_count, relations_count = await seed_catalog(repo)
                logger.info(
                    "Seeded starter catalog: %d schemes, %d relations",
                    schemes_count, relations_count,
                )
        except Exception as e:
            logger.warning("Failed to seed scheme catalog: %s", e)

    yield


app = FastAPI(
    title="ESG Compass API",
    version="1.0.0",
    description="ESG compliance portal for Indian MSMEs -- companies, scheme catalog, evidence and suggestions",
    lifespan=lifespan,
)

app.include_router(companies.router)
app.include_router(schemes.router)
app.include_router(evidence.router)
app.include_router(godmode.router)
app.include_router(esg.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "llm_configured": bool(config_env.LLM_API_KEY),
    }
