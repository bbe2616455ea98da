"""Scheme catalog endpoints -- search, facets, detail, upsert."""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.deps import get_repository
from backend.schemas import SchemeFacets, SchemeIn, SchemeOut
from domain.compliance_repository import ComplianceRepository
from services.catalog import facets, filter_schemes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schemes", tags=["schemes"])


@router.get("/", response_model=list[SchemeOut])
async def list_schemes(
    q: str = "",
    category: list[str] = Query(default=[]),
    tag: list[str] = Query(default=[]),
    mandatory: Literal["all", "true", "false"] = "all",
    repo: ComplianceRepository = Depends(get_repository),
):
    """Catalog ordered by category then title, narrowed by the given filters."""
    schemes = await repo.list_schemes()
    return filter_schemes(schemes, q=q, categories=category, tags=tag, mandatory=mandatory)


@router.get("/facets", response_model=SchemeFacets)
async def scheme_facets(repo: ComplianceRepository = Depends(get_repository)):
    return facets(await repo.list_schemes())


@router.get("/{code}", response_model=SchemeOut)
async def get_scheme(code: str, repo: ComplianceRepository = Depends(get_repository)):
    scheme = await repo.get_scheme(code)
    if scheme is None:
        raise HTTPException(status_code=404, detail=f"Scheme '{code}' not found")
    return scheme


@router.put("/{code}", response_model=SchemeOut)
async def upsert_scheme(
    code: str,
    data: SchemeIn,
    repo: ComplianceRepository = Depends(get_repository),
):
    if data.code != code:
        raise HTTPException(status_code=400, detail="Scheme code in body does not match URL")
    scheme = await repo.upsert_scheme(data)
    logger.info("Scheme upserted: %s", scheme.code)
    return scheme
