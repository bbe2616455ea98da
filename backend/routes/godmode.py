"""GodMode endpoints -- portfolio statistics and the scheme mindmap."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from backend.deps import get_repository
from backend.schemas import GodModeStats, MindmapResponse, RelationIn, RelationOut
from domain.compliance_repository import ComplianceRepository, NotFoundError
from scoring.evaluator import evaluate
from services.mindmap import build_graph, layout

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/godmode", tags=["godmode"])


@router.get("/stats", response_model=GodModeStats)
async def godmode_stats(repo: ComplianceRepository = Depends(get_repository)):
    companies = await repo.list_companies()
    schemes = await repo.list_schemes()
    relations = await repo.list_relations()
    evidence = await repo.list_evidence()

    # "At risk": at least one mandatory obligation applies to the company
    at_risk = sum(
        1 for company in companies if any(s.mandatory for s in evaluate(company, schemes))
    )

    return GodModeStats(
        total_companies=len(companies),
        total_schemes=len(schemes),
        mandatory_schemes=sum(1 for s in schemes if s.mandatory),
        total_relations=len(relations),
        total_evidence=len(evidence),
        companies_at_risk=at_risk,
    )


@router.get("/mindmap", response_model=MindmapResponse)
async def mindmap(
    positions: bool = True,
    cluster: bool = True,
    repo: ComplianceRepository = Depends(get_repository),
):
    """Scheme graph; ``positions=false`` skips the server-side spring layout."""
    graph = build_graph(await repo.list_schemes(), await repo.list_relations())
    if positions:
        graph = layout(graph, cluster=cluster)
    logger.debug("Mindmap: %d nodes, %d links", len(graph.nodes), len(graph.links))
    return graph


@router.post("/relations", response_model=RelationOut, status_code=201)
async def create_relation(data: RelationIn, repo: ComplianceRepository = Depends(get_repository)):
    try:
        return await repo.create_relation(data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
