"""Company endpoints -- CRUD plus scheme suggestions for a company."""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from backend.deps import get_repository
from backend.schemas import (
    CompanyIn,
    CompanyOut,
    SuggestionOut,
    SuggestionsResponse,
)
from domain.compliance_repository import ComplianceRepository, NotFoundError
from scoring.evaluator import evaluate
from utils.report_generator import generate_csv, generate_excel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies", tags=["companies"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _validated(data: CompanyIn) -> CompanyIn:
    name = (data.name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Name is required")
    return data.model_copy(update={"name": name})


async def _company_or_404(repo: ComplianceRepository, company_id: str) -> CompanyOut:
    company = await repo.get_company(company_id)
    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")
    return company


@router.get("/", response_model=list[CompanyOut])
async def list_companies(repo: ComplianceRepository = Depends(get_repository)):
    return await repo.list_companies()


@router.post("/", response_model=CompanyOut, status_code=201)
async def create_company(
    data: CompanyIn,
    repo: ComplianceRepository = Depends(get_repository),
):
    return await repo.create_company(_validated(data))


@router.get("/{company_id}", response_model=CompanyOut)
async def get_company(company_id: str, repo: ComplianceRepository = Depends(get_repository)):
    return await _company_or_404(repo, company_id)


@router.put("/{company_id}", response_model=CompanyOut)
async def update_company(
    company_id: str,
    data: CompanyIn,
    repo: ComplianceRepository = Depends(get_repository),
):
    try:
        return await repo.update_company(company_id, _validated(data))
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Company not found")


@router.delete("/{company_id}", status_code=204)
async def delete_company(company_id: str, repo: ComplianceRepository = Depends(get_repository)):
    try:
        await repo.delete_company(company_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Company not found")
    return Response(status_code=204)


@router.get("/{company_id}/suggestions", response_model=SuggestionsResponse)
async def company_suggestions(
    company_id: str,
    repo: ComplianceRepository = Depends(get_repository),
):
    """
    Rank the whole scheme catalog for this company.
    An empty list means no rule matched -- tags like ``goa``, ``producer``
    or the exporter flag usually unlock suggestions.
    """
    company = await _company_or_404(repo, company_id)
    schemes = await repo.list_schemes()
    suggestions = evaluate(company, schemes)
    logger.info(
        "Suggestions for %s: %d of %d schemes", company.id, len(suggestions), len(schemes)
    )
    return SuggestionsResponse(
        company=company,
        suggestions=[
            SuggestionOut(scheme=s.scheme, reason=s.reason, mandatory=s.mandatory, score=s.score)
            for s in suggestions
        ],
    )


@router.get("/{company_id}/suggestions/export")
async def export_suggestions(
    company_id: str,
    format: Literal["csv", "xlsx"] = Query(default="csv"),
    repo: ComplianceRepository = Depends(get_repository),
):
    company = await _company_or_404(repo, company_id)
    suggestions = evaluate(company, await repo.list_schemes())
    basename = f"suggestions_{company.id}"

    if format == "xlsx":
        content = generate_excel(suggestions).getvalue()
        media_type = XLSX_MEDIA_TYPE
    else:
        content = generate_csv(suggestions)
        media_type = "text/csv; charset=utf-8"

    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{basename}.{format}"'},
    )
