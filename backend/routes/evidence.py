"""Evidence, uploaded-file metadata and frameworks."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from backend.deps import get_repository
from backend.schemas import (
    EvidenceIn,
    EvidenceOut,
    FileIn,
    FileOut,
    FrameworkIn,
    FrameworkOut,
)
from domain.compliance_repository import ComplianceRepository, NotFoundError

router = APIRouter(tags=["evidence"])


@router.get("/files", response_model=list[FileOut])
async def list_files(repo: ComplianceRepository = Depends(get_repository)):
    return await repo.list_files()


@router.post("/files", response_model=FileOut, status_code=201)
async def create_file(data: FileIn, repo: ComplianceRepository = Depends(get_repository)):
    return await repo.create_file(data)


@router.get("/evidence", response_model=list[EvidenceOut])
async def list_evidence(repo: ComplianceRepository = Depends(get_repository)):
    return await repo.list_evidence()


@router.post("/evidence", response_model=EvidenceOut, status_code=201)
async def create_evidence(data: EvidenceIn, repo: ComplianceRepository = Depends(get_repository)):
    try:
        return await repo.create_evidence(data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/frameworks", response_model=list[FrameworkOut])
async def list_frameworks(repo: ComplianceRepository = Depends(get_repository)):
    return await repo.list_frameworks()


@router.post("/frameworks", response_model=FrameworkOut, status_code=201)
async def create_framework(data: FrameworkIn, repo: ComplianceRepository = Depends(get_repository)):
    return await repo.create_framework(data)
