"""FastAPI dependencies -- overridden in tests via ``app.dependency_overrides``."""

from __future__ import annotations

from fastapi import HTTPException

from backend.database import async_session
from data.sqlalchemy_repository_impl import SQLAlchemyComplianceRepository
from domain.compliance_repository import ComplianceRepository
from services.esg_explainer import ESGExplainer, ExplainerNotConfigured

_repository = SQLAlchemyComplianceRepository(async_session)


def get_repository() -> ComplianceRepository:
    return _repository


def get_explainer() -> ESGExplainer:
    try:
        return ESGExplainer()
    except ExplainerNotConfigured as e:
        raise HTTPException(status_code=500, detail=str(e))
