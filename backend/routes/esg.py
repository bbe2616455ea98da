"""ESG news explainer endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from backend.deps import get_explainer
from backend.schemas import ExplainRequest, ExplainResponse
from services.esg_explainer import ESGExplainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/esg", tags=["esg"])


@router.post("/explain", response_model=ExplainResponse)
def explain(req: ExplainRequest, explainer: ESGExplainer = Depends(get_explainer)):
    # sync handler: FastAPI runs it in the threadpool around the blocking OpenAI call
    if not req.title and not req.summary:
        raise HTTPException(status_code=400, detail="Provide at least a title or summary")
    try:
        text = explainer.explain(
            title=req.title,
            summary=req.summary,
            source=req.source,
            published_at=req.published_at,
        )
    except Exception as e:
        logger.error("ESG explain API error: %s", e)
        raise HTTPException(status_code=500, detail=str(e) or "Unexpected error")
    return ExplainResponse(explanation=text)
