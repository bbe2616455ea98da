"""Pydantic schemas for FastAPI request / response models."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from backend.models import RelationType


def _clean_list(values) -> list[str]:
    if not values:
        return []
    if isinstance(values, str):
        values = values.split(",")
    return [str(v).strip() for v in values if str(v).strip()]


# ---------------------------------------------------------------------------
# Company
# ---------------------------------------------------------------------------

class CompanyIn(BaseModel):
    name: str = ""
    industry: Optional[str] = None
    employees: Optional[int] = Field(default=None, ge=0)
    revenue_band: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("revenue_band", "revenueBand")
    )
    exporter: bool = Field(default=False, validation_alias=AliasChoices("exporter", "export"))
    export_regions: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("export_regions", "exportRegions")
    )
    tags: list[str] = Field(default_factory=list)

    @field_validator("export_regions", "tags", mode="before")
    @classmethod
    def _lists(cls, v):
        return _clean_list(v)


class CompanyOut(BaseModel):
    id: str
    name: str
    industry: Optional[str] = None
    employees: Optional[int] = None
    revenue_band: Optional[str] = None
    exporter: bool = False
    export_regions: list[str] = []
    tags: list[str] = []
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


# ---------------------------------------------------------------------------
# Scheme
# ---------------------------------------------------------------------------

class SchemeReference(BaseModel):
    label: Optional[str] = None
    url: Optional[str] = None
    filename: Optional[str] = None


class SchemeIn(BaseModel):
    code: str
    title: str
    category: str = ""
    issuing_authority: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("issuing_authority", "issuingAuthority")
    )
    mandatory: bool = False
    description: Optional[str] = None
    eligibility: Optional[str] = None
    process: Optional[str] = None
    benefits: Optional[str] = None
    deadlines: Optional[str] = None
    features: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    references: list[SchemeReference] = Field(default_factory=list)

    @field_validator("features", "tags", mode="before")
    @classmethod
    def _lists(cls, v):
        return _clean_list(v)


class SchemeOut(BaseModel):
    id: str
    code: str
    title: str
    category: str = ""
    issuing_authority: Optional[str] = None
    mandatory: bool = False
    description: Optional[str] = None
    eligibility: Optional[str] = None
    process: Optional[str] = None
    benefits: Optional[str] = None
    deadlines: Optional[str] = None
    features: list[str] = []
    tags: list[str] = []
    references: list[SchemeReference] = []
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class SchemeFacets(BaseModel):
    categories: list[str] = []
    tags: list[str] = []


class RelationIn(BaseModel):
    from_code: str
    to_code: str
    type: RelationType
    note: Optional[str] = None


class RelationOut(BaseModel):
    id: int
    from_id: str
    to_id: str
    type: RelationType
    note: Optional[str] = None

    class Config:
        from_attributes = True


# ---------------------------------------------------------------------------
# Suggestions
# ---------------------------------------------------------------------------

class SuggestionOut(BaseModel):
    scheme: SchemeOut
    reason: str
    mandatory: bool
    score: int = Field(ge=0, le=100)


class SuggestionsResponse(BaseModel):
    company: CompanyOut
    suggestions: list[SuggestionOut]


# ---------------------------------------------------------------------------
# Frameworks, files, evidence
# ---------------------------------------------------------------------------

class RequirementIn(BaseModel):
    code: str
    title: str
    description: Optional[str] = None


class RequirementOut(RequirementIn):
    id: str
    framework_id: str

    class Config:
        from_attributes = True


class FrameworkIn(BaseModel):
    code: str
    title: str
    description: Optional[str] = None
    requirements: list[RequirementIn] = Field(default_factory=list)


class FrameworkOut(BaseModel):
    id: str
    code: str
    title: str
    description: Optional[str] = None
    requirements: list[RequirementOut] = []

    class Config:
        from_attributes = True


class FileIn(BaseModel):
    filename: str
    mime_type: str = Field(
        default="application/octet-stream",
        validation_alias=AliasChoices("mime_type", "mimeType"),
    )
    size: Optional[int] = Field(default=None, ge=0)
    url: Optional[str] = None


class FileOut(FileIn):
    id: str
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class EvidenceIn(BaseModel):
    title: str
    company_id: str
    requirement_id: Optional[str] = None
    file_id: Optional[str] = None
    url: Optional[str] = None
    notes: Optional[str] = None


class EvidenceOut(EvidenceIn):
    id: str
    uploaded_at: Optional[dt.datetime] = None
    company_name: Optional[str] = None
    requirement_code: Optional[str] = None
    requirement_title: Optional[str] = None
    file: Optional[FileOut] = None


# ---------------------------------------------------------------------------
# GodMode
# ---------------------------------------------------------------------------

class GodModeStats(BaseModel):
    total_companies: int = 0
    total_schemes: int = 0
    mandatory_schemes: int = 0
    total_relations: int = 0
    total_evidence: int = 0
    companies_at_risk: int = 0


class MindmapNode(BaseModel):
    id: str
    name: str
    category: str
    mandatory: bool
    tags: list[str] = []
    color: str
    x: Optional[float] = None
    y: Optional[float] = None


class MindmapLink(BaseModel):
    source: str
    target: str
    type: Optional[RelationType] = None
    note: Optional[str] = None
    why: list[str] = []


class MindmapResponse(BaseModel):
    nodes: list[MindmapNode]
    links: list[MindmapLink]
    degree: dict[str, int]
    categories: list[str]


# ---------------------------------------------------------------------------
# ESG explain
# ---------------------------------------------------------------------------

class ExplainRequest(BaseModel):
    title: Optional[str] = None
    summary: Optional[str] = None
    source: Optional[str] = None
    published_at: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("published_at", "publishedAt")
    )


class ExplainResponse(BaseModel):
    explanation: str
