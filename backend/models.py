"""
SQLAlchemy ORM models -- schema for the ESG compliance portal.

Tables
------
companies       -- MSME profiles (tags drive scheme suggestions)
schemes         -- regulatory frameworks / certifications catalog
relations       -- directed scheme-to-scheme edges (mindmap only)
frameworks      -- reporting frameworks
requirements    -- per-framework requirements
files           -- uploaded file metadata
evidence        -- evidence a company holds against a requirement
"""

from __future__ import annotations

import datetime as dt
import enum
import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from .database import Base


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> dt.datetime:
    # microsecond precision; SQLite CURRENT_TIMESTAMP only has seconds
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)


class RelationType(str, enum.Enum):
    REQUIRES = "REQUIRES"
    ALIGNS_WITH = "ALIGNS_WITH"
    CONFLICTS_WITH = "CONFLICTS_WITH"


# ---------------------------------------------------------------------------
# Companies
# ---------------------------------------------------------------------------

class Company(Base):
    __tablename__ = "companies"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String(512), nullable=False, index=True)
    industry = Column(String(256), nullable=True)
    employees = Column(Integer, nullable=True)
    revenue_band = Column(String(64), nullable=True)
    exporter = Column(Boolean, default=False, nullable=False)
    export_regions = Column(JSON, default=list, nullable=False)
    tags = Column(JSON, default=list, nullable=False)

    created_at = Column(DateTime, default=_utcnow, index=True)

    evidence = relationship("Evidence", back_populates="company", cascade="all, delete-orphan")


# ---------------------------------------------------------------------------
# Scheme catalog
# ---------------------------------------------------------------------------

class Scheme(Base):
    __tablename__ = "schemes"

    id = Column(String(32), primary_key=True, default=_new_id)
    code = Column(String(64), unique=True, nullable=False, index=True)
    title = Column(String(512), nullable=False)
    category = Column(String(256), default="", index=True)
    issuing_authority = Column(String(512), nullable=True)
    mandatory = Column(Boolean, default=False, nullable=False)

    description = Column(Text, nullable=True)
    eligibility = Column(Text, nullable=True)
    process = Column(Text, nullable=True)
    benefits = Column(Text, nullable=True)
    deadlines = Column(Text, nullable=True)

    features = Column(JSON, default=list, nullable=False)
    tags = Column(JSON, default=list, nullable=False)
    references = Column(JSON, default=list, nullable=False)  # [{label, url, filename}]

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("ix_schemes_category_title", "category", "title"),
    )


class Relation(Base):
    __tablename__ = "relations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    from_id = Column(String(32), ForeignKey("schemes.id", ondelete="CASCADE"), nullable=False, index=True)
    to_id = Column(String(32), ForeignKey("schemes.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(Enum(RelationType, name="relation_type"), nullable=False)
    note = Column(Text, nullable=True)

    from_scheme = relationship("Scheme", foreign_keys=[from_id])
    to_scheme = relationship("Scheme", foreign_keys=[to_id])

    __table_args__ = (
        Index("ix_relations_edge", "from_id", "to_id", "type", unique=True),
    )


# ---------------------------------------------------------------------------
# Frameworks & requirements
# ---------------------------------------------------------------------------

class Framework(Base):
    __tablename__ = "frameworks"

    id = Column(String(32), primary_key=True, default=_new_id)
    code = Column(String(64), unique=True, nullable=False)
    title = Column(String(512), nullable=False)
    description = Column(Text, nullable=True)

    requirements = relationship(
        "Requirement",
        back_populates="framework",
        cascade="all, delete-orphan",
        order_by="Requirement.code",
    )


class Requirement(Base):
    __tablename__ = "requirements"

    id = Column(String(32), primary_key=True, default=_new_id)
    framework_id = Column(String(32), ForeignKey("frameworks.id"), nullable=False, index=True)
    code = Column(String(64), nullable=False)
    title = Column(String(512), nullable=False)
    description = Column(Text, nullable=True)

    framework = relationship("Framework", back_populates="requirements")


# ---------------------------------------------------------------------------
# Files & evidence
# ---------------------------------------------------------------------------

class File(Base):
    __tablename__ = "files"

    id = Column(String(32), primary_key=True, default=_new_id)
    filename = Column(String(512), nullable=False)
    mime_type = Column(String(128), default="application/octet-stream")
    size = Column(Integer, nullable=True)
    url = Column(String(1024), nullable=True)
    created_at = Column(DateTime, default=_utcnow, index=True)


class Evidence(Base):
    __tablename__ = "evidence"

    id = Column(String(32), primary_key=True, default=_new_id)
    title = Column(String(512), nullable=False)
    company_id = Column(String(32), ForeignKey("companies.id"), nullable=False, index=True)
    requirement_id = Column(String(32), ForeignKey("requirements.id"), nullable=True)
    file_id = Column(String(32), ForeignKey("files.id"), nullable=True)
    url = Column(String(1024), nullable=True)
    notes = Column(Text, nullable=True)
    uploaded_at = Column(DateTime, default=_utcnow, index=True)

    company = relationship("Company", back_populates="evidence")
    requirement = relationship("Requirement")
    file = relationship("File")
