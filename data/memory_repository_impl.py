import datetime as dt
import itertools
import uuid
from typing import Optional

from backend.schemas import (
    CompanyIn,
    CompanyOut,
    EvidenceIn,
    EvidenceOut,
    FileIn,
    FileOut,
    FrameworkIn,
    FrameworkOut,
    RelationIn,
    RelationOut,
    RequirementOut,
    SchemeIn,
    SchemeOut,
)
from domain.compliance_repository import ComplianceRepository, NotFoundError


def _now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class InMemoryComplianceRepository(ComplianceRepository):
    """Dict-backed repository for tests and demos. Not persistent."""

    def __init__(self):
        super().__init__()
        self.companies: dict[str, CompanyOut] = {}
        self.schemes: dict[str, SchemeOut] = {}  # by code
        self.relations: list[RelationOut] = []
        self.frameworks: dict[str, FrameworkOut] = {}
        self.files: dict[str, FileOut] = {}
        self.evidence: dict[str, EvidenceOut] = {}
        self._relation_ids = itertools.count(1)
        self._clock = itertools.count()

    def _stamp(self) -> dt.datetime:
        # strictly increasing so newest-first ordering is stable within a test
        return _now() + dt.timedelta(microseconds=next(self._clock))

    async def list_companies(self) -> list[CompanyOut]:
        return sorted(self.companies.values(), key=lambda c: c.created_at, reverse=True)

    async def get_company(self, company_id: str) -> Optional[CompanyOut]:
        return self.companies.get(company_id)

    async def create_company(self, data: CompanyIn) -> CompanyOut:
        company = CompanyOut(id=uuid.uuid4().hex, created_at=self._stamp(), **data.model_dump())
        self.companies[company.id] = company
        return company

    async def update_company(self, company_id: str, data: CompanyIn) -> CompanyOut:
        current = self.companies.get(company_id)
        if current is None:
            raise NotFoundError("Company", company_id)
        updated = current.model_copy(update=data.model_dump())
        self.companies[company_id] = updated
        return updated

    async def delete_company(self, company_id: str) -> None:
        if self.companies.pop(company_id, None) is None:
            raise NotFoundError("Company", company_id)
        self.evidence = {k: v for k, v in self.evidence.items() if v.company_id != company_id}

    async def list_schemes(self) -> list[SchemeOut]:
        return sorted(self.schemes.values(), key=lambda s: (s.category, s.title))

    async def get_scheme(self, code: str) -> Optional[SchemeOut]:
        return self.schemes.get(code)

    async def upsert_scheme(self, data: SchemeIn) -> SchemeOut:
        existing = self.schemes.get(data.code)
        stamp = self._stamp()
        scheme = SchemeOut(
            id=existing.id if existing else uuid.uuid4().hex,
            created_at=existing.created_at if existing else stamp,
            updated_at=stamp,
            **data.model_dump(),
        )
        self.schemes[scheme.code] = scheme
        return scheme

    async def count_schemes(self) -> int:
        return len(self.schemes)

    async def list_relations(self) -> list[RelationOut]:
        return list(self.relations)

    async def create_relation(self, data: RelationIn) -> RelationOut:
        ends = []
        for code in (data.from_code, data.to_code):
            scheme = self.schemes.get(code)
            if scheme is None:
                raise NotFoundError("Scheme", code)
            ends.append(scheme.id)
        from_id, to_id = ends

        for rel in self.relations:
            if (rel.from_id, rel.to_id, rel.type) == (from_id, to_id, data.type):
                return rel
        rel = RelationOut(
            id=next(self._relation_ids),
            from_id=from_id,
            to_id=to_id,
            type=data.type,
            note=data.note,
        )
        self.relations.append(rel)
        return rel

    async def list_frameworks(self) -> list[FrameworkOut]:
        return sorted(self.frameworks.values(), key=lambda f: f.code)

    async def create_framework(self, data: FrameworkIn) -> FrameworkOut:
        framework_id = uuid.uuid4().hex
        framework = FrameworkOut(
            id=framework_id,
            code=data.code,
            title=data.title,
            description=data.description,
            requirements=sorted(
                (
                    RequirementOut(id=uuid.uuid4().hex, framework_id=framework_id, **r.model_dump())
                    for r in data.requirements
                ),
                key=lambda r: r.code,
            ),
        )
        self.frameworks[framework_id] = framework
        return framework

    async def list_files(self) -> list[FileOut]:
        return sorted(self.files.values(), key=lambda f: f.created_at, reverse=True)

    async def create_file(self, data: FileIn) -> FileOut:
        record = FileOut(id=uuid.uuid4().hex, created_at=self._stamp(), **data.model_dump())
        self.files[record.id] = record
        return record

    def _requirement(self, requirement_id: str) -> Optional[RequirementOut]:
        for framework in self.frameworks.values():
            for req in framework.requirements:
                if req.id == requirement_id:
                    return req
        return None

    async def list_evidence(self) -> list[EvidenceOut]:
        return sorted(self.evidence.values(), key=lambda e: e.uploaded_at, reverse=True)

    async def create_evidence(self, data: EvidenceIn) -> EvidenceOut:
        company = self.companies.get(data.company_id)
        if company is None:
            raise NotFoundError("Company", data.company_id)
        requirement = None
        if data.requirement_id:
            requirement = self._requirement(data.requirement_id)
            if requirement is None:
                raise NotFoundError("Requirement", data.requirement_id)
        file = None
        if data.file_id:
            file = self.files.get(data.file_id)
            if file is None:
                raise NotFoundError("File", data.file_id)

        ev = EvidenceOut(
            id=uuid.uuid4().hex,
            uploaded_at=self._stamp(),
            company_name=company.name,
            requirement_code=requirement.code if requirement else None,
            requirement_title=requirement.title if requirement else None,
            file=file,
            **data.model_dump(),
        )
        self.evidence[ev.id] = ev
        return ev
