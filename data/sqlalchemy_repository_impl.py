import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from backend.models import (
    Company,
    Evidence,
    File,
    Framework,
    Relation,
    Requirement,
    Scheme,
)
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
    SchemeIn,
    SchemeOut,
)
from domain.compliance_repository import ComplianceRepository, NotFoundError

logger = logging.getLogger(__name__)


def _scheme_values(data: SchemeIn) -> dict:
    values = data.model_dump(exclude={"references"})
    values["references"] = [r.model_dump(exclude_none=True) for r in data.references]
    return values


def _evidence_out(ev: Evidence) -> EvidenceOut:
    return EvidenceOut(
        id=ev.id,
        title=ev.title,
        company_id=ev.company_id,
        requirement_id=ev.requirement_id,
        file_id=ev.file_id,
        url=ev.url,
        notes=ev.notes,
        uploaded_at=ev.uploaded_at,
        company_name=ev.company.name if ev.company else None,
        requirement_code=ev.requirement.code if ev.requirement else None,
        requirement_title=ev.requirement.title if ev.requirement else None,
        file=FileOut.model_validate(ev.file) if ev.file else None,
    )


class SQLAlchemyComplianceRepository(ComplianceRepository):
    """Repository backed by an async SQLAlchemy session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    # ------------------------------------------------------------------
    # Companies
    # ------------------------------------------------------------------

    async def list_companies(self) -> list[CompanyOut]:
        async with self._session_factory() as session:
            rows = (
                await session.execute(select(Company).order_by(Company.created_at.desc()))
            ).scalars().all()
            return [CompanyOut.model_validate(c) for c in rows]

    async def get_company(self, company_id: str) -> Optional[CompanyOut]:
        async with self._session_factory() as session:
            company = await session.get(Company, company_id)
            return CompanyOut.model_validate(company) if company else None

    async def create_company(self, data: CompanyIn) -> CompanyOut:
        async with self._session_factory() as session:
            company = Company(**data.model_dump())
            session.add(company)
            await session.commit()
            await session.refresh(company)
            logger.info("Company created: %s (%s)", company.name, company.id)
            return CompanyOut.model_validate(company)

    async def update_company(self, company_id: str, data: CompanyIn) -> CompanyOut:
        async with self._session_factory() as session:
            company = await session.get(Company, company_id)
            if company is None:
                raise NotFoundError("Company", company_id)
            for key, value in data.model_dump().items():
                setattr(company, key, value)
            await session.commit()
            await session.refresh(company)
            return CompanyOut.model_validate(company)

    async def delete_company(self, company_id: str) -> None:
        async with self._session_factory() as session:
            company = await session.get(
                Company, company_id, options=[selectinload(Company.evidence)]
            )
            if company is None:
                raise NotFoundError("Company", company_id)
            await session.delete(company)
            await session.commit()
            logger.info("Company deleted: %s", company_id)

    # ------------------------------------------------------------------
    # Schemes
    # ------------------------------------------------------------------

    async def list_schemes(self) -> list[SchemeOut]:
        async with self._session_factory() as session:
            rows = (
                await session.execute(
                    select(Scheme).order_by(Scheme.category.asc(), Scheme.title.asc())
                )
            ).scalars().all()
            return [SchemeOut.model_validate(s) for s in rows]

    async def get_scheme(self, code: str) -> Optional[SchemeOut]:
        async with self._session_factory() as session:
            scheme = (
                await session.execute(select(Scheme).where(Scheme.code == code))
            ).scalar_one_or_none()
            return SchemeOut.model_validate(scheme) if scheme else None

    async def upsert_scheme(self, data: SchemeIn) -> SchemeOut:
        values = _scheme_values(data)
        async with self._session_factory() as session:
            scheme = (
                await session.execute(select(Scheme).where(Scheme.code == data.code))
            ).scalar_one_or_none()
            if scheme is None:
                scheme = Scheme(**values)
                session.add(scheme)
            else:
                for key, value in values.items():
                    setattr(scheme, key, value)
            await session.commit()
            await session.refresh(scheme)
            return SchemeOut.model_validate(scheme)

    async def count_schemes(self) -> int:
        async with self._session_factory() as session:
            return (await session.execute(select(func.count(Scheme.id)))).scalar() or 0

    # ------------------------------------------------------------------
    # Relations
    # ------------------------------------------------------------------

    async def list_relations(self) -> list[RelationOut]:
        async with self._session_factory() as session:
            rows = (
                await session.execute(select(Relation).order_by(Relation.id))
            ).scalars().all()
            return [RelationOut.model_validate(r) for r in rows]

    async def create_relation(self, data: RelationIn) -> RelationOut:
        async with self._session_factory() as session:
            ids = dict(
                (
                    await session.execute(
                        select(Scheme.code, Scheme.id).where(
                            Scheme.code.in_([data.from_code, data.to_code])
                        )
                    )
                ).all()
            )
            for code in (data.from_code, data.to_code):
                if code not in ids:
                    raise NotFoundError("Scheme", code)

            from_id, to_id = ids[data.from_code], ids[data.to_code]
            existing = (
                await session.execute(
                    select(Relation).where(
                        Relation.from_id == from_id,
                        Relation.to_id == to_id,
                        Relation.type == data.type,
                    )
                )
            ).scalar_one_or_none()
            if existing is not None:
                return RelationOut.model_validate(existing)

            relation = Relation(from_id=from_id, to_id=to_id, type=data.type, note=data.note)
            session.add(relation)
            await session.commit()
            await session.refresh(relation)
            return RelationOut.model_validate(relation)

    # ------------------------------------------------------------------
    # Frameworks
    # ------------------------------------------------------------------

    async def _load_framework(self, session: AsyncSession, framework_id: str) -> Framework:
        return (
            await session.execute(
                select(Framework)
                .options(selectinload(Framework.requirements))
                .where(Framework.id == framework_id)
                .execution_options(populate_existing=True)
            )
        ).scalar_one()

    async def list_frameworks(self) -> list[FrameworkOut]:
        async with self._session_factory() as session:
            rows = (
                await session.execute(
                    select(Framework)
                    .options(selectinload(Framework.requirements))
                    .order_by(Framework.code)
                )
            ).scalars().all()
            return [FrameworkOut.model_validate(f) for f in rows]

    async def create_framework(self, data: FrameworkIn) -> FrameworkOut:
        async with self._session_factory() as session:
            framework = Framework(
                code=data.code,
                title=data.title,
                description=data.description,
                requirements=[Requirement(**r.model_dump()) for r in data.requirements],
            )
            session.add(framework)
            await session.commit()
            return FrameworkOut.model_validate(
                await self._load_framework(session, framework.id)
            )

    # ------------------------------------------------------------------
    # Files & evidence
    # ------------------------------------------------------------------

    async def list_files(self) -> list[FileOut]:
        async with self._session_factory() as session:
            rows = (
                await session.execute(select(File).order_by(File.created_at.desc()))
            ).scalars().all()
            return [FileOut.model_validate(f) for f in rows]

    async def create_file(self, data: FileIn) -> FileOut:
        async with self._session_factory() as session:
            record = File(**data.model_dump())
            session.add(record)
            await session.commit()
            await session.refresh(record)
            return FileOut.model_validate(record)

    def _evidence_query(self):
        return select(Evidence).options(
            selectinload(Evidence.company),
            selectinload(Evidence.requirement),
            selectinload(Evidence.file),
        )

    async def list_evidence(self) -> list[EvidenceOut]:
        async with self._session_factory() as session:
            rows = (
                await session.execute(
                    self._evidence_query().order_by(Evidence.uploaded_at.desc())
                )
            ).scalars().all()
            return [_evidence_out(ev) for ev in rows]

    async def create_evidence(self, data: EvidenceIn) -> EvidenceOut:
        async with self._session_factory() as session:
            if await session.get(Company, data.company_id) is None:
                raise NotFoundError("Company", data.company_id)
            if data.requirement_id and await session.get(Requirement, data.requirement_id) is None:
                raise NotFoundError("Requirement", data.requirement_id)
            if data.file_id and await session.get(File, data.file_id) is None:
                raise NotFoundError("File", data.file_id)

            ev = Evidence(**data.model_dump())
            session.add(ev)
            await session.commit()
            ev = (
                await session.execute(
                    self._evidence_query()
                    .where(Evidence.id == ev.id)
                    .execution_options(populate_existing=True)
                )
            ).scalar_one()
            return _evidence_out(ev)
