import asyncio

import pytest

from backend.database import init_db, make_engine, make_sessionmaker
from backend.import_schemes import seed_catalog
from backend.schemas import (
    CompanyIn,
    EvidenceIn,
    FileIn,
    FrameworkIn,
    RelationIn,
    SchemeIn,
)
from data.sqlalchemy_repository_impl import SQLAlchemyComplianceRepository
from domain.compliance_repository import NotFoundError
from scoring.evaluator import evaluate


def run_with_repo(tmp_path, scenario):
    """Run ``scenario(repo)`` against a fresh SQLite file database."""

    async def main():
        engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'esg.db'}")
        try:
            await init_db(engine)
            repo = SQLAlchemyComplianceRepository(make_sessionmaker(engine))
            return await scenario(repo)
        finally:
            await engine.dispose()

    return asyncio.run(main())


def test_company_crud(tmp_path):
    async def scenario(repo):
        first = await repo.create_company(CompanyIn(name="Margao Metals", tags=["manufacturing"]))
        second = await repo.create_company(CompanyIn(name="Vasco Fisheries", exporter=True))
        assert [c.id for c in await repo.list_companies()] == [second.id, first.id]

        updated = await repo.update_company(first.id, CompanyIn(name="Margao Metals Pvt Ltd"))
        assert updated.created_at == first.created_at
        assert updated.tags == []

        await repo.delete_company(second.id)
        assert await repo.get_company(second.id) is None
        with pytest.raises(NotFoundError):
            await repo.delete_company(second.id)
        with pytest.raises(NotFoundError):
            await repo.update_company("missing", CompanyIn(name="x"))

    run_with_repo(tmp_path, scenario)


def test_scheme_upsert_keeps_identity(tmp_path):
    async def scenario(repo):
        created = await repo.upsert_scheme(
            SchemeIn(code="GOA-CRZ", title="CRZ clearance", tags=["goa"],
                     references=[{"label": "GCZMA", "url": "https://gczma.goa.gov.in"}])
        )
        updated = await repo.upsert_scheme(
            SchemeIn(code="GOA-CRZ", title="CRZ clearance (Goa)", mandatory=True)
        )
        assert updated.id == created.id
        assert updated.created_at == created.created_at
        assert updated.mandatory is True
        assert updated.references == []

        assert await repo.count_schemes() == 1
        assert (await repo.get_scheme("GOA-CRZ")).title == "CRZ clearance (Goa)"
        assert await repo.get_scheme("NOPE") is None

    run_with_repo(tmp_path, scenario)


def test_seeded_catalog_scores_like_memory(tmp_path):
    async def scenario(repo):
        await seed_catalog(repo)
        assert await repo.count_schemes() == 16
        # relations are idempotent on (from, to, type)
        await seed_catalog(repo)
        assert len(await repo.list_relations()) == 9

        schemes = await repo.list_schemes()
        out = evaluate({"tags": ["goa", "producer"]}, schemes)
        by_code = {s.scheme.code: s for s in out}
        assert by_code["GOA-CRZ"].score == 55
        assert by_code["GOA-CRZ"].mandatory is True

        with pytest.raises(NotFoundError):
            await repo.create_relation(
                RelationIn(from_code="GOA-CRZ", to_code="NOPE", type="REQUIRES")
            )

    run_with_repo(tmp_path, scenario)


def test_evidence_with_requirement_and_file(tmp_path):
    async def scenario(repo):
        company = await repo.create_company(CompanyIn(name="Ponda Plastics"))
        framework = await repo.create_framework(
            FrameworkIn(
                code="PWM",
                title="Plastic Waste Management",
                requirements=[
                    {"code": "R2", "title": "Annual return"},
                    {"code": "R1", "title": "EPR registration"},
                ],
            )
        )
        assert [r.code for r in framework.requirements] == ["R1", "R2"]

        file = await repo.create_file(FileIn(filename="cert.pdf", mime_type="application/pdf"))
        evidence = await repo.create_evidence(
            EvidenceIn(
                title="EPR certificate",
                company_id=company.id,
                requirement_id=framework.requirements[0].id,
                file_id=file.id,
            )
        )
        assert evidence.company_name == "Ponda Plastics"
        assert evidence.requirement_code == "R1"
        assert evidence.file.filename == "cert.pdf"

        with pytest.raises(NotFoundError):
            await repo.create_evidence(
                EvidenceIn(title="x", company_id=company.id, file_id="missing")
            )

        # evidence goes with its company
        await repo.delete_company(company.id)
        assert await repo.list_evidence() == []
        assert len(await repo.list_files()) == 1

    run_with_repo(tmp_path, scenario)
