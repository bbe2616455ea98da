"""
Scheme import: JSON / CSV catalog files -> database (upsert by code).

Usage:
    python -m backend.import_schemes data/schemes.seed.json data/goa.seed.json
    python -m backend.import_schemes --seed          # built-in starter catalog
    python -m backend.import_schemes catalog.csv     # list columns use ';'
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path

import pandas as pd
from pydantic import ValidationError

from backend.schemas import RelationIn, SchemeIn
from backend.seed import RELATIONS_SEED, SCHEMES_SEED
from domain.compliance_repository import ComplianceRepository, NotFoundError

logger = logging.getLogger(__name__)

LIST_COLUMNS = ("features", "tags")
TRUE_VALUES = ("1", "true", "yes", "y", "mandatory")


def _split(value: str) -> list[str]:
    return [part.strip() for part in str(value).split(";") if part.strip()]


def _csv_rows(path: Path) -> list[dict]:
    df = pd.read_csv(path, encoding="utf-8", dtype=str).fillna("")
    rows = []
    for record in df.to_dict(orient="records"):
        row = {k: v for k, v in record.items() if v != ""}
        for col in LIST_COLUMNS:
            row[col] = _split(record.get(col, ""))
        row["mandatory"] = str(record.get("mandatory", "")).strip().lower() in TRUE_VALUES
        refs = record.get("references", "")
        try:
            row["references"] = json.loads(refs) if refs else []
        except ValueError as e:
            logger.warning("Skipping CSV row %s: bad references JSON (%s)", record.get("code", "?"), e)
            continue
        rows.append(row)
    return rows


def load_scheme_rows(path: str | Path) -> list[dict]:
    path = Path(path)
    if path.suffix.lower() == ".csv":
        return _csv_rows(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of schemes")
    return data


async def import_schemes(repo: ComplianceRepository, rows: list[dict]) -> int:
    """Upsert every valid row; invalid rows are logged and skipped."""
    imported = 0
    for idx, row in enumerate(rows):
        try:
            scheme = SchemeIn.model_validate(row)
        except ValidationError as e:
            logger.warning("Skipping row %d (%s): %s", idx, row.get("code", "?"), e)
            continue
        await repo.upsert_scheme(scheme)
        imported += 1
    return imported


async def seed_catalog(repo: ComplianceRepository) -> tuple[int, int]:
    """Load the starter catalog and its relations. Safe to run repeatedly."""
    schemes = await import_schemes(repo, SCHEMES_SEED)
    relations = 0
    for rel in RELATIONS_SEED:
        try:
            await repo.create_relation(RelationIn.model_validate(rel))
            relations += 1
        except NotFoundError as e:
            logger.warning("Skipping relation %s -> %s: %s", rel["from_code"], rel["to_code"], e)
    return schemes, relations


async def run(paths: list[str], seed: bool = False):
    from backend.database import async_session, init_db
    from data.sqlalchemy_repository_impl import SQLAlchemyComplianceRepository

    await init_db()
    repo = SQLAlchemyComplianceRepository(async_session)

    if seed:
        schemes, relations = await seed_catalog(repo)
        print(f"Seeded {schemes} schemes and {relations} relations.")

    for path in paths:
        rows = load_scheme_rows(path)
        count = await import_schemes(repo, rows)
        print(f"{path}: imported/updated {count} of {len(rows)} schemes.")

    total = await repo.count_schemes()
    print(f"Total schemes now in DB: {total}")


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    parser = argparse.ArgumentParser(description="Import schemes into the catalog")
    parser.add_argument("paths", nargs="*", help="JSON or CSV files")
    parser.add_argument("--seed", action="store_true", help="Load the built-in starter catalog")
    args = parser.parse_args()
    if not args.paths and not args.seed:
        parser.error("give at least one file or --seed")
    asyncio.run(run(args.paths, seed=args.seed))


if __name__ == "__main__":
    main()
