"""
Unified startup script.

Handles:
    1. Database initialisation (creates tables)
    2. Optional scheme import (starter catalog and/or catalog files)
    3. Starts the FastAPI backend (uvicorn)

Usage:
    python start.py                       # init DB + serve
    python start.py --seed                # init DB, load starter catalog, serve
    python start.py --import a.json b.csv # init DB, import files, serve
    python start.py --no-serve --seed     # prepare the database only
"""

import argparse
import asyncio
import logging

import uvicorn

import config_env


def main():
    logging.basicConfig(
        level=config_env.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    parser = argparse.ArgumentParser()
    parser.add_argument("--seed", action="store_true", help="Load the built-in starter catalog")
    parser.add_argument("--import", dest="paths", nargs="*", default=[], help="Scheme JSON/CSV files")
    parser.add_argument("--no-serve", action="store_true", help="Prepare the database and exit")
    args = parser.parse_args()

    print("=" * 60)
    print("  ESG Compass -- Startup")
    print("=" * 60)

    print("\n[1/2] Database initialization...")
    from backend.import_schemes import run

    asyncio.run(run(args.paths, seed=args.seed))

    if args.no_serve:
        return

    print(f"\n[2/2] Starting FastAPI on port {config_env.PORT}...")
    uvicorn.run(
        "backend.app:app",
        host=config_env.HOST,
        port=config_env.PORT,
        log_level=config_env.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
