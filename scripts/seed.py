# scripts/seed.py
"""
Replace all schools and zones with the built-in Auckland dataset or a JSON file.

    python -m scripts.seed                      # built-in dataset
    python -m scripts.seed --file schools.json  # {"schools": [...], "zones": [...]}
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

# Run from the repository root
sys.path.append(os.path.abspath("."))

import structlog  # noqa: E402

from app import db  # noqa: E402
from app.core.exceptions import ValidationError  # noqa: E402
from app.data.catalog import SOURCE_FILE_ID, SOURCE_PROVIDER  # noqa: E402
from app.logging import setup_logging  # noqa: E402
from app.services.seed import builtin_dataset, load_dataset, seed_database  # noqa: E402

logger = structlog.get_logger("scripts.seed")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed schools and enrolment zones")
    parser.add_argument("--file", type=Path, help="JSON dataset; defaults to the built-in one")
    parser.add_argument("--database-url", help="Overrides DATABASE_URL")
    parser.add_argument("--source-provider", default=None, help="Provenance tag for rows")
    parser.add_argument("--source-file-id", default=None, help="Provenance file id for rows")
    return parser.parse_args(argv)


async def _async_main(args: argparse.Namespace) -> int:
    if args.database_url:
        db.configure_engine(args.database_url)

    if args.file:
        dataset = load_dataset(args.file)
        provider = args.source_provider or "file"
        file_id = args.source_file_id or args.file.name
    else:
        dataset = builtin_dataset()
        provider = args.source_provider or SOURCE_PROVIDER
        file_id = args.source_file_id or SOURCE_FILE_ID

    try:
        summary = await seed_database(
            db.SessionLocal, dataset, source_provider=provider, source_file_id=file_id
        )
    finally:
        await db.engine.dispose()

    print(f"[seed] schools={summary.schools} zones={summary.zones}")
    return 0


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    args = parse_args(argv)
    try:
        return asyncio.run(_async_main(args))
    except ValidationError as exc:
        logger.error("seed_rejected", error=str(exc))
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
