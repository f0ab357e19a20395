"""Command-line entrypoint that loads the food dataset into the vector index.

Usage:
    calorie-tracker-ingest
    calorie-tracker-ingest --dataset data/food.json --namespace nutrition
    calorie-tracker-ingest --batch-size 50
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from calorie_tracker.app_logging import configure_logging
from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer, build_container
from calorie_tracker.domain.rag import IngestionReport
from calorie_tracker.services.ingestion import IngestionError, read_food_dataset

_logger = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="calorie-tracker-ingest",
        description="Embed the food nutrient dataset and upsert it into the index.",
    )
    parser.add_argument("--dataset", type=Path, help="Path to the JSON dataset.")
    parser.add_argument("--namespace", help="Vector index namespace.")
    parser.add_argument("--batch-size", type=int, help="Vectors per upsert call.")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run ingestion and return the process exit code."""
    args = _parse_args(argv)
    configure_logging()
    try:
        settings = Settings()
    except ValidationError as exc:
        _logger.error("Configuration error, check your environment: %s", exc)
        return 1

    container = build_container(settings)
    dataset = args.dataset or Path(settings.ingest_dataset_path)
    namespace = args.namespace or settings.rag_namespace
    try:
        report = asyncio.run(_ingest(container, dataset, namespace, args.batch_size))
    except (IngestionError, OSError, ValueError) as exc:
        _logger.error("Ingestion failed: %s", exc)
        return 1

    _logger.info(
        "Loaded %s of %s items into %s",
        report.upserted,
        report.total_items,
        report.namespace,
    )
    return 0


async def _ingest(
    container: AppContainer,
    dataset: Path,
    namespace: str,
    batch_size: int | None,
) -> IngestionReport:
    try:
        items = read_food_dataset(dataset)
        return await container.ingestion_service.load_food_data(
            items, namespace=namespace, batch_size=batch_size
        )
    finally:
        await container.close_resources()


if __name__ == "__main__":
    sys.exit(main())
