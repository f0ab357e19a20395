"""Load the food nutrient dataset into the vector index."""

import json
import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from calorie_tracker.domain.rag import FoodRecord, IngestionReport, VectorRecord
from calorie_tracker.services.rag import EmbeddingClient, VectorIndex

_PROGRESS_EVERY = 500

_logger = logging.getLogger(__name__)


class IngestionError(RuntimeError):
    """Raised when a dataset cannot be ingested at all."""


@dataclass
class IngestionService:
    """Embeds food records one by one and upserts them in batches."""

    embedding_client: EmbeddingClient
    vector_index: VectorIndex
    batch_size: int = 100

    async def load_food_data(
        self,
        items: Sequence[Mapping[str, object]],
        namespace: str,
        batch_size: int | None = None,
    ) -> IngestionReport:
        """Embed every item and upsert the vectors into the namespace."""
        size = self.batch_size if batch_size is None else batch_size
        if size <= 0:
            raise ValueError("batch_size must be positive")
        report = IngestionReport(namespace=namespace, total_items=len(items))
        _logger.info("Ingesting %s food items into %s", len(items), namespace)

        vectors: list[VectorRecord] = []
        for index, item in enumerate(items):
            record = food_record_from_item(item, index)
            text = describe_food(record)
            try:
                embedding = await self.embedding_client.embed(text)
            except Exception:
                _logger.exception("Failed to embed item %s (%s)", index, record.id)
                report.failed_item_ids.append(record.id)
                continue
            vectors.append(
                VectorRecord(id=record.id, values=embedding, metadata={"text": text})
            )
            if index % _PROGRESS_EVERY == 0:
                _logger.info("Embedded %s of %s items", index + 1, len(items))
        report.embedded = len(vectors)

        if not vectors:
            raise IngestionError("No valid vectors found for upload")

        vectors, report.dimension_mismatches = _drop_mismatched(vectors)
        try:
            self.vector_index.ensure_collection(len(vectors[0].values))
        except Exception as exc:
            _logger.exception("Failed to prepare collection for %s", namespace)
            raise IngestionError("Vector index is unavailable") from exc

        for batch_number, batch in enumerate(_chunks(vectors, size), start=1):
            try:
                self.vector_index.upsert(batch, namespace=namespace)
            except Exception:
                _logger.exception(
                    "Failed to upsert batch %s (%s vectors)", batch_number, len(batch)
                )
                report.skipped_batches += 1
                continue
            report.upserted += len(batch)

        _logger.info(
            "Ingestion finished: upserted=%s failed_items=%s skipped_batches=%s",
            report.upserted,
            len(report.failed_item_ids),
            report.skipped_batches,
        )
        return report


def read_food_dataset(path: Path) -> list[dict[str, object]]:
    """Read the dataset file, which must contain a JSON array."""
    _logger.info("Loading dataset from %s", path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise IngestionError(f"Dataset {path} must contain a JSON array")
    return [item for item in data if isinstance(item, dict)]


def food_record_from_item(item: Mapping[str, object], index: int) -> FoodRecord:
    """Build a food record, filling in defaults for missing fields."""
    raw_name = item.get("name")
    name = raw_name.strip() if isinstance(raw_name, str) else ""
    raw_id = item.get("id")
    return FoodRecord(
        id=str(raw_id) if raw_id not in (None, "") else f"auto_{index}",
        name=name or f"Unknown Dish {index}",
        calories=_to_float(item.get("calories")),
        protein=_to_float(item.get("protein")),
        carbs=_to_float(item.get("carbs", item.get("carb"))),
        fat=_to_float(item.get("fat")),
    )


def describe_food(record: FoodRecord) -> str:
    """Natural-language description used as the embedding input."""
    return (
        f"{record.name}: {_fmt(record.calories)} calories, "
        f"{_fmt(record.fat)}g fat, {_fmt(record.carbs)}g carbs, "
        f"{_fmt(record.protein)}g protein"
    )


def _drop_mismatched(
    vectors: list[VectorRecord],
) -> tuple[list[VectorRecord], int]:
    """Keep vectors whose dimension matches the first one."""
    dimension = len(vectors[0].values)
    kept = [vector for vector in vectors if len(vector.values) == dimension]
    dropped = len(vectors) - len(kept)
    if dropped:
        _logger.warning(
            "Dropped %s vectors with dimension other than %s", dropped, dimension
        )
    return kept, dropped


def _chunks(
    vectors: list[VectorRecord], size: int
) -> Iterator[list[VectorRecord]]:
    for start in range(0, len(vectors), size):
        yield vectors[start : start + size]


def _to_float(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0


def _fmt(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return f"{value:g}"
