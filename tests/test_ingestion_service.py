"""Tests for dataset ingestion."""

import asyncio
import json
from dataclasses import dataclass
from pathlib import Path

import pytest

from calorie_tracker.services.ingestion import (
    IngestionError,
    IngestionService,
    describe_food,
    food_record_from_item,
    read_food_dataset,
)
from tests.conftest import FakeEmbeddingClient, FakeVectorIndex


def _items(count: int) -> list[dict[str, object]]:
    return [
        {
            "id": f"food-{index}",
            "name": f"Food {index}",
            "calories": 100 + index,
            "protein": 5,
            "carbs": 10,
            "fat": 2,
        }
        for index in range(count)
    ]


def test_batches_are_sized_and_tagged_with_namespace() -> None:
    index = FakeVectorIndex()
    service = IngestionService(
        embedding_client=FakeEmbeddingClient(),
        vector_index=index,
        batch_size=100,
    )

    report = asyncio.run(service.load_food_data(_items(250), namespace="nutrition"))

    assert [len(batch) for batch, _ in index.upserts] == [100, 100, 50]
    assert {namespace for _, namespace in index.upserts} == {"nutrition"}
    assert report.upserted == 250
    assert index.dimensions == [3]


def test_failed_embedding_skips_only_that_item() -> None:
    items = _items(6)
    embedding_client = FakeEmbeddingClient(failing_texts={"Food 3:"})
    index = FakeVectorIndex()
    service = IngestionService(embedding_client=embedding_client, vector_index=index)

    report = asyncio.run(service.load_food_data(items, namespace="nutrition"))

    upserted_ids = [vector.id for batch, _ in index.upserts for vector in batch]
    assert len(upserted_ids) == len(items) - 1
    assert "food-3" not in upserted_ids
    assert report.failed_item_ids == ["food-3"]
    assert len(embedding_client.calls) == len(items)


def test_failed_batch_is_skipped_and_counted() -> None:
    index = FakeVectorIndex(failing_batches={2})
    service = IngestionService(
        embedding_client=FakeEmbeddingClient(), vector_index=index, batch_size=2
    )

    report = asyncio.run(service.load_food_data(_items(5), namespace="nutrition"))

    assert [len(batch) for batch, _ in index.upserts] == [2, 1]
    assert report.skipped_batches == 1
    assert report.upserted == 3


def test_batch_size_override() -> None:
    index = FakeVectorIndex()
    service = IngestionService(
        embedding_client=FakeEmbeddingClient(), vector_index=index, batch_size=100
    )

    asyncio.run(service.load_food_data(_items(7), namespace="n", batch_size=3))

    assert [len(batch) for batch, _ in index.upserts] == [3, 3, 1]


def test_no_vectors_raises_without_upserting() -> None:
    index = FakeVectorIndex()
    service = IngestionService(
        embedding_client=FakeEmbeddingClient(failing_texts={"Food"}),
        vector_index=index,
    )

    with pytest.raises(IngestionError):
        asyncio.run(service.load_food_data(_items(3), namespace="nutrition"))

    assert index.upserts == []
    assert index.dimensions == []



@dataclass
class _UnreachableIndex(FakeVectorIndex):
    def ensure_collection(self, dimension: int) -> None:
        raise ConnectionError("qdrant unreachable")


def test_unreachable_index_raises_ingestion_error() -> None:
    index = _UnreachableIndex()
    service = IngestionService(
        embedding_client=FakeEmbeddingClient(), vector_index=index
    )

    with pytest.raises(IngestionError) as excinfo:
        asyncio.run(service.load_food_data(_items(2), namespace="nutrition"))

    assert isinstance(excinfo.value.__cause__, ConnectionError)
    assert index.upserts == []


def test_zero_batch_size_is_rejected() -> None:
    index = FakeVectorIndex()
    service = IngestionService(
        embedding_client=FakeEmbeddingClient(), vector_index=index
    )

    with pytest.raises(ValueError, match="batch_size"):
        asyncio.run(
            service.load_food_data(_items(1), namespace="nutrition", batch_size=0)
        )

    assert index.upserts == []

@dataclass
class _RaggedEmbeddingClient:
    async def embed(self, text: str) -> list[float]:
        if text.startswith("Food 1:"):
            return [1.0, 2.0]
        return [1.0, 2.0, 3.0]


def test_mismatched_dimensions_are_dropped() -> None:
    index = FakeVectorIndex()
    service = IngestionService(
        embedding_client=_RaggedEmbeddingClient(), vector_index=index
    )

    report = asyncio.run(service.load_food_data(_items(3), namespace="nutrition"))

    upserted_ids = [vector.id for batch, _ in index.upserts for vector in batch]
    assert upserted_ids == ["food-0", "food-2"]
    assert report.dimension_mismatches == 1


def test_vectors_keep_description_as_metadata() -> None:
    index = FakeVectorIndex()
    service = IngestionService(
        embedding_client=FakeEmbeddingClient(), vector_index=index
    )
    item = {"id": 7, "name": " Apple ", "calories": 52, "protein": 0.3, "carb": 14}

    asyncio.run(service.load_food_data([item], namespace="nutrition"))

    vector = index.upserts[0][0][0]
    assert vector.id == "7"
    assert vector.metadata == {
        "text": "Apple: 52 calories, 0g fat, 14g carbs, 0.3g protein"
    }


def test_food_record_defaults_for_missing_fields() -> None:
    record = food_record_from_item({"name": "   "}, 4)

    assert record.id == "auto_4"
    assert record.name == "Unknown Dish 4"
    assert describe_food(record) == (
        "Unknown Dish 4: 0 calories, 0g fat, 0g carbs, 0g protein"
    )


def test_read_food_dataset(tmp_path: Path) -> None:
    path = tmp_path / "foods.json"
    path.write_text(json.dumps(_items(2)), encoding="utf-8")

    items = read_food_dataset(path)

    assert [item["id"] for item in items] == ["food-0", "food-1"]


def test_read_food_dataset_rejects_objects(tmp_path: Path) -> None:
    path = tmp_path / "foods.json"
    path.write_text(json.dumps({"foods": []}), encoding="utf-8")

    with pytest.raises(IngestionError):
        read_food_dataset(path)
