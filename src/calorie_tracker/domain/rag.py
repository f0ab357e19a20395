"""Domain models for the nutrition knowledge base."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FoodRecord:
    """Food item from the nutrient dataset."""

    id: str
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class VectorRecord:
    """Embedding keyed by record id with its source text as metadata."""

    id: str
    values: list[float]
    metadata: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class VectorMatch:
    """Nearest-neighbour match returned by the vector index."""

    id: str
    score: float
    metadata: dict[str, object]


@dataclass
class IngestionReport:
    """Outcome of a dataset ingestion run."""

    namespace: str
    total_items: int
    embedded: int = 0
    upserted: int = 0
    failed_item_ids: list[str] = field(default_factory=list)
    skipped_batches: int = 0
    dimension_mismatches: int = 0
