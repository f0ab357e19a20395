"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

import pytest

from calorie_tracker.adapters.mock_recognition import (
    MockBarcodeLookup,
    MockMealRecognizer,
    MockTranscriber,
)
from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.meals import MealEntry
from calorie_tracker.domain.nutrition import MacroProfile
from calorie_tracker.domain.profile import DietPreferences, UserProfile
from calorie_tracker.domain.rag import VectorMatch, VectorRecord
from calorie_tracker.services.ingestion import IngestionService
from calorie_tracker.services.meal_plans import MealPlanService
from calorie_tracker.services.meals import MealLogService, MealRepository
from calorie_tracker.services.profile import ProfileRepository, ProfileService
from calorie_tracker.services.rag import (
    ChatClient,
    EmbeddingClient,
    RagService,
    VectorIndex,
)
from calorie_tracker.services.recognition import MealCaptureService


@dataclass
class FakeEmbeddingClient(EmbeddingClient):
    """Fake embedder returning short deterministic vectors."""

    dimension: int = 3
    failing_texts: set[str] = field(default_factory=set)
    calls: list[str] = field(default_factory=list)

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if any(marker in text for marker in self.failing_texts):
            raise RuntimeError("embedding service unavailable")
        return [float(len(text))] + [0.5] * (self.dimension - 1)


@dataclass
class FakeVectorIndex(VectorIndex):
    """Fake vector index that records upserts and serves fixed matches."""

    matches: list[VectorMatch] = field(default_factory=list)
    fail_query: bool = False
    failing_batches: set[int] = field(default_factory=set)
    upserts: list[tuple[list[VectorRecord], str]] = field(default_factory=list)
    queries: list[tuple[list[float], str, int]] = field(default_factory=list)
    dimensions: list[int] = field(default_factory=list)
    _upsert_calls: int = 0

    def ensure_collection(self, dimension: int) -> None:
        self.dimensions.append(dimension)

    def upsert(self, vectors: list[VectorRecord], namespace: str) -> None:
        self._upsert_calls += 1
        if self._upsert_calls in self.failing_batches:
            raise RuntimeError("upsert rejected")
        self.upserts.append((list(vectors), namespace))

    def query(
        self,
        vector: list[float],
        namespace: str,
        top_k: int,
        include_metadata: bool = True,
    ) -> list[VectorMatch]:
        self.queries.append((vector, namespace, top_k))
        if self.fail_query:
            raise RuntimeError("index unavailable")
        return self.matches[:top_k]


@dataclass
class FakeChatClient(ChatClient):
    """Fake chat client that records prompts."""

    reply: str = "Try a lentil soup."
    error: Exception | None = None
    prompts: list[tuple[str, float]] = field(default_factory=list)

    async def complete(self, prompt: str, temperature: float) -> str:
        self.prompts.append((prompt, temperature))
        if self.error is not None:
            raise self.error
        return self.reply


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, MealEntry] = field(default_factory=dict)

    def create_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        macros: MacroProfile,
        meal_type: str,
        logged_at: datetime,
        image_url: str | None,
    ) -> MealEntry:
        meal = MealEntry(
            id=uuid4(),
            user_id=user_id,
            name=name,
            calories=macros.calories,
            protein_g=macros.protein_g,
            carbs_g=macros.carbs_g,
            fat_g=macros.fat_g,
            meal_type=meal_type,
            logged_at=logged_at,
            image_url=image_url,
        )
        self.meals[meal.id] = meal
        return meal

    def add(self, meal: MealEntry) -> None:
        self.meals[meal.id] = meal

    def get_meal(self, meal_id: UUID) -> MealEntry | None:
        return self.meals.get(meal_id)

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealEntry]:
        return [
            meal
            for meal in self.meals.values()
            if meal.user_id == user_id and start <= meal.logged_at < end
        ]

    def delete_meal(self, meal_id: UUID) -> None:
        self.meals.pop(meal_id, None)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)
    preferences: dict[UUID, DietPreferences] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)

    def save_profile(self, profile: UserProfile) -> None:
        self.profiles[profile.user_id] = profile

    def get_preferences(self, user_id: UUID) -> DietPreferences | None:
        return self.preferences.get(user_id)

    def save_preferences(self, user_id: UUID, preferences: DietPreferences) -> None:
        self.preferences[user_id] = preferences


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="openai-key",
        qdrant_url="http://localhost:6333",
        qdrant_collection="food-nutrients",
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def embedding_client() -> FakeEmbeddingClient:
    return FakeEmbeddingClient()


@pytest.fixture
def vector_index() -> FakeVectorIndex:
    return FakeVectorIndex(
        matches=[
            VectorMatch(
                id="1",
                score=0.92,
                metadata={"text": "Lentil soup: 230 calories, 1g fat"},
            ),
            VectorMatch(
                id="2",
                score=0.81,
                metadata={"text": "Grilled salmon: 208 calories, 13g fat"},
            ),
        ]
    )


@pytest.fixture
def chat_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    embedding_client: FakeEmbeddingClient,
    vector_index: FakeVectorIndex,
    chat_client: FakeChatClient,
    meal_repository: InMemoryMealRepository,
    profile_repository: InMemoryProfileRepository,
) -> AppContainer:
    rag_service = RagService(
        embedding_client=embedding_client,
        vector_index=vector_index,
        chat_client=chat_client,
        top_k=settings.rag_top_k,
        temperature=settings.openai_temperature,
    )
    ingestion_service = IngestionService(
        embedding_client=embedding_client,
        vector_index=vector_index,
        batch_size=settings.ingest_batch_size,
    )
    meal_log_service = MealLogService(meal_repository)
    profile_service = ProfileService(
        repository=profile_repository,
        default_goal_calories=settings.default_goal_calories,
    )
    meal_plan_service = MealPlanService(
        profile_service=profile_service,
        meal_log_service=meal_log_service,
    )
    meal_capture_service = MealCaptureService(
        recognizer=MockMealRecognizer(),
        transcriber=MockTranscriber(),
        barcode_lookup=MockBarcodeLookup(),
        meal_log_service=meal_log_service,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        rag_service=rag_service,
        ingestion_service=ingestion_service,
        meal_log_service=meal_log_service,
        profile_service=profile_service,
        meal_plan_service=meal_plan_service,
        meal_capture_service=meal_capture_service,
        close_resources=close_resources,
    )
